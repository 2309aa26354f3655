"""
razvivayka/utils/message_utils.py

Purpose: Reminder message selection

- Resolves a reminder type to its catalog entry (with fallback)
- Picks one message uniformly at random
"""

import random
from typing import List, Optional

from razvivayka.utils.constants import REMINDER_MESSAGES, REMINDER_TYPES, DEFAULT_REMINDER_TYPE


def get_messages_for_type(reminder_type: Optional[str]) -> List[str]:
    """
    Returns candidate messages for a reminder type.
    Unknown types fall back to the motivational set.
    """
    return REMINDER_MESSAGES.get(reminder_type, REMINDER_MESSAGES[DEFAULT_REMINDER_TYPE])


def pick_message(reminder_type: Optional[str], rng: Optional[random.Random] = None) -> str:
    """
    Picks one reminder message for the given type.

    Args:
        reminder_type: Catalog key
        rng: Optional random source (tests pass a seeded one)
    """
    chooser = rng or random
    return chooser.choice(get_messages_for_type(reminder_type))


def type_label(reminder_type: Optional[str]) -> str:
    """
    Human-readable label for a reminder type.
    """
    return REMINDER_TYPES.get(reminder_type, REMINDER_TYPES[DEFAULT_REMINDER_TYPE])
