"""
razvivayka/services/user_service.py

Purpose: User data management

- Find-or-create users on /start and on API connect
- Read-modify-write settings changes
- Keeps lastActive current on every mutation
"""

import asyncio
from typing import Optional, List, Tuple, Any

from razvivayka.db.store import UserStore, find_user
from razvivayka.models.user import User
from razvivayka.core.logging import get_logger, LogContext

logger = get_logger(__name__)


async def list_users(store: UserStore) -> List[User]:
    """
    Loads every stored user.
    """
    return await asyncio.to_thread(store.load)


async def get_user(store: UserStore, user_id) -> Optional[User]:
    """
    Retrieves a user by ID.

    Args:
        store: User store
        user_id: Telegram user ID (str or int)

    Returns:
        User or None if not found
    """
    users = await list_users(store)
    return find_user(users, user_id)


async def register_chat_user(
    store: UserStore,
    user_id,
    chat_id: int,
    username: Optional[str] = None,
    first_name: Optional[str] = None,
) -> Tuple[User, bool]:
    """
    Completes the chat handshake for a user, creating the record if needed.

    Args:
        store: User store
        user_id: Telegram user ID
        chat_id: Chat to deliver reminders to
        username: Telegram username
        first_name: Telegram first name

    Returns:
        (user, created) tuple
    """
    with LogContext(user_id=str(user_id)):
        users = await list_users(store)
        user = find_user(users, user_id)
        created = user is None

        if created:
            user = User(
                user_id=user_id,
                chat_id=chat_id,
                username=username,
                first_name=first_name,
                has_started=True,
            )
            users.append(user)
            logger.info("Creating new user")
        else:
            user.chat_id = chat_id
            user.has_started = True
            if username:
                user.username = username
            if first_name:
                user.first_name = first_name
            user.touch()

        await asyncio.to_thread(store.save, users)
        return user, created


async def update_user(store: UserStore, user_id, **changes: Any) -> Optional[User]:
    """
    Applies field changes to an existing user and saves.

    Args:
        store: User store
        user_id: Telegram user ID
        **changes: Field names (snake_case) and new values

    Returns:
        Updated user, or None if the user does not exist
    """
    with LogContext(user_id=str(user_id)):
        users = await list_users(store)
        user = find_user(users, user_id)
        if user is None:
            logger.warning("Update for unknown user ignored")
            return None

        for field, value in changes.items():
            setattr(user, field, value)
        user.touch()

        await asyncio.to_thread(store.save, users)
        logger.info(f"User updated: {', '.join(sorted(changes))}")
        return user


async def toggle_notifications(store: UserStore, user_id) -> Optional[User]:
    """
    Flips the enabled flag.

    Returns:
        Updated user, or None if the user does not exist
    """
    users = await list_users(store)
    user = find_user(users, user_id)
    if user is None:
        return None
    return await update_user(store, user_id, enabled=not user.enabled)


async def connect_user(
    store: UserStore,
    user_id: str,
    username: Optional[str],
    time: str,
    reminder_type: str,
    timezone: Optional[str] = None,
) -> Tuple[User, bool]:
    """
    Creates or updates a user from the companion web app and enables reminders.

    Returns:
        (user, created) tuple
    """
    with LogContext(user_id=str(user_id)):
        users = await list_users(store)
        user = find_user(users, user_id)
        created = user is None

        if created:
            user = User(user_id=user_id, username=username)
            users.append(user)

        user.time = time
        user.reminder_type = reminder_type
        user.enabled = True
        if timezone:
            user.timezone = timezone
        if username:
            user.username = username
        user.touch()

        await asyncio.to_thread(store.save, users)
        logger.info(f"User connected from web app (created={created})")
        return user, created
