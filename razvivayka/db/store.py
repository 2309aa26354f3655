"""
razvivayka/db/store.py

Purpose: JSON file user store

- Loads the full user list from DATA_FILE
- Saves atomically (temp file + rename)
- Corrupt or unreadable data degrades to an empty list
- Records that fail validation survive later saves untouched
- Persisted shape: {"users": [...], "notifications": []}
"""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from razvivayka.core.exceptions import StorageError
from razvivayka.core.logging import get_logger
from razvivayka.models.user import User

logger = get_logger(__name__)


class UserStore:
    """
    Flat-file store for user records.

    Every call reads or writes the whole file; there is no partial update.
    Concurrent writers race and the last save wins.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> Tuple[List[User], List[dict]]:
        """
        Reads the data file.

        Returns:
            (users, unparseable) where unparseable holds raw records that
            failed validation; both empty if the file is missing or corrupt
        """
        if not self.path.exists():
            return [], []

        try:
            with self.path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"❌ Failed to read user store {self.path}: {e}")
            return [], []

        if not isinstance(payload, dict) or not isinstance(payload.get("users", []), list):
            logger.error(f"❌ Unexpected user store layout in {self.path}")
            return [], []

        users = []
        unparseable = []
        for raw in payload.get("users", []):
            try:
                users.append(User.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(f"⚠️ Skipping malformed user record: {e.error_count()} error(s)")
                unparseable.append(raw)

        return users, unparseable

    def load(self) -> List[User]:
        """
        Reconstructs the last saved set of users.

        Returns:
            List of users, empty if the file is missing or corrupt
        """
        if not self.path.exists():
            logger.info(f"No data file at {self.path}, starting empty")
            return []
        users, _ = self._read()
        return users

    def save(self, users: List[User]):
        """
        Persists the full user list.

        Records on disk that failed validation are written back unchanged,
        unless a valid user with the same id replaces them.

        Writes to a temporary file next to the target and renames it over
        the target so a crash never leaves a truncated file.

        Raises:
            StorageError: If the file cannot be written
        """
        records = [user.to_record() for user in users]
        saved_ids = {user.user_id for user in users}
        _, unparseable = self._read()
        for raw in unparseable:
            raw_id = raw.get("userId") if isinstance(raw, dict) else None
            if raw_id is None or str(raw_id) not in saved_ids:
                records.append(raw)

        payload = {
            "users": records,
            "notifications": [],
        }

        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=str(self.path.parent),
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"❌ Failed to write user store {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError("Failed to save users", details=str(e)) from e

        logger.debug(f"Saved {len(users)} user(s) to {self.path}")

    def is_readable(self) -> bool:
        """
        Health probe: True if the data file is absent or parses as JSON.
        """
        if not self.path.exists():
            return True
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                json.load(fh)
            return True
        except (OSError, json.JSONDecodeError):
            return False

    def flush(self):
        """
        Called on shutdown. Every mutation is saved immediately, so there
        is nothing buffered; logged so shutdown ordering is visible.
        """
        logger.info(f"User store flushed ({self.path})")


def find_user(users: List[User], user_id) -> Optional[User]:
    """
    Finds a user by id in a loaded list.
    """
    user_id = str(user_id)
    for user in users:
        if user.user_id == user_id:
            return user
    return None
