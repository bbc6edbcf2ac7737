"""
Business logic for users.

The ``UserService`` stores users in process memory and provides the
basic CRUD operations.  Records are lost when the process exits.  An
absent user is never an error at this level: lookups and updates
return ``None`` and deletes return ``False``, and the API layer decides
which HTTP status that maps to.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from ..schemas.user import User

logger = logging.getLogger(__name__)

SAMPLE_USERS = (
    {"id": "1", "name": "John Doe", "email": "john@example.com", "role": "Admin"},
    {"id": "2", "name": "Jane Smith", "email": "jane@example.com", "role": "User"},
    {"id": "3", "name": "Bob Johnson", "email": "bob@example.com", "role": "User"},
)

UPDATABLE_FIELDS = ("name", "email", "role")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ISO‑8601 UTC with milliseconds, e.g.
    ``2026-10-19T08:15:30.123Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UserService:
    """In‑memory owner of the user records.

    Records live in a dict keyed by id, which keeps insertion order for
    listing.  Callers only ever receive copies, so the canonical records
    can change only through the methods below.  Every operation holds a
    single lock, which keeps lookup‑then‑mutate sequences atomic when
    handlers run in a threadpool.

    Identifiers come from a monotonic counter rendered as a decimal
    string.  The counter is bumped past any numeric id already present
    (e.g. the seeded ``"1"``..``"3"``) so an id is never issued twice
    during the life of the process.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        self._last_id = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def seed_sample_users(self) -> None:
        """Load the sample users the directory starts with.

        Only valid on an empty store, since the sample ids would
        otherwise replace live records.  Raises ``ValueError`` if any
        user exists.
        """
        created_at = format_timestamp(self._clock())
        with self._lock:
            if self._users:
                raise ValueError("Sample users can only be loaded into an empty store")
            for sample in SAMPLE_USERS:
                self._users[sample["id"]] = User(created_at=created_at, **sample)
                self._reserve_id(sample["id"])
        logger.info("Seeded %d sample users", len(SAMPLE_USERS))

    def reset(self, seed: bool = False) -> None:
        """Drop every record, optionally reloading the sample users.

        The id counter is not rewound, so ids issued by ``create``
        before the reset are not reused afterwards.
        """
        with self._lock:
            self._users.clear()
        if seed:
            self.seed_sample_users()

    def _reserve_id(self, user_id: str) -> None:
        if user_id.isdigit():
            self._last_id = max(self._last_id, int(user_id))

    def _next_id(self) -> str:
        self._last_id += 1
        while str(self._last_id) in self._users:
            self._last_id += 1
        return str(self._last_id)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def list_all(self) -> List[User]:
        """Return copies of all users in insertion order."""
        with self._lock:
            return [user.model_copy() for user in self._users.values()]

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Return a copy of the user with ``user_id`` or ``None``."""
        if not user_id:
            return None
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user is not None else None

    def create(self, name: str, email: str, role: str) -> User:
        """Create a user and return it.

        Presence of the fields is checked by the caller; the service
        stores whatever it is given.
        """
        created_at = format_timestamp(self._clock())
        with self._lock:
            user = User(
                id=self._next_id(),
                name=name,
                email=email,
                role=role,
                created_at=created_at,
            )
            self._users[user.id] = user
        logger.info("Created user %s (%s)", user.id, user.email)
        return user.model_copy()

    def update(self, user_id: str, changes: dict) -> Optional[User]:
        """Apply ``changes`` to a user and return the updated record.

        Only ``name``, ``email`` and ``role`` are taken from
        ``changes``; any other key is ignored, so ``id`` and
        ``createdAt`` cannot be overwritten.  Returns ``None`` without
        touching anything if the user does not exist.
        """
        if not user_id:
            return None
        updates = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            if updates:
                user = user.model_copy(update=updates)
                self._users[user_id] = user
        if updates:
            logger.info("Updated user %s: %s", user_id, ", ".join(sorted(updates)))
        return user.model_copy()

    def delete(self, user_id: str) -> bool:
        """Remove a user.  Returns ``False`` if there was nothing to remove."""
        if not user_id:
            return False
        with self._lock:
            removed = self._users.pop(user_id, None)
        if removed is None:
            return False
        logger.info("Deleted user %s", user_id)
        return True
