"""Session stub — fabricated users kept in a local storage slot.

There is no credential check: login and signup wait a simulated delay and
always succeed.  The session record lives as a JSON string under a single
key, the way a browser keeps it in ``localStorage``.
"""

import asyncio
import json
import logging
import time
from dataclasses import asdict, dataclass
from typing import Callable, Optional

logger = logging.getLogger("stocktrend.auth")

SESSION_KEY = "stockpredict_user"


@dataclass(frozen=True)
class User:
    """The session record."""

    id: str
    email: str
    name: str


class LocalStorage:
    """In-process string-keyed slots holding string values."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SessionStore:
    """Login / signup / logout against a ``LocalStorage`` slot.

    Args:
        storage: Where the serialized ``User`` is kept.
        delay_seconds: Simulated round-trip before login/signup complete.
        clock: Wall-clock source used to mint user ids (epoch seconds).
    """

    def __init__(
        self,
        storage: Optional[LocalStorage] = None,
        delay_seconds: float = 1.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage if storage is not None else LocalStorage()
        self._delay = delay_seconds
        self._clock = clock

    async def login(self, email: str, password: str) -> User:
        """Accept any credentials; the display name is the email's local part."""
        return await self._start_session(email, email.split("@")[0])

    async def signup(self, email: str, password: str, name: str) -> User:
        """Accept any input and start a session under *name*."""
        return await self._start_session(email, name)

    def logout(self) -> None:
        self._storage.remove_item(SESSION_KEY)
        logger.info("Session cleared")

    def current_user(self) -> Optional[User]:
        """Return the stored user, or ``None`` when logged out."""
        raw = self._storage.get_item(SESSION_KEY)
        if raw is None:
            return None
        return User(**json.loads(raw))

    async def _start_session(self, email: str, name: str) -> User:
        if self._delay > 0:
            await asyncio.sleep(self._delay)
        user = User(id=str(int(self._clock() * 1000)), email=email, name=name)
        self._storage.set_item(SESSION_KEY, json.dumps(asdict(user)))
        logger.info("Session started for %s", email)
        return user
