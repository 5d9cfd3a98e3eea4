# session.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List

from domain import RateSchedule, User

logger = logging.getLogger(__name__)

SessionListener = Callable[["User | None"], None]


class UserSession:
    """
    Who is signed in right now. Authentication itself happens elsewhere; this
    only holds the resolved user and tells subscribers when it changes.
    Until a user is resolved the session reads as signed out.
    """
    def __init__(self, user: User | None = None):
        self._user = user
        self._listeners: List[SessionListener] = []

    @property
    def current_user(self) -> User | None:
        return self._user

    @property
    def schedule(self) -> RateSchedule | None:
        if self._user is None:
            return None
        return RateSchedule.from_hourly_rate(self._user.hourly_rate)

    def subscribe(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def sign_in(self, user: User) -> None:
        if user.hourly_rate <= 0:
            raise ValueError("hourly_rate must be positive")
        logger.info("Signed in user=%s", user.id)
        self._set(user)

    def sign_out(self) -> None:
        if self._user is not None:
            logger.info("Signed out user=%s", self._user.id)
        self._set(None)

    def update_user(self, **changes) -> None:
        """Profile edits such as a new hourly rate. Ignored when signed out."""
        if self._user is None:
            return
        if "id" in changes:
            raise ValueError("User id cannot change")
        updated = replace(self._user, **changes)
        if updated.hourly_rate <= 0:
            raise ValueError("hourly_rate must be positive")
        self._set(updated)

    def _set(self, user: User | None) -> None:
        self._user = user
        for listener in list(self._listeners):
            listener(user)
