"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserDirectory

Responsibilities:
  - Directorio de usuarios en memoria (tests / local dev).
  - Permitir "seed" de perfiles (add_user).

Collaborators:
  - identity.users.UserProfile
  - domain.repositories.UserDirectory
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Iterable, Optional
from uuid import UUID

from ....identity.users import UserProfile


class InMemoryUserDirectory:
    def __init__(self, users: Iterable[UserProfile] = ()) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, UserProfile] = {u.id: u for u in users}

    def add_user(self, user: UserProfile) -> UserProfile:
        with self._lock:
            self._users[user.id] = user
        return user

    def get_user(self, user_id: UUID) -> Optional[UserProfile]:
        with self._lock:
            return self._users.get(user_id)

    def get_users(self, user_ids: Iterable[UUID]) -> Dict[UUID, UserProfile]:
        wanted = set(user_ids)
        with self._lock:
            return {uid: u for uid, u in self._users.items() if uid in wanted}
