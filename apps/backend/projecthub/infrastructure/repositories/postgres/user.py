"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserDirectory

Responsibilities:
  - Leer perfiles públicos desde `users` (tabla del servicio de identidad).
  - Batch lookup con id = ANY(%s::uuid[]).

Collaborators:
  - identity.users.UserProfile
  - postgres._base.PostgresRepositoryBase

Constraints / Notes:
  - Solo lectura: este servicio NO escribe usuarios.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from ....identity.users import UserProfile
from ._base import PostgresRepositoryBase

_USER_COLUMNS = "id, name, avatar_url, last_active_at, is_active"


class PostgresUserDirectory(PostgresRepositoryBase):
    @staticmethod
    def _row_to_user(row: tuple) -> UserProfile:
        user_id, name, avatar_url, last_active_at, is_active = row
        return UserProfile(
            id=user_id,
            name=name,
            avatar_url=avatar_url,
            last_active_at=last_active_at,
            is_active=bool(is_active),
        )

    def get_user(self, user_id: UUID) -> Optional[UserProfile]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=[user_id],
            context_msg="PostgresUserDirectory: Failed to get user",
            extra={"user_id": str(user_id)},
        )
        return None if not row else self._row_to_user(row)

    def get_users(self, user_ids: Iterable[UUID]) -> dict[UUID, UserProfile]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}

        rows = self._fetchall(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = ANY(%s::uuid[])",
            params=[ids],
            context_msg="PostgresUserDirectory: Failed to get users",
            extra={"count": len(ids)},
        )
        users = [self._row_to_user(r) for r in rows]
        return {u.id: u for u in users}
