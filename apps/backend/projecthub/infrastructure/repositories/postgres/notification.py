"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/notification.py
============================================================
Class: PostgresNotificationRepository

Responsibilities:
- Persistir notificaciones (append-only) y su flag de lectura.
- Listar newest-first con limit/offset.
- Scope estricto por recipient en todas las mutaciones.

Collaborators:
- domain.entities.Notification, NotificationType
- postgres._base.PostgresRepositoryBase
- Tabla: notifications
============================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Notification, NotificationType
from ._base import PostgresRepositoryBase

_COLUMNS = "id, recipient_id, type, from_user_id, message, read, created_at"


class PostgresNotificationRepository(PostgresRepositoryBase):
    @staticmethod
    def _row_to_notification(row: tuple) -> Notification:
        (
            notification_id,
            recipient_id,
            notification_type,
            from_user_id,
            message,
            read,
            created_at,
        ) = row
        try:
            parsed_type = NotificationType(notification_type)
        except ValueError as exc:
            # Drift de datos: el tipo persistido no es válido
            raise DatabaseError(
                f"Invalid notification type stored: {notification_type!r}",
                original_error=exc,
            ) from exc
        return Notification(
            id=notification_id,
            recipient_id=recipient_id,
            type=parsed_type,
            from_user_id=from_user_id,
            message=message or "",
            read=bool(read),
            created_at=created_at,
        )

    def append(self, notification: Notification) -> Notification:
        row = self._fetchone(
            query=f"""
                INSERT INTO notifications (
                    id, recipient_id, type, from_user_id, message, read, created_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, COALESCE(%s, NOW()))
                RETURNING {_COLUMNS}
            """,
            params=[
                notification.id,
                notification.recipient_id,
                notification.type.value,
                notification.from_user_id,
                notification.message,
                notification.read,
                notification.created_at,
            ],
            context_msg="PostgresNotificationRepository: Failed to append notification",
            extra={"recipient_id": str(notification.recipient_id)},
        )
        if not row:
            raise DatabaseError(
                "PostgresNotificationRepository: Failed to append notification: no row returned"
            )
        return self._row_to_notification(row)

    def list_for_user(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        conditions = ["recipient_id = %s"]
        params: list[object] = [user_id]
        if unread_only:
            conditions.append("read = FALSE")
        params.extend([limit, offset])

        rows = self._fetchall(
            query=f"""
                SELECT {_COLUMNS}
                FROM notifications
                WHERE {" AND ".join(conditions)}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """,
            params=params,
            context_msg="PostgresNotificationRepository: Failed to list notifications",
            extra={"user_id": str(user_id)},
        )
        return [self._row_to_notification(r) for r in rows]

    def count_unread(self, user_id: UUID) -> int:
        row = self._fetchone(
            query="""
                SELECT COUNT(*) FROM notifications
                WHERE recipient_id = %s AND read = FALSE
            """,
            params=[user_id],
            context_msg="PostgresNotificationRepository: Failed to count unread",
            extra={"user_id": str(user_id)},
        )
        return int(row[0]) if row else 0

    def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        # R: True si existe para el usuario (aunque ya estuviera leída)
        row = self._fetchone(
            query="""
                UPDATE notifications
                SET read = TRUE
                WHERE id = %s AND recipient_id = %s
                RETURNING id
            """,
            params=[notification_id, user_id],
            context_msg="PostgresNotificationRepository: Failed to mark notification read",
            extra={"user_id": str(user_id), "notification_id": str(notification_id)},
        )
        return row is not None

    def mark_all_read(self, user_id: UUID) -> int:
        return self._execute(
            query="""
                UPDATE notifications
                SET read = TRUE
                WHERE recipient_id = %s AND read = FALSE
            """,
            params=[user_id],
            context_msg="PostgresNotificationRepository: Failed to mark all read",
            extra={"user_id": str(user_id)},
        )
