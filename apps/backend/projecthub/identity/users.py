"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelo de usuario visto por mensajería (perfil público)

Responsabilidades:
    - Definir la “forma” mínima del usuario que consume el core:
      id, nombre, avatar, última actividad.

Colaboradores:
    - domain.repositories.UserDirectory (lookup)
    - interfaces/api (datos de display en mensajes y conversaciones)

Notas:
    - Este módulo NO contiene lógica de negocio: solo “shapes” de datos.
    - El registro/autenticación vive en el servicio de identidad (fuera de scope).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Perfil público de un usuario (display en mensajería)."""

    id: UUID
    name: str
    avatar_url: str | None = None
    last_active_at: datetime | None = None
    is_active: bool = True
