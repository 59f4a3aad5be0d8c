"""
===============================================================================
TARJETA CRC — domain/pairing.py
===============================================================================

Módulo:
    Resolución de identidad de conversación (par no ordenado de usuarios)

Responsabilidades:
    - Producir una clave canónica e independiente del orden para un par de
      usuarios.

Colaboradores:
    - domain.entities.Conversation (participants en orden canónico)
    - infrastructure.repositories.* (lookup/unique constraint por par)

Reglas:
    - Función pura, sin IO.
    - UUID se ordena por su valor entero, igual que el tipo uuid de Postgres.
===============================================================================
"""

from __future__ import annotations

from typing import Tuple
from uuid import UUID

PairKey = Tuple[UUID, UUID]


def pair_key(user_a: UUID, user_b: UUID) -> PairKey:
    """Devuelve (menor, mayor): pair_key(a, b) == pair_key(b, a)."""
    if user_b < user_a:
        return (user_b, user_a)
    return (user_a, user_b)
