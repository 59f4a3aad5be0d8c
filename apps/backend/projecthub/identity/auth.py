"""
===============================================================================
TARJETA CRC — identity/auth.py
===============================================================================

Módulo:
    Autenticación del caller (JWT Bearer)

Responsabilidades:
    - Decodificar y validar JWT de acceso (firma, exp, claim sub).
    - Resolver usuario actual (token -> user_id -> UserDirectory).
    - Exponer la dependencia FastAPI require_user().
    - Emitir tokens de acceso (helper para tests / desarrollo local).

Colaboradores:
    - crosscutting.config.get_settings: secreto y algoritmo.
    - crosscutting.error_responses: unauthorized/forbidden estándar.
    - crosscutting.logger: logging estructurado.
    - container.get_user_directory: lookup de perfiles.
    - projecthub.context: user_id para correlación de logs.

Decisiones de diseño:
    - La emisión "real" de tokens vive en el servicio de identidad; acá solo
      se verifica.
    - Claims mínimos: sub (UUID del usuario) y exp.
    - No loguear tokens; solo info mínima y segura.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

import jwt
from fastapi import Depends, Header, Request

from ..container import get_user_directory
from ..context import set_user_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.repositories import UserDirectory
from .users import UserProfile

CLAIM_SUB: str = "sub"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

DEFAULT_ACCESS_TTL_MINUTES = 60


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user_id: UUID,
    *,
    expires_in_minutes: int = DEFAULT_ACCESS_TTL_MINUTES,
    secret: str | None = None,
) -> str:
    """Crea un JWT de acceso firmado con el secreto de Settings."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, object] = {
        CLAIM_SUB: str(user_id),
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(minutes=expires_in_minutes)).timestamp()),
    }
    return jwt.encode(
        payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> UUID:
    """Decodifica y valida un JWT de acceso. Devuelve el user_id (sub).

    Errores:
        - 401 si expiró, la firma es inválida o falta/está mal el sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": [CLAIM_SUB, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.") from exc

    try:
        return UUID(str(payload.get(CLAIM_SUB)))
    except ValueError as exc:
        raise unauthorized("Token inválido.") from exc


def get_current_user(token: str, users: UserDirectory) -> UserProfile:
    """Resuelve el usuario actual a partir del access token."""
    user_id = decode_access_token(token)

    user = users.get_user(user_id)
    if user is None:
        logger.warning("Auth falló: usuario desconocido")
        raise unauthorized("Token inválido.")
    if not user.is_active:
        raise forbidden("El usuario está inactivo.")
    return user


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""

    def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        users: UserDirectory = Depends(get_user_directory),
    ) -> UserProfile:
        token = _extract_bearer_token(authorization)
        if not token:
            raise unauthorized("Falta token Bearer.")

        user = get_current_user(token, users)
        request.state.user = user
        set_user_context(str(user.id))
        return user

    return dependency
