"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir MessagingErrorCode a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - VALIDATION_ERROR -> 422
  - NOT_FOUND        -> 404
  - FORBIDDEN        -> 403

Colaboradores:
  - application.usecases.messaging (MessagingError)
  - crosscutting.error_responses (validation_error, forbidden, not_found)
===============================================================================
"""

from __future__ import annotations

from projecthub.application.usecases import MessagingError, MessagingErrorCode
from projecthub.crosscutting.error_responses import (
    forbidden,
    internal_error,
    not_found,
    validation_error,
)


def raise_messaging_error(error: MessagingError, *, resource: str) -> None:
    """
    Traduce MessagingError -> HTTP.

    resource: nombre del recurso para el detail de NOT_FOUND
    (ej: "Usuario", "Mensaje", "Notificación").
    """
    if error.code == MessagingErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == MessagingErrorCode.NOT_FOUND:
        raise not_found(resource, error.resource or "-")
    if error.code == MessagingErrorCode.FORBIDDEN:
        raise forbidden(error.message)

    # Fallback (no debería ocurrir)
    raise internal_error(error.message)


__all__ = ["raise_messaging_error"]
