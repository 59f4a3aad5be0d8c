"""
===============================================================================
TARJETA CRC — projecthub/interfaces/api/http/routers/messages.py
===============================================================================

Module:
    Messages Router

Responsibilities:
    - Exponer endpoints HTTP de mensajería privada 1:1.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir MessagingError -> RFC7807.
    - Resolver el caller autenticado (JWT) en el borde.

Collaborators:
    - projecthub.application.usecases (messaging)
    - projecthub.identity.auth.require_user
    - projecthub.container (factories DI)
    - schemas.messages (DTOs Pydantic)

Endpoints:
    GET    /messages/conversations
    GET    /messages/conversation/{user_id}
    POST   /messages/send/{user_id}
    DELETE /messages/{message_id}
    GET    /messages/unread-count
===============================================================================
"""

from __future__ import annotations

from typing import Mapping
from uuid import UUID

from fastapi import APIRouter, Depends, status
from projecthub.application.usecases import (
    ConversationSummary,
    DeleteMessageUseCase,
    GetConversationThreadUseCase,
    GetUnreadCountUseCase,
    ListConversationsUseCase,
    SendMessageUseCase,
)
from projecthub.container import (
    get_conversation_thread_use_case,
    get_delete_message_use_case,
    get_list_conversations_use_case,
    get_send_message_use_case,
    get_unread_count_use_case,
)
from projecthub.domain.entities import Conversation, Message
from projecthub.identity.auth import require_user
from projecthub.identity.users import UserProfile

from ..error_mapping import raise_messaging_error
from ..schemas.messages import (
    ConversationRes,
    ConversationsListRes,
    ConversationSummaryRes,
    DeleteMessageRes,
    MessageRes,
    SendMessageReq,
    ThreadRes,
    UnreadCountRes,
    UserSummaryRes,
)

router = APIRouter(prefix="/messages", tags=["messages"])


# =============================================================================
# Mappers (puros / sin IO)
# =============================================================================


def _to_user_res(user: UserProfile | None) -> UserSummaryRes | None:
    if user is None:
        return None
    return UserSummaryRes(
        id=user.id,
        name=user.name,
        avatar_url=user.avatar_url,
        last_active_at=user.last_active_at,
    )


def _to_message_res(
    message: Message, profiles: Mapping[UUID, UserProfile] | None = None
) -> MessageRes:
    profiles = profiles or {}
    return MessageRes(
        id=message.id,
        conversation_id=message.conversation_id,
        sender_id=message.sender_id,
        receiver_id=message.receiver_id,
        content=message.content,
        read=message.read,
        read_at=message.read_at,
        created_at=message.created_at,
        sender=_to_user_res(profiles.get(message.sender_id)),
        receiver=_to_user_res(profiles.get(message.receiver_id)),
    )


def _to_conversation_res(conversation: Conversation) -> ConversationRes:
    return ConversationRes(
        id=conversation.id,
        participants=list(conversation.participants),
        last_message_id=conversation.last_message_id,
        last_message_at=conversation.last_message_at,
        created_at=conversation.created_at,
    )


def _to_summary_res(item: ConversationSummary) -> ConversationSummaryRes:
    return ConversationSummaryRes(
        conversation=_to_conversation_res(item.conversation),
        other_user=_to_user_res(item.other_user),
        last_message=_to_message_res(item.last_message) if item.last_message else None,
        unread_count=item.unread_count,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/conversations", response_model=ConversationsListRes)
def list_conversations(
    user: UserProfile = Depends(require_user()),
    use_case: ListConversationsUseCase = Depends(get_list_conversations_use_case),
):
    """Inbox del usuario: conversación más reciente primero."""
    result = use_case.execute(user.id)
    if result.error:
        raise_messaging_error(result.error, resource="Usuario")
    return ConversationsListRes(
        conversations=[_to_summary_res(item) for item in result.items]
    )


@router.get("/conversation/{user_id}", response_model=ThreadRes)
def get_conversation(
    user_id: UUID,
    user: UserProfile = Depends(require_user()),
    use_case: GetConversationThreadUseCase = Depends(
        get_conversation_thread_use_case
    ),
):
    """
    Hilo con otro usuario (lo crea si no existe).

    Efecto: marca como leídos los mensajes recibidos por el caller.
    """
    result = use_case.execute(user.id, user_id)
    if result.error:
        raise_messaging_error(result.error, resource="Usuario")
    return ThreadRes(
        conversation=_to_conversation_res(result.conversation),
        messages=[_to_message_res(m, result.participants) for m in result.messages],
    )


@router.post(
    "/send/{user_id}",
    response_model=MessageRes,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    user_id: UUID,
    req: SendMessageReq,
    user: UserProfile = Depends(require_user()),
    use_case: SendMessageUseCase = Depends(get_send_message_use_case),
):
    result = use_case.execute(user.id, user_id, req.content)
    if result.error:
        raise_messaging_error(result.error, resource="Usuario")

    profiles = {p.id: p for p in (result.sender, result.receiver) if p is not None}
    return _to_message_res(result.message, profiles)


@router.delete("/{message_id}", response_model=DeleteMessageRes)
def delete_message(
    message_id: UUID,
    user: UserProfile = Depends(require_user()),
    use_case: DeleteMessageUseCase = Depends(get_delete_message_use_case),
):
    """Solo el sender puede borrar su mensaje."""
    result = use_case.execute(user.id, message_id)
    if result.error:
        raise_messaging_error(result.error, resource="Mensaje")
    return DeleteMessageRes(deleted=result.deleted)


@router.get("/unread-count", response_model=UnreadCountRes)
def unread_count(
    user: UserProfile = Depends(require_user()),
    use_case: GetUnreadCountUseCase = Depends(get_unread_count_use_case),
):
    result = use_case.execute(user.id)
    if result.error:
        raise_messaging_error(result.error, resource="Usuario")
    return UnreadCountRes(unread_count=result.unread_count)
