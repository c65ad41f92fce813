"""Router for the Messages feature."""
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from api.features.messages.controller import MessagingController
from api.features.messages.dtos import ConversationListResponse, ConversationViewResponse
from api.shared.context import require_identity, session_user_id
from api.shared.models import RequestContext
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()


@router.get("", response_model=ResponseModel[ConversationListResponse])
@inject
async def list_conversations(
    context: RequestContext = Depends(require_identity),
    controller: MessagingController = Depends(
        Provide[DependencyContainer.controllers.messaging_controller]
    ),
):
    """Conversations of the logged-in user, most recent first."""
    result = await controller.list_conversations(context)
    return ResponseModel.success(data=result, message="Conversations listed")


@router.get("/{other_id}", response_model=ResponseModel[ConversationViewResponse])
@inject
async def open_conversation(
    other_id: str,
    context: RequestContext = Depends(require_identity),
    controller: MessagingController = Depends(
        Provide[DependencyContainer.controllers.messaging_controller]
    ),
):
    """Participants of the conversation with ``other_id``."""
    result = await controller.open_conversation(context, other_id)
    return ResponseModel.success(data=result, message="Conversation opened")


# Not guarded: the sender comes straight from the session cookie.
@router.post("/{other_id}")
@inject
async def send_message(
    request: Request,
    other_id: str,
    message: str = Form(...),
    controller: MessagingController = Depends(
        Provide[DependencyContainer.controllers.messaging_controller]
    ),
):
    """Send ``message`` to ``other_id`` and go back to the conversation."""
    sender_id: Optional[str] = session_user_id(request)
    await controller.send_message(sender_id, other_id, message)
    return RedirectResponse(url=f"/messages/{other_id}", status_code=302)
