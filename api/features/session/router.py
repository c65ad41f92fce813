"""Routers for starting and ending a cookie session.

``login_router`` starts a session without checking credentials and is only
mounted in the local and dev environments.
"""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from api.features.users.identity import IdentityResolver
from api.shared.context import SESSION_USER_KEY
from api.shared.exceptions import NotFoundError
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
login_router = APIRouter()


@login_router.get("/login/{user_id}")
@inject
async def login(
    request: Request,
    user_id: str,
    identity_resolver: IdentityResolver = Depends(
        Provide[DependencyContainer.services.identity_resolver]
    ),
):
    """Attach ``user_id`` to the session. No credentials are checked."""
    user = await identity_resolver.resolve(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    request.session[SESSION_USER_KEY] = user.id
    return RedirectResponse(url="/", status_code=302)


@router.get("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/", status_code=302)
