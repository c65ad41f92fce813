"""Per-request identity context and the guard for routes that need it."""
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request

from api.features.users.identity import IdentityResolver
from api.shared.exceptions import Unauthenticated
from api.shared.models import RequestContext
from di.container import ApplicationContainer

SESSION_USER_KEY = "user_id"


def session_user_id(request: Request) -> Optional[str]:
    """The user identifier held by the request's session cookie, if any."""
    value = request.session.get(SESSION_USER_KEY)
    return str(value) if value is not None else None


@inject
async def get_request_context(
    request: Request,
    identity_resolver: IdentityResolver = Depends(
        Provide[ApplicationContainer.services.identity_resolver]
    ),
) -> RequestContext:
    """Resolve the session's user once per request.

    Registered as an application-wide dependency, so it runs for every route;
    FastAPI caches the result for any handler that also declares it.
    """
    user_id = session_user_id(request)
    user = await identity_resolver.resolve(user_id)
    return RequestContext(session_user_id=user_id, user=user)


async def require_identity(
    context: RequestContext = Depends(get_request_context),
) -> RequestContext:
    """Halt the request before the handler runs unless identity resolved."""
    if context.user is None:
        raise Unauthenticated()
    return context
