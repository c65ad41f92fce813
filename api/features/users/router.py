"""Router for the Users feature."""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query

from api.features.users.dtos import UserDTO
from api.features.users.service import UserService
from api.shared.dtos import PaginationResponse
from api.shared.exceptions import NotFoundError
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()


@router.get("/", response_model=ResponseModel[PaginationResponse[UserDTO]])
@inject
async def list_users(
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    user_service: UserService = Depends(
        Provide[DependencyContainer.services.user_service]
    ),
):
    users, total = await user_service.list_users(offset=offset, limit=limit)
    page = PaginationResponse[UserDTO](
        items=[UserDTO.from_model(u) for u in users],
        total=total,
        offset=offset,
        limit=limit,
        has_next=offset + len(users) < total,
    )
    return ResponseModel.success(data=page, message="Users listed")


@router.get("/{user_id}", response_model=ResponseModel[UserDTO])
@inject
async def get_user(
    user_id: str,
    user_service: UserService = Depends(
        Provide[DependencyContainer.services.user_service]
    ),
):
    user = await user_service.get_user(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return ResponseModel.success(data=UserDTO.from_model(user), message="User fetched")
