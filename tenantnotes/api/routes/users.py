from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from tenantnotes.api.dependencies import get_user_service, parse_resource_id
from tenantnotes.core.services import UserService
from tenantnotes.schemas.common import MessageResponse
from tenantnotes.schemas.user import UserInviteRequest, UserResponse, UserUpdateRequest

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    users: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in await users.list(limit=limit, offset=offset)]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def invite_user(
    payload: UserInviteRequest,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await users.invite(
        email=payload.email,
        password=payload.password,
        role=payload.role,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await users.get(parse_resource_id(user_id))
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    payload: UserUpdateRequest,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await users.update(
        parse_resource_id(user_id),
        email=payload.email,
        role=payload.role,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    await users.delete(parse_resource_id(user_id))
    return MessageResponse(message="User deleted successfully")
