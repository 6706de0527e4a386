from http import HTTPStatus
from fastapi import APIRouter, Depends, Response

from filmorate_api.dependencies import get_user_service
from filmorate_api.models.errors import ErrorResponse
from filmorate_api.models.users import User
from filmorate_api.services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

FRIEND_PATH = "/{user_id}/friends/{friend_id}"


@router.get("", response_model=list[User], status_code=HTTPStatus.OK)
async def list_users(svc: UserService = Depends(get_user_service)):
    return await svc.list_users()


@router.get("/{user_id}", response_model=User, status_code=HTTPStatus.OK)
async def get_user(
    user_id: int,
    svc: UserService = Depends(get_user_service),
):
    return await svc.get_user(user_id)


@router.post("", response_model=User, status_code=HTTPStatus.OK)
async def create_user(
    body: User,
    svc: UserService = Depends(get_user_service),
):
    return await svc.create_user(body)


@router.put("", response_model=User, status_code=HTTPStatus.OK)
async def update_user(
    body: User,
    svc: UserService = Depends(get_user_service),
):
    return await svc.update_user(body)


@router.delete("/{user_id}", status_code=HTTPStatus.OK)
async def delete_user(
    user_id: int,
    svc: UserService = Depends(get_user_service),
) -> Response:
    await svc.delete_user(user_id)
    return Response(status_code=HTTPStatus.OK)


@router.put(FRIEND_PATH, status_code=HTTPStatus.OK)
async def add_friend(
    user_id: int,
    friend_id: int,
    svc: UserService = Depends(get_user_service),
) -> Response:
    await svc.add_friend(user_id, friend_id)
    return Response(status_code=HTTPStatus.OK)


@router.delete(FRIEND_PATH, status_code=HTTPStatus.OK)
async def remove_friend(
    user_id: int,
    friend_id: int,
    svc: UserService = Depends(get_user_service),
) -> Response:
    await svc.remove_friend(user_id, friend_id)
    return Response(status_code=HTTPStatus.OK)


@router.get("/{user_id}/friends",
            response_model=list[User],
            status_code=HTTPStatus.OK)
async def list_friends(
    user_id: int,
    svc: UserService = Depends(get_user_service),
):
    return await svc.get_friends(user_id)


@router.get("/{user_id}/friends/common/{other_id}",
            response_model=list[User],
            status_code=HTTPStatus.OK)
async def common_friends(
    user_id: int,
    other_id: int,
    svc: UserService = Depends(get_user_service),
):
    return await svc.get_common_friends(user_id, other_id)
