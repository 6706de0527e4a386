from http import HTTPStatus
from fastapi import APIRouter, Depends

from filmorate_api.dependencies import get_genres_repo, get_mpa_repo
from filmorate_api.models.errors import ErrorResponse
from filmorate_api.models.reference import Genre, MpaRating
from filmorate_api.services.repositories.base import ReferenceRepo

router = APIRouter(
    tags=["reference"],
    responses={404: {"model": ErrorResponse}},
)


@router.get("/genres", response_model=list[Genre], status_code=HTTPStatus.OK)
async def list_genres(
    repo: ReferenceRepo[Genre] = Depends(get_genres_repo),
):
    return await repo.find_all()


@router.get("/genres/{genre_id}",
            response_model=Genre,
            status_code=HTTPStatus.OK)
async def get_genre(
    genre_id: int,
    repo: ReferenceRepo[Genre] = Depends(get_genres_repo),
):
    return await repo.find_by_id(genre_id)


@router.get("/mpa", response_model=list[MpaRating], status_code=HTTPStatus.OK)
async def list_mpa(
    repo: ReferenceRepo[MpaRating] = Depends(get_mpa_repo),
):
    return await repo.find_all()


@router.get("/mpa/{mpa_id}",
            response_model=MpaRating,
            status_code=HTTPStatus.OK)
async def get_mpa(
    mpa_id: int,
    repo: ReferenceRepo[MpaRating] = Depends(get_mpa_repo),
):
    return await repo.find_by_id(mpa_id)
