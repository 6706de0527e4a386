import logging
from http import HTTPStatus
from fastapi import APIRouter, Depends, Query, Response

from filmorate_api.dependencies import get_film_service
from filmorate_api.models.errors import ErrorResponse
from filmorate_api.models.films import Film
from filmorate_api.services.film_service import (
    DEFAULT_POPULAR_COUNT,
    FilmService,
)

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/films",
    tags=["films"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

LIKE_PATH = "/{film_id}/like/{user_id}"


@router.get("", response_model=list[Film], status_code=HTTPStatus.OK)
async def list_films(svc: FilmService = Depends(get_film_service)):
    films = await svc.list_films()
    log.info("films_listed", extra={"count": len(films)})
    return films


# /popular объявлен до /{film_id}, иначе «popular» уйдёт в path-параметр
@router.get("/popular", response_model=list[Film], status_code=HTTPStatus.OK)
async def popular_films(
    count: int = Query(DEFAULT_POPULAR_COUNT),
    svc: FilmService = Depends(get_film_service),
):
    return await svc.get_popular(count)


@router.get("/{film_id}", response_model=Film, status_code=HTTPStatus.OK)
async def get_film(
    film_id: int,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.get_film(film_id)


@router.post("", response_model=Film, status_code=HTTPStatus.OK)
async def create_film(
    body: Film,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.create_film(body)


@router.put("", response_model=Film, status_code=HTTPStatus.OK)
async def update_film(
    body: Film,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.update_film(body)


@router.delete("/{film_id}", status_code=HTTPStatus.OK)
async def delete_film(
    film_id: int,
    svc: FilmService = Depends(get_film_service),
) -> Response:
    await svc.delete_film(film_id)
    return Response(status_code=HTTPStatus.OK)


@router.put(LIKE_PATH, status_code=HTTPStatus.OK)
async def add_like(
    film_id: int,
    user_id: int,
    svc: FilmService = Depends(get_film_service),
) -> Response:
    await svc.add_like(film_id, user_id)
    return Response(status_code=HTTPStatus.OK)


@router.delete(LIKE_PATH, status_code=HTTPStatus.OK)
async def remove_like(
    film_id: int,
    user_id: int,
    svc: FilmService = Depends(get_film_service),
) -> Response:
    await svc.remove_like(film_id, user_id)
    return Response(status_code=HTTPStatus.OK)
