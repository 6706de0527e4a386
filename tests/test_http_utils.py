import json
from http import HTTPStatus

from fastapi.exceptions import RequestValidationError
from starlette.requests import Request

from filmorate_api.api.http_utils import (
    EMPTY_BODY_MESSAGE,
    category_for_status,
    describe_request_error,
    error_body,
    filmorate_error_handler,
    status_for,
    unhandled_error_handler,
)
from filmorate_api.core.exceptions import (
    DuplicatedDataError,
    FilmorateError,
    NotFoundError,
    ValidationError,
)


def fake_request(path: str = "/films") -> Request:
    return Request({"type": "http", "method": "GET", "path": path,
                    "headers": [], "query_string": b""})


def test_status_for_each_error_kind():
    assert status_for(ValidationError("x")) == HTTPStatus.BAD_REQUEST
    assert status_for(NotFoundError("x")) == HTTPStatus.NOT_FOUND
    assert status_for(DuplicatedDataError("x")) == HTTPStatus.BAD_REQUEST
    assert status_for(FilmorateError("x")) == \
        HTTPStatus.INTERNAL_SERVER_ERROR


def test_error_body_shape():
    assert error_body("Not found", "gone") == {"error": "Not found",
                                               "message": "gone"}


def test_describe_missing_body_uses_fixed_message():
    exc = RequestValidationError(
        [{"type": "missing", "loc": ("body",), "msg": "Field required"}])
    assert describe_request_error(exc) == EMPTY_BODY_MESSAGE


def test_describe_field_error_names_the_field():
    exc = RequestValidationError(
        [{"type": "int_parsing", "loc": ("body", "duration"),
          "msg": "Input should be a valid integer"}])
    assert describe_request_error(exc) == \
        "duration: Input should be a valid integer"


async def test_filmorate_error_handler_renders_category():
    response = await filmorate_error_handler(
        fake_request(), DuplicatedDataError("Email a@b.com is already in use"))
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert json.loads(response.body) == {
        "error": "Duplicated data",
        "message": "Email a@b.com is already in use",
    }


async def test_unhandled_error_maps_to_500():
    response = await unhandled_error_handler(fake_request(),
                                             RuntimeError("boom"))
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert json.loads(response.body) == {"error": "Internal server error",
                                         "message": "boom"}


async def test_response_carries_request_id(client):
    r = await client.get("/health", headers={"X-Request-Id": "abc123"})
    assert r.headers["X-Request-Id"] == "abc123"

    r = await client.get("/health")
    assert r.headers["X-Request-Id"]


def test_category_for_framework_statuses():
    assert category_for_status(404) == "Not found"
    assert category_for_status(405) == "Validation error"
    assert category_for_status(503) == "Internal server error"


async def test_unknown_route_and_wrong_method_use_error_body(client):
    r = await client.get("/no-such-route")
    assert r.status_code == HTTPStatus.NOT_FOUND
    assert r.json() == {"error": "Not found", "message": "Not Found"}

    r = await client.patch("/films")
    assert r.status_code == HTTPStatus.METHOD_NOT_ALLOWED
    assert r.json() == {"error": "Validation error",
                        "message": "Method Not Allowed"}
    assert "GET" in r.headers["allow"]
