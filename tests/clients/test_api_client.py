# tests/clients/test_api_client.py
import json

import httpx
import pytest

from bookreviewhub.clients.api import BookReviewClient
from bookreviewhub.core.exceptions import (
    AddBookError,
    AuthError,
    DeleteBookError,
    DeleteReviewError,
    FetchError,
    RegistrationError,
    SubmitError,
)
from bookreviewhub.schemas.book import BookCreate

BOOKS_PAYLOAD = [
    {"id": 1, "title": "Dune", "author": "Frank Herbert", "description": "Desert planet."},
    {"id": 2, "title": "Emma", "author": "Jane Austen", "description": "Matchmaking.", "image_url": "http://img/2.png"},
]

REVIEWS_PAYLOAD = [
    {
        "id": 10,
        "book_id": 1,
        "user_id": 3,
        "user_name": "carol",
        "rating": 4,
        "content": "Loved it",
        "timestamp": "2024-03-01T10:00:00Z",
    },
]


@pytest.mark.asyncio
async def test_login_returns_token_and_user(mock_backend, recorded_requests):
    """Test login parses the token and user payload."""
    client = mock_backend({
        ("POST", "/login"): httpx.Response(
            200,
            json={"token": "abc", "user": {"id": 5, "name": "Eve", "email": "eve@example.com", "is_admin": True}},
        ),
    })

    result = await client.login("eve@example.com", "pw")

    assert result.token == "abc"
    assert result.user.id == 5
    assert result.user.is_admin is True
    assert json.loads(recorded_requests[0].content) == {"email": "eve@example.com", "password": "pw"}
    assert "Authorization" not in recorded_requests[0].headers


@pytest.mark.asyncio
async def test_login_bad_credentials_raises_auth_error(mock_backend):
    client = mock_backend({("POST", "/login"): httpx.Response(401, json={"detail": "bad credentials"})})

    with pytest.raises(AuthError) as exc_info:
        await client.login("eve@example.com", "wrong")

    assert exc_info.value.message == "Failed to login"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_login_unreachable_raises_same_auth_error(mock_backend):
    """Transport failures and rejected credentials surface as the same error kind."""
    client = mock_backend({("POST", "/login"): httpx.ConnectError("connection refused")})

    with pytest.raises(AuthError) as exc_info:
        await client.login("eve@example.com", "pw")

    assert exc_info.value.message == "Failed to login"
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_login_malformed_body_raises_auth_error(mock_backend):
    client = mock_backend({("POST", "/login"): httpx.Response(200, json={"token": "abc"})})

    with pytest.raises(AuthError):
        await client.login("eve@example.com", "pw")


@pytest.mark.asyncio
async def test_register_success_ignores_body(mock_backend, recorded_requests):
    client = mock_backend({("POST", "/register"): httpx.Response(201, text="whatever")})

    assert await client.register("Eve", "eve@example.com", "pw") is None
    assert json.loads(recorded_requests[0].content) == {"name": "Eve", "email": "eve@example.com", "password": "pw"}


@pytest.mark.asyncio
async def test_register_distinguishes_causes_by_message_only(mock_backend):
    rejected = mock_backend({("POST", "/register"): httpx.Response(409)})
    unreachable = mock_backend({("POST", "/register"): httpx.ConnectError("down")})

    with pytest.raises(RegistrationError) as rejected_info:
        await rejected.register("Eve", "eve@example.com", "pw")
    with pytest.raises(RegistrationError) as unreachable_info:
        await unreachable.register("Eve", "eve@example.com", "pw")

    assert rejected_info.value.message == "Failed to register"
    assert unreachable_info.value.message == "Unable to reach the server"


@pytest.mark.asyncio
async def test_get_books_parses_list(mock_backend):
    client = mock_backend({("GET", "/books"): httpx.Response(200, json=BOOKS_PAYLOAD)})

    books = await client.get_books()

    assert [b.id for b in books] == [1, 2]
    assert books[0].image_url is None
    assert books[1].image_url == "http://img/2.png"


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(500),
    httpx.Response(200, json={"books": BOOKS_PAYLOAD}),
    httpx.Response(200, text="<html>oops</html>"),
    httpx.Response(200, json=[{"id": 1, "title": "No author"}]),
])
async def test_get_books_failures_raise_fetch_error(mock_backend, response):
    """Non-2xx statuses and bodies of the wrong shape both fail with no partial result."""
    client = mock_backend({("GET", "/books"): response})

    with pytest.raises(FetchError) as exc_info:
        await client.get_books()

    assert exc_info.value.message == "Failed to load books"


@pytest.mark.asyncio
async def test_get_reviews_scoped_to_book(mock_backend, recorded_requests):
    client = mock_backend({("GET", "/reviews/1"): httpx.Response(200, json=REVIEWS_PAYLOAD)})

    reviews = await client.get_reviews(1)

    assert recorded_requests[0].url.path == "/reviews/1"
    assert len(reviews) == 1
    assert reviews[0].rating == 4
    assert reviews[0].timestamp.year == 2024


@pytest.mark.asyncio
async def test_get_reviews_out_of_range_rating_is_malformed(mock_backend):
    bad = [dict(REVIEWS_PAYLOAD[0], rating=7)]
    client = mock_backend({("GET", "/reviews/1"): httpx.Response(200, json=bad)})

    with pytest.raises(FetchError) as exc_info:
        await client.get_reviews(1)

    assert exc_info.value.message == "Failed to load reviews"


@pytest.mark.asyncio
async def test_submit_review_sends_bearer_token(mock_backend, recorded_requests):
    client = mock_backend({("POST", "/reviews"): httpx.Response(201)})

    await client.submit_review(1, 5, "Superb", "tok")

    request = recorded_requests[0]
    assert request.headers["Authorization"] == "Bearer tok"
    assert json.loads(request.content) == {"book_id": 1, "rating": 5, "content": "Superb"}


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403, 500])
async def test_submit_review_failure_is_single_kind(mock_backend, status):
    client = mock_backend({("POST", "/reviews"): httpx.Response(status)})

    with pytest.raises(SubmitError) as exc_info:
        await client.submit_review(1, 5, "Superb", "expired")

    assert exc_info.value.status_code == status
    assert exc_info.value.message == "Failed to submit review"


@pytest.mark.asyncio
async def test_add_book_omits_missing_image_url(mock_backend, recorded_requests):
    client = mock_backend({("POST", "/admin/books"): httpx.Response(201)})

    await client.add_book(BookCreate(title="Dune", author="Frank Herbert", description="Desert", image_url="  "), "tok")

    body = json.loads(recorded_requests[0].content)
    assert body == {"title": "Dune", "author": "Frank Herbert", "description": "Desert"}
    assert recorded_requests[0].headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_admin_mutations_raise_operation_named_errors(mock_backend):
    client = mock_backend({})  # every route answers 404

    with pytest.raises(AddBookError, match="Failed to add book"):
        await client.add_book(BookCreate(title="T", author="A", description="D"), "tok")
    with pytest.raises(DeleteBookError, match="Failed to delete book"):
        await client.delete_book(1, "tok")
    with pytest.raises(DeleteReviewError, match="Failed to delete review"):
        await client.delete_review(10, "tok")
    with pytest.raises(FetchError, match="Failed to load reviews"):
        await client.list_all_reviews("tok")


@pytest.mark.asyncio
async def test_delete_endpoints_use_delete_method(mock_backend, recorded_requests):
    client = mock_backend({
        ("DELETE", "/admin/books/3"): httpx.Response(204),
        ("DELETE", "/admin/reviews/12"): httpx.Response(204),
    })

    await client.delete_book(3, "tok")
    await client.delete_review(12, "tok")

    assert [(r.method, r.url.path) for r in recorded_requests] == [
        ("DELETE", "/admin/books/3"),
        ("DELETE", "/admin/reviews/12"),
    ]


@pytest.mark.asyncio
async def test_list_all_reviews(mock_backend, recorded_requests):
    client = mock_backend({("GET", "/admin/reviews"): httpx.Response(200, json=REVIEWS_PAYLOAD)})

    reviews = await client.list_all_reviews("tok")

    assert [r.id for r in reviews] == [10]
    assert recorded_requests[0].headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_each_call_is_a_single_round_trip(mock_backend, recorded_requests):
    """No retries: a failing call hits the backend exactly once."""
    client = mock_backend({("GET", "/books"): httpx.Response(503)})

    with pytest.raises(FetchError):
        await client.get_books()

    assert len(recorded_requests) == 1


def test_base_url_trailing_slash_is_normalised():
    client = BookReviewClient(base_url="http://api.example.com/")
    assert client.base_url == "http://api.example.com"
