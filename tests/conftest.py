# tests/conftest.py
import datetime

import httpx
import pytest

from bookreviewhub.clients.api import BookReviewClient
from bookreviewhub.schemas.book import Book
from bookreviewhub.schemas.review import Review
from bookreviewhub.schemas.user import Session

TEST_API_URL = "http://testserver"


def make_review(review_id, book_id, rating, content="Nice read", user_name="alice", minutes=0, user_id=1):
    """Builds a Review with a timestamp `minutes` after a fixed base instant."""
    base = datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
    return Review(
        id=review_id,
        book_id=book_id,
        user_id=user_id,
        user_name=user_name,
        rating=rating,
        content=content,
        timestamp=base + datetime.timedelta(minutes=minutes),
    )


@pytest.fixture
def books():
    return [
        Book(id=1, title="Dune", author="Frank Herbert", description="Desert planet."),
        Book(id=2, title="Emma", author="Jane Austen", description="Matchmaking."),
        Book(id=3, title="Neuromancer", author="William Gibson", description="Cyberspace.", image_url="http://img/3.png"),
    ]


@pytest.fixture
def reviews():
    return [
        make_review(10, 1, 4, "Great world building", "alice", minutes=0),
        make_review(11, 1, 2, "Too long for me", "bob", minutes=10, user_id=2),
        make_review(12, 2, 5, "A classic", "carol", minutes=5, user_id=3),
        make_review(13, 99, 3, "Book got removed", "dave", minutes=20, user_id=4),
    ]


@pytest.fixture
def session():
    return Session(token="secret-token", id=7, name="Admin", email="admin@example.com", is_admin=True)


@pytest.fixture
def recorded_requests():
    """Requests seen by the mock backend, in order."""
    return []


@pytest.fixture
def mock_backend(recorded_requests):
    """
    Returns a factory that builds a BookReviewClient over httpx.MockTransport.

    `routes` maps (method, path) to either an httpx.Response or an exception
    instance to raise (e.g. httpx.ConnectError). Unknown routes answer 404.
    """
    def factory(routes):
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            outcome = routes.get((request.method, request.url.path))
            if outcome is None:
                return httpx.Response(404, json={"detail": "Not found"})
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        return BookReviewClient(base_url=TEST_API_URL, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def review_factory():
    return make_review
