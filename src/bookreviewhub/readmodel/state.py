"""
Instantánea local de libros y reseñas, y las operaciones que la mantienen coherente.

Tras una mutación confirmada por el backend sólo se parchea la instantánea
local; no se vuelve a pedir nada. Borrar un libro quita también sus reseñas
en el mismo paso, de modo que nunca hay reseñas huérfanas visibles.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from bookreviewhub.clients.api import BookReviewClient
from bookreviewhub.core.exceptions import FetchError
from bookreviewhub.readmodel.composer import DerivedView, ReviewFilters, compose
from bookreviewhub.schemas.book import Book
from bookreviewhub.schemas.review import Review

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Colecciones de libros y reseñas tal y como las ve el cliente en un momento dado.

    Atributos:
        books (Tuple[Book, ...]): Catálogo.
        reviews (Tuple[Review, ...]): Reseñas conocidas.
    """
    books: Tuple[Book, ...] = ()
    reviews: Tuple[Review, ...] = ()

    @classmethod
    def of(cls, books: Iterable[Book] = (), reviews: Iterable[Review] = ()) -> "CatalogSnapshot":
        return cls(books=tuple(books), reviews=tuple(reviews))

    def without_book(self, book_id: int) -> "CatalogSnapshot":
        return CatalogSnapshot(
            books=tuple(b for b in self.books if b.id != book_id),
            reviews=tuple(r for r in self.reviews if r.book_id != book_id),
        )

    def without_review(self, review_id: int) -> "CatalogSnapshot":
        return replace(self, reviews=tuple(r for r in self.reviews if r.id != review_id))

    def with_review(self, review: Review) -> "CatalogSnapshot":
        return replace(self, reviews=self.reviews + (review,))

    def with_book_reviews(self, book_id: int, reviews: Iterable[Review]) -> "CatalogSnapshot":
        """Sustituye las reseñas conocidas de `book_id` por `reviews`; el resto no cambia."""
        kept = tuple(r for r in self.reviews if r.book_id != book_id)
        return replace(self, reviews=kept + tuple(r for r in reviews if r.book_id == book_id))

    def find_book(self, book_id: int) -> Optional[Book]:
        return next((b for b in self.books if b.id == book_id), None)

    def compose(self, filters: Optional[ReviewFilters] = None) -> DerivedView:
        return compose(self.books, self.reviews, filters)


async def _books_or_empty(client: BookReviewClient) -> List[Book]:
    try:
        return await client.get_books()
    except FetchError as exc:
        logger.warning(f"No se pudo cargar el catálogo; se usa una lista vacía: {exc.message}")
        return []


async def _reviews_or_empty(client: BookReviewClient, token: Optional[str], book_id: Optional[int]) -> List[Review]:
    try:
        if token is not None:
            return await client.list_all_reviews(token)
        if book_id is not None:
            return await client.get_reviews(book_id)
        return []
    except FetchError as exc:
        logger.warning(f"No se pudieron cargar las reseñas; se usa una lista vacía: {exc.message}")
        return []


async def fetch_snapshot(
    client: BookReviewClient, token: Optional[str] = None, book_id: Optional[int] = None
) -> CatalogSnapshot:
    """
    Carga libros y reseñas en paralelo.

    Las reseñas salen de `list_all_reviews(token)` si hay token (vista de
    administrador), de `get_reviews(book_id)` si hay libro, o se dejan vacías.
    Una carga fallida se trata como colección vacía, de forma independiente
    para cada una, así que el resultado está definido en los cuatro casos.

    Returns:
        CatalogSnapshot: Instantánea con lo que se haya podido cargar.
    """
    books, reviews = await asyncio.gather(
        _books_or_empty(client),
        _reviews_or_empty(client, token, book_id),
    )
    return CatalogSnapshot.of(books, reviews)


async def fetch_reviews(client: BookReviewClient, book_id: int) -> Tuple[Review, ...]:
    """
    Carga sólo las reseñas de un libro (`GET /reviews/{book_id}`), sin volver a pedir el catálogo.

    Una carga fallida se trata como lista vacía.
    """
    return tuple(await _reviews_or_empty(client, None, book_id))
