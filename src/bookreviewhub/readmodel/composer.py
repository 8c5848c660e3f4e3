"""
Composición de vistas de lectura a partir de las colecciones de libros y reseñas.

Las dos colecciones se obtienen por separado y pueden no estar sincronizadas:
una reseña puede apuntar a un libro que no está en el catálogo actual. Eso no
es un error; se muestra como "Unknown Book".

Todas las funciones son puras: mismas entradas, misma salida, sin estado entre
llamadas. Cada cambio en las reseñas, el término de búsqueda, el filtro de
libro o el criterio de orden vuelve a calcular la vista completa.
"""

import enum
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Union

from bookreviewhub.schemas.book import Book
from bookreviewhub.schemas.review import Review

UNKNOWN_BOOK_TITLE = "Unknown Book"
ALL_BOOKS = "all"
MAX_STARS = 5
RECENT_ACTIVITY_LIMIT = 5

BookFilter = Union[str, int]


class SortKey(str, enum.Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    HIGHEST = "highest"
    LOWEST = "lowest"


def _mean_rating(reviews: Sequence[Review]) -> float:
    if not reviews:
        return 0.0
    return sum(r.rating for r in reviews) / len(reviews)


def _format_rating(value: float) -> str:
    return f"{value:.1f}"


def star_count(average_rating: float) -> int:
    """Estrellas completas a pintar: redondeo al entero más cercano (.5 hacia arriba), entre 0 y 5."""
    return max(0, min(MAX_STARS, math.floor(average_rating + 0.5)))


@dataclass(frozen=True)
class BookAggregate:
    """
    Estadísticas derivadas de un libro.

    Atributos:
        book_id (int): ID del libro.
        review_count (int): Número de reseñas del libro.
        average_rating (float): Media de las calificaciones; 0.0 si no hay reseñas.
    """
    book_id: int
    review_count: int = 0
    average_rating: float = 0.0

    @property
    def display_rating(self) -> str:
        return _format_rating(self.average_rating)

    @property
    def stars(self) -> int:
        return star_count(self.average_rating)


def book_aggregate(book_id: int, reviews: Iterable[Review]) -> BookAggregate:
    book_reviews = [r for r in reviews if r.book_id == book_id]
    return BookAggregate(book_id=book_id, review_count=len(book_reviews), average_rating=_mean_rating(book_reviews))


def aggregate_books(books: Iterable[Book], reviews: Iterable[Review]) -> Dict[int, BookAggregate]:
    """
    Calcula el agregado de cada libro del catálogo.

    Los libros sin reseñas tienen `review_count` 0 y `average_rating` 0.0. Las
    reseñas de libros que no están en `books` se ignoran.

    Returns:
        Dict[int, BookAggregate]: Agregados indexados por ID de libro.
    """
    grouped: Dict[int, List[Review]] = {book.id: [] for book in books}
    for review in reviews:
        if review.book_id in grouped:
            grouped[review.book_id].append(review)
    return {
        book_id: BookAggregate(book_id=book_id, review_count=len(items), average_rating=_mean_rating(items))
        for book_id, items in grouped.items()
    }


def _normalise_book_filter(book_filter: Optional[BookFilter]) -> Optional[int]:
    if book_filter is None or book_filter == ALL_BOOKS:
        return None
    return int(book_filter)


def filter_reviews(
    reviews: Iterable[Review],
    search_term: str = "",
    book_filter: Optional[BookFilter] = ALL_BOOKS,
    sort_by: Union[SortKey, str] = SortKey.NEWEST,
) -> List[Review]:
    """
    Filtra y ordena reseñas.

    Args:
        reviews (Iterable[Review]): Reseñas de partida.
        search_term (str): Texto buscado, sin distinguir mayúsculas, en `user_name` o `content`.
        book_filter (Optional[BookFilter]): "all" (o None) para todas, o el ID de un libro
            (entero o cadena numérica).
        sort_by (Union[SortKey, str]): "newest", "oldest", "highest" o "lowest".

    Returns:
        List[Review]: Nueva lista filtrada y ordenada. Los empates conservan el orden de entrada.

    Raises:
        ValueError: Si `sort_by` no es un criterio conocido o `book_filter` no es numérico.
    """
    sort_key = SortKey(sort_by)
    book_id = _normalise_book_filter(book_filter)
    term = search_term.lower()

    filtered = list(reviews)
    if term:
        filtered = [r for r in filtered if term in r.user_name.lower() or term in r.content.lower()]
    if book_id is not None:
        filtered = [r for r in filtered if r.book_id == book_id]

    # sorted() es estable también con reverse=True
    if sort_key is SortKey.NEWEST:
        return sorted(filtered, key=lambda r: r.timestamp, reverse=True)
    if sort_key is SortKey.OLDEST:
        return sorted(filtered, key=lambda r: r.timestamp)
    if sort_key is SortKey.HIGHEST:
        return sorted(filtered, key=lambda r: r.rating, reverse=True)
    return sorted(filtered, key=lambda r: r.rating)


def book_title(books: Iterable[Book], book_id: int) -> str:
    for book in books:
        if book.id == book_id:
            return book.title
    return UNKNOWN_BOOK_TITLE


@dataclass(frozen=True)
class ReviewActivity:
    review: Review
    book_title: str


def recent_activity(
    books: Iterable[Book], reviews: Iterable[Review], limit: int = RECENT_ACTIVITY_LIMIT
) -> List[ReviewActivity]:
    """
    Últimas reseñas (por `timestamp` descendente) con el título de su libro resuelto.

    Returns:
        List[ReviewActivity]: Como mucho `limit` entradas.
    """
    titles = {book.id: book.title for book in books}
    newest = sorted(reviews, key=lambda r: r.timestamp, reverse=True)[:limit]
    return [ReviewActivity(review=r, book_title=titles.get(r.book_id, UNKNOWN_BOOK_TITLE)) for r in newest]


def search_books(books: Iterable[Book], term: str = "") -> List[Book]:
    """Libros cuyo título o autor contiene `term`, sin distinguir mayúsculas."""
    term = term.lower()
    return [b for b in books if term in b.title.lower() or term in b.author.lower()]


@dataclass(frozen=True)
class DashboardStats:
    total_books: int
    total_reviews: int
    average_rating: float

    @property
    def display_rating(self) -> str:
        return _format_rating(self.average_rating)


def dashboard_stats(books: Sequence[Book], reviews: Sequence[Review]) -> DashboardStats:
    return DashboardStats(
        total_books=len(books),
        total_reviews=len(reviews),
        average_rating=_mean_rating(reviews),
    )


@dataclass(frozen=True)
class ReviewFilters:
    search_term: str = ""
    book_filter: Optional[BookFilter] = ALL_BOOKS
    sort_by: Union[SortKey, str] = SortKey.NEWEST


@dataclass(frozen=True)
class DerivedView:
    aggregates: Dict[int, BookAggregate]
    reviews: List[Review]
    recent: List[ReviewActivity]
    stats: DashboardStats
    filters: ReviewFilters = field(default_factory=ReviewFilters)

    def aggregate_for(self, book_id: int) -> BookAggregate:
        return self.aggregates.get(book_id, BookAggregate(book_id=book_id))


def compose(
    books: Sequence[Book], reviews: Sequence[Review], filters: Optional[ReviewFilters] = None
) -> DerivedView:
    """
    Construye todas las vistas derivadas a partir de una instantánea de libros y reseñas.

    Args:
        books (Sequence[Book]): Catálogo actual (vacío si su carga falló).
        reviews (Sequence[Review]): Reseñas actuales (vacías si su carga falló).
        filters (Optional[ReviewFilters]): Búsqueda, filtro de libro y orden para la lista de reseñas.

    Returns:
        DerivedView: Agregados por libro, reseñas filtradas, actividad reciente y estadísticas.
    """
    filters = filters or ReviewFilters()
    return DerivedView(
        aggregates=aggregate_books(books, reviews),
        reviews=filter_reviews(reviews, filters.search_term, filters.book_filter, filters.sort_by),
        recent=recent_activity(books, reviews),
        stats=dashboard_stats(books, reviews),
        filters=filters,
    )
