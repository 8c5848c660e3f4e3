"""
Acciones de usuario sobre el catálogo: vista -> cliente de la API -> parche local.

La instantánea local sólo se modifica después de que el backend confirme la
operación. Si la llamada falla, el error de la operación se propaga y la
instantánea queda intacta, así que no hace falta deshacer nada.
"""

import datetime
import logging

from bookreviewhub.clients.api import BookReviewClient
from bookreviewhub.core.session import SessionHolder
from bookreviewhub.readmodel.state import CatalogSnapshot
from bookreviewhub.schemas.book import BookCreate
from bookreviewhub.schemas.review import Review, ReviewCreate
from bookreviewhub.schemas.user import LoginForm, RegisterForm, Session

logger = logging.getLogger(__name__)


def _next_local_review_id(snapshot: CatalogSnapshot) -> int:
    # El backend no devuelve la reseña creada; se usa un ID negativo que no choca con los suyos.
    return min([r.id for r in snapshot.reviews] + [0]) - 1


async def login(client: BookReviewClient, holder: SessionHolder, form: LoginForm) -> Session:
    """
    Inicia sesión y guarda la sesión resultante en `holder`.

    Raises:
        AuthError: Si el login falla por cualquier motivo.
    """
    response = await client.login(form.email, form.password)
    session = Session.from_login(response)
    holder.store(session)
    return session


def logout(holder: SessionHolder) -> None:
    holder.clear()


async def register(client: BookReviewClient, form: RegisterForm) -> None:
    await client.register(form.name, form.email, form.password)


async def submit_review(
    client: BookReviewClient, snapshot: CatalogSnapshot, form: ReviewCreate, session: Session
) -> CatalogSnapshot:
    """
    Envía una reseña y la añade a la instantánea local.

    Args:
        client (BookReviewClient): Cliente de la API.
        snapshot (CatalogSnapshot): Instantánea actual.
        form (ReviewCreate): Formulario ya validado.
        session (Session): Sesión del autor.

    Returns:
        CatalogSnapshot: Nueva instantánea con la reseña añadida; los libros no cambian.

    Raises:
        SubmitError: Si el backend rechaza la reseña o no responde.
    """
    await client.submit_review(form.book_id, form.rating, form.content, session.token)
    review = Review(
        id=_next_local_review_id(snapshot),
        book_id=form.book_id,
        user_id=session.id,
        user_name=session.name,
        rating=form.rating,
        content=form.content,
        timestamp=datetime.datetime.now(datetime.timezone.utc),
    )
    return snapshot.with_review(review)


async def add_book(client: BookReviewClient, form: BookCreate, session: Session) -> None:
    """El backend asigna el ID, así que quien llama debe volver a cargar el catálogo."""
    await client.add_book(form, session.token)


async def delete_book(
    client: BookReviewClient, snapshot: CatalogSnapshot, book_id: int, session: Session
) -> CatalogSnapshot:
    """
    Borra un libro y, en el mismo paso, todas sus reseñas de la instantánea local.

    Raises:
        DeleteBookError: Si el backend no confirma el borrado.
    """
    await client.delete_book(book_id, session.token)
    updated = snapshot.without_book(book_id)
    logger.info(
        f"Libro {book_id} retirado de la vista local junto con "
        f"{len(snapshot.reviews) - len(updated.reviews)} reseña(s)."
    )
    return updated


async def delete_review(
    client: BookReviewClient, snapshot: CatalogSnapshot, review_id: int, session: Session
) -> CatalogSnapshot:
    """
    Borra una reseña (moderación) y la quita de la instantánea local.

    Raises:
        DeleteReviewError: Si el backend no confirma el borrado.
    """
    await client.delete_review(review_id, session.token)
    return snapshot.without_review(review_id)
