"""
Cliente asíncrono para la API REST del backend de BookReview Hub.

Cada operación hace exactamente una petición HTTP: sin reintentos, sin caché y
sin agrupar peticiones. O devuelve un valor completamente validado o lanza el
error propio de la operación; los fallos de red y los estados no exitosos se
presentan igual a quien llama.
"""

import logging
from typing import Any, List, Optional, Type

import httpx
from pydantic import TypeAdapter

from bookreviewhub.core.config import settings
from bookreviewhub.core.exceptions import (
    AddBookError,
    ApiError,
    AuthError,
    DeleteBookError,
    DeleteReviewError,
    FetchError,
    RegistrationError,
    SubmitError,
)
from bookreviewhub.schemas.book import Book, BookCreate
from bookreviewhub.schemas.review import Review
from bookreviewhub.schemas.user import LoginResponse

logger = logging.getLogger(__name__)

_books_adapter = TypeAdapter(List[Book])
_reviews_adapter = TypeAdapter(List[Review])
_login_adapter = TypeAdapter(LoginResponse)


class BookReviewClient:
    """
    Envoltorio tipado sobre los endpoints del backend.

    Args:
        base_url (Optional[str]): URL base del backend; por defecto `settings.api_base_url`.
        transport (Optional[httpx.AsyncBaseTransport]): Transporte HTTP alternativo
            (por ejemplo `httpx.MockTransport` en los tests).
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/") if base_url else settings.api_base_url
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        error_cls: Type[ApiError],
        message: Optional[str] = None,
        *,
        json: Any = None,
        token: Optional[str] = None,
        unreachable_message: Optional[str] = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
                response = await client.request(method, path, json=json, headers=headers)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as exc:
            logger.error(f"{method} {path} falló con estado HTTP {exc.response.status_code}")
            raise error_cls(message, status_code=exc.response.status_code) from exc
        except httpx.RequestError as exc:
            logger.error(f"Error de red en {method} {path}: {exc}")
            raise error_cls(unreachable_message or message) from exc

    @staticmethod
    def _parse(response: httpx.Response, adapter: TypeAdapter, error_cls: Type[ApiError], message: Optional[str] = None):
        try:
            return adapter.validate_python(response.json())
        except ValueError as exc:
            logger.warning(f"Respuesta con formato inesperado de {response.request.url}: {exc}")
            raise error_cls(message, status_code=response.status_code) from exc

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Inicia sesión en el backend.

        Args:
            email (str): Correo del usuario.
            password (str): Contraseña en texto plano.

        Returns:
            LoginResponse: Token bearer y datos del usuario.

        Raises:
            AuthError: Credenciales incorrectas, servidor inaccesible o respuesta inválida.
        """
        response = await self._request("POST", "/login", AuthError, json={"email": email, "password": password})
        result = self._parse(response, _login_adapter, AuthError)
        logger.info(f"Login correcto para el usuario {result.user.id}.")
        return result

    async def register(self, name: str, email: str, password: str) -> None:
        """
        Registra un usuario nuevo. No se usa el cuerpo de la respuesta.

        Raises:
            RegistrationError: "Unable to reach the server" si no hubo respuesta,
                "Failed to register" si el backend la rechazó.
        """
        await self._request(
            "POST",
            "/register",
            RegistrationError,
            json={"name": name, "email": email, "password": password},
            unreachable_message="Unable to reach the server",
        )
        logger.info("Registro de usuario completado.")

    async def get_books(self) -> List[Book]:
        """
        Obtiene el catálogo completo, en el orden que decida el backend.

        Raises:
            FetchError: Si la petición falla o la respuesta no es una lista de libros.
        """
        message = "Failed to load books"
        response = await self._request("GET", "/books", FetchError, message)
        books = self._parse(response, _books_adapter, FetchError, message)
        logger.info(f"{len(books)} libros obtenidos.")
        return books

    async def get_reviews(self, book_id: int) -> List[Review]:
        """
        Obtiene las reseñas de un libro.

        Raises:
            FetchError: Si la petición falla o la respuesta no es una lista de reseñas.
        """
        message = "Failed to load reviews"
        response = await self._request("GET", f"/reviews/{book_id}", FetchError, message)
        reviews = self._parse(response, _reviews_adapter, FetchError, message)
        logger.info(f"{len(reviews)} reseñas obtenidas para el libro {book_id}.")
        return reviews

    async def submit_review(self, book_id: int, rating: int, content: str, token: str) -> None:
        """
        Envía una reseña. Quien llama valida rating y contenido antes.

        Raises:
            SubmitError: Incluye el caso de token caducado o inválido.
        """
        await self._request(
            "POST",
            "/reviews",
            SubmitError,
            json={"book_id": book_id, "rating": rating, "content": content},
            token=token,
        )
        logger.info(f"Reseña enviada para el libro {book_id}.")

    async def add_book(self, book: BookCreate, token: str) -> None:
        await self._request("POST", "/admin/books", AddBookError, json=book.to_payload(), token=token)
        logger.info(f"Libro '{book.title}' añadido.")

    async def delete_book(self, book_id: int, token: str) -> None:
        await self._request("DELETE", f"/admin/books/{book_id}", DeleteBookError, token=token)
        logger.info(f"Libro {book_id} eliminado.")

    async def list_all_reviews(self, token: str) -> List[Review]:
        """
        Obtiene todas las reseñas de todos los libros (sólo administradores;
        el backend es quien comprueba el permiso).

        Raises:
            FetchError: Si la petición falla o la respuesta no es una lista de reseñas.
        """
        message = "Failed to load reviews"
        response = await self._request("GET", "/admin/reviews", FetchError, message, token=token)
        reviews = self._parse(response, _reviews_adapter, FetchError, message)
        logger.info(f"{len(reviews)} reseñas obtenidas (vista de administrador).")
        return reviews

    async def delete_review(self, review_id: int, token: str) -> None:
        await self._request("DELETE", f"/admin/reviews/{review_id}", DeleteReviewError, token=token)
        logger.info(f"Reseña {review_id} eliminada.")
