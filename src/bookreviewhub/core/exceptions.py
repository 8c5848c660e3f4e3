"""
Errores del cliente de BookReview Hub.

Cada operación de la API falla con su propio tipo de error. Los fallos de red
(servidor inaccesible) y las respuestas con estado no exitoso se agrupan en el
mismo tipo: quien llama sólo ve un mensaje genérico por operación.
"""

from typing import Optional


class BookReviewError(Exception):
    """Base de todos los errores del proyecto."""


class ApiError(BookReviewError):
    """
    Fallo de una llamada a la API del backend.

    Atributos:
        message (str): Mensaje para mostrar al usuario.
        status_code (Optional[int]): Estado HTTP recibido, None si no hubo respuesta.
    """
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class AuthError(ApiError):
    default_message = "Failed to login"


class RegistrationError(ApiError):
    default_message = "Failed to register"


class FetchError(ApiError):
    default_message = "Failed to load data"


class SubmitError(ApiError):
    default_message = "Failed to submit review"


class AddBookError(ApiError):
    default_message = "Failed to add book"


class DeleteBookError(ApiError):
    default_message = "Failed to delete book"


class DeleteReviewError(ApiError):
    default_message = "Failed to delete review"
