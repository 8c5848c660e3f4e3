"""
Esquemas Pydantic para la entidad Review en el cliente de BookReview Hub.
Define el modelo de lectura que devuelve el backend y el formulario de envío de reseñas.
"""

import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

# Límite orientativo para el área de texto; no se valida.
MAX_REVIEW_LENGTH = 1000

class Review(BaseModel):
    """
    Reseña de un libro.

    Atributos:
        id (int): ID de la reseña.
        book_id (int): ID del libro reseñado.
        user_id (int): ID del autor de la reseña.
        user_name (str): Nombre del autor en el momento del envío.
        rating (int): Calificación entre 1 y 5.
        content (str): Texto de la reseña.
        timestamp (datetime.datetime): Instante de creación; las fechas sin zona se toman como UTC.
    """
    id: int
    book_id: int
    user_id: int
    user_name: str
    rating: int = Field(..., ge=1, le=5)
    content: str
    timestamp: datetime.datetime

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime.datetime) -> datetime.datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value

class ReviewCreate(BaseModel):
    """
    Formulario de envío de una reseña (`POST /reviews`).

    La validación ocurre aquí, antes de cualquier llamada de red: la
    calificación debe ser un entero entre 1 y 5 y el contenido no puede
    estar vacío.
    """
    book_id: int
    rating: int = Field(..., ge=1, le=5, strict=True)
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
