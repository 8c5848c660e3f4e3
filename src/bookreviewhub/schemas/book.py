"""
Esquemas Pydantic para la entidad Book tal y como la expone el backend de BookReview Hub.
Define el modelo de lectura y el formulario de alta usado por los administradores.
"""

from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class Book(BaseModel):
    """
    Libro del catálogo, tal y como lo devuelve `GET /books`.

    Atributos:
        id (int): Identificador asignado por el backend.
        title (str): Título del libro.
        author (str): Autor del libro.
        description (str): Descripción o sinopsis.
        summary (Optional[str]): Resumen corto, si el backend lo envía.
        image_url (Optional[str]): URL de la portada.
    """
    id: int
    title: str
    author: str
    description: str
    summary: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

class BookCreate(BaseModel):
    """
    Formulario de alta de un libro (`POST /admin/books`).

    Título, autor y descripción son obligatorios y no pueden quedar en blanco.
    Una URL de portada vacía se trata como ausente.
    """
    title: NonBlankStr
    author: NonBlankStr
    description: NonBlankStr
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def blank_image_url_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def to_payload(self) -> Dict[str, Any]:
        """Cuerpo JSON de la petición; omite `image_url` si no hay portada."""
        return self.model_dump(exclude_none=True)
