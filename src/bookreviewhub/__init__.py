"""Cliente de BookReview Hub: catálogo, reseñas y moderación sobre la API REST del backend."""

__version__ = "0.1.0"
