"""
Gestión de la sesión autenticada en el cliente de BookReview Hub.

La sesión se guarda como JSON dentro de un almacenamiento tipo diccionario que
se inyecta al crear el `SessionHolder`. En la aplicación Streamlit ese
almacenamiento es `st.session_state` (ámbito: la pestaña del navegador); en
los tests basta un `dict`.

No se valida el token contra el servidor: se confía en él hasta que el
backend lo rechace, y ni siquiera entonces se borra automáticamente.
"""

import logging
from typing import MutableMapping, Optional, Any

from pydantic import ValidationError

from bookreviewhub.schemas.user import Session

logger = logging.getLogger(__name__)

SESSION_KEY = "user"

class SessionHolder:
    """
    Guarda y expone la sesión actual.

    Args:
        storage (Optional[MutableMapping[str, Any]]): Almacenamiento subyacente;
            por defecto un diccionario privado.
        key (str): Clave bajo la que se guarda la sesión.
    """

    def __init__(self, storage: Optional[MutableMapping[str, Any]] = None, key: str = SESSION_KEY):
        self._storage = storage if storage is not None else {}
        self._key = key

    def load(self) -> Optional[Session]:
        """
        Devuelve la sesión guardada, o None si no hay ninguna.

        Un valor corrupto (JSON inválido, tipo inesperado o campos que faltan)
        se trata como ausencia de sesión; nunca lanza excepción.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            return None
        if not isinstance(raw, (str, bytes)):
            logger.warning(f"Sesión guardada con tipo inesperado ({type(raw).__name__}); se ignora.")
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Sesión guardada corrupta; se ignora: {exc.error_count()} error(es) de validación.")
            return None

    def store(self, session: Session) -> None:
        self._storage[self._key] = session.model_dump_json()
        logger.info(f"Sesión guardada para el usuario {session.id}.")

    def clear(self) -> None:
        if self._storage.pop(self._key, None) is not None:
            logger.info("Sesión cerrada.")

    @property
    def is_authenticated(self) -> bool:
        return self.load() is not None

    @property
    def is_admin(self) -> bool:
        session = self.load()
        return bool(session and session.is_admin)
