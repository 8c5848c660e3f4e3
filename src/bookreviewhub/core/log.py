"""
Configuración del logging de la aplicación.

Se usa el módulo estándar `logging`; cada módulo obtiene su propio logger con
`logging.getLogger(__name__)` y la configuración global se hace una sola vez
desde los puntos de entrada (páginas de Streamlit).
"""

import logging

from bookreviewhub.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def configure_logging(level: str | None = None) -> None:
    """
    Configura el logging raíz con el formato común del proyecto.

    Args:
        level (str | None): Nombre del nivel; por defecto `settings.LOG_LEVEL`.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
