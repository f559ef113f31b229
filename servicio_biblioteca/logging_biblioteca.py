# logging_biblioteca.py
import logging
import sys

FORMATO = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FORMATO_FECHA = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Logging del proceso a stdout. Nunca se registran contraseñas, hashes ni credenciales."""
    nivel = logging.getLevelName(level.upper())
    if not isinstance(nivel, int):
        nivel = logging.INFO
    logging.basicConfig(level=nivel, format=FORMATO, datefmt=FORMATO_FECHA, stream=sys.stdout, force=True)

    # passlib avisa en cada arranque al no encontrar bcrypt.__about__
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
