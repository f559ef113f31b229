import enum
from typing import Optional


class Rol(str, enum.Enum):
    admin = "admin"
    bibliotecario = "bibliotecario"
    usuario = "usuario"


DEFAULT_ROL = Rol.usuario


def parse_rol(value) -> Optional[Rol]:
    """Devuelve el Rol correspondiente o None si el valor no pertenece al enum.

    None o cadena vacia significan "sin rol" y se resuelven a DEFAULT_ROL.
    """
    if isinstance(value, Rol):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_ROL
    if not isinstance(value, str):
        return None
    try:
        return Rol(value.strip().lower())
    except ValueError:
        return None
