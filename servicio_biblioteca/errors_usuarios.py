"""
Errores de dominio del servicio de biblioteca.

Los handlers de main_biblioteca traducen cada uno a su codigo HTTP.
"""

from typing import List, Optional

from validators_usuarios import FieldError


class BibliotecaError(Exception):
    """Base de todos los errores del servicio."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(BibliotecaError):
    """Uno o mas campos no cumplen sus reglas. Se responde con 400."""

    def __init__(self, errors: List[FieldError]) -> None:
        if not errors:
            raise ValueError("ValidationError requiere al menos un FieldError")
        self.errors = list(errors)
        super().__init__(self.errors[0].message)

    @property
    def field(self) -> str:
        return self.errors[0].field


class DuplicateEmail(BibliotecaError):
    """Ya existe un usuario con ese email. Se responde con 400."""

    def __init__(self, email: Optional[str] = None) -> None:
        self.email = email
        super().__init__("Este email ya está registrado")


class ConnectivityError(BibliotecaError):
    """La base de datos no responde. Se responde con 500 en /api/testmysql."""
