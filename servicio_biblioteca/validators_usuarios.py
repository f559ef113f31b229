"""
Reglas de validacion de los campos de Usuario.

Cada validador es una funcion pura que devuelve un FieldError o None;
nunca lanza. El store agrupa los errores y decide si falla.
"""

from dataclasses import dataclass
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from roles_usuarios import Rol, parse_rol

NOMBRE_MIN, NOMBRE_MAX = 2, 100
EMAIL_MAX = 100
PASSWORD_MIN, PASSWORD_MAX = 6, 255


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validar_nombre(nombre) -> Optional[FieldError]:
    if not isinstance(nombre, str) or not nombre.strip():
        return FieldError("nombre", "El nombre es requerido")
    if not NOMBRE_MIN <= len(nombre.strip()) <= NOMBRE_MAX:
        return FieldError("nombre", f"El nombre debe tener entre {NOMBRE_MIN} y {NOMBRE_MAX} caracteres")
    return None


def validar_email(email) -> Optional[FieldError]:
    if not isinstance(email, str) or not email.strip():
        return FieldError("email", "El email es requerido")
    email = normalize_email(email)
    if len(email) > EMAIL_MAX:
        return FieldError("email", f"El email no puede superar los {EMAIL_MAX} caracteres")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return FieldError("email", "Debe ser un email válido")
    return None


def validar_password(password) -> Optional[FieldError]:
    if not isinstance(password, str) or not password:
        return FieldError("password", "La contraseña es requerida")
    if len(password) < PASSWORD_MIN:
        return FieldError("password", f"La contraseña debe tener al menos {PASSWORD_MIN} caracteres")
    if len(password) > PASSWORD_MAX:
        return FieldError("password", f"La contraseña no puede superar los {PASSWORD_MAX} caracteres")
    return None


def validar_rol(rol) -> Optional[FieldError]:
    if parse_rol(rol) is None:
        opciones = ", ".join(r.value for r in Rol)
        return FieldError("rol", f"El rol debe ser uno de: {opciones}")
    return None


def validar_activo(activo) -> Optional[FieldError]:
    if not isinstance(activo, bool):
        return FieldError("activo", "activo debe ser true o false")
    return None


VALIDADORES = {
    "nombre": validar_nombre,
    "email": validar_email,
    "password": validar_password,
    "rol": validar_rol,
    "activo": validar_activo,
}


def validar_campos(**campos) -> List[FieldError]:
    """Valida solo los campos recibidos, en el orden en que llegan."""
    errores = []
    for nombre_campo, valor in campos.items():
        error = VALIDADORES[nombre_campo](valor)
        if error:
            errores.append(error)
    return errores
