from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from roles_usuarios import Rol


# Sin restricciones de tipo: las reglas las aplica store_usuarios y se responden con 400
class UsuarioCreate(BaseModel):
    nombre: Any = None
    email: Any = None
    password: Any = None
    rol: Any = None


# Vista segura: no existe campo de contraseña
class UsuarioSafe(BaseModel):
    id: int
    nombre: str
    email: str
    rol: Rol
    activo: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class UsuarioCreado(BaseModel):
    status: int = 201
    message: str = "Usuario creado exitosamente"
    usuario: UsuarioSafe


class ErrorResponse(BaseModel):
    status: int
    message: str
    error: Optional[str] = None
