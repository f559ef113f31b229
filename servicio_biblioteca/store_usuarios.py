"""
Ciclo de vida de las credenciales de Usuario.

El hash de la contraseña se calcula aqui, de forma explicita, en
create_usuario y update_usuario. Ninguna funcion de este modulo registra
contraseñas ni hashes en los logs.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import config_biblioteca as settings
import models_usuarios as models
import schemas_usuarios as schemas
from errors_usuarios import DuplicateEmail, ValidationError
from roles_usuarios import parse_rol
from validators_usuarios import FieldError, normalize_email, validar_campos

logger = logging.getLogger(__name__)

CAMPOS_EDITABLES = ("nombre", "email", "password", "rol", "activo")


def build_pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


pwd_context = build_pwd_context(settings.BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(usuario: models.Usuario, candidate: str) -> bool:
    """Compara candidate con el hash guardado (comparacion en tiempo constante)."""
    if not isinstance(candidate, str) or not candidate or not usuario.password_hash:
        return False
    try:
        return pwd_context.verify(candidate, usuario.password_hash)
    except (ValueError, TypeError):
        # hash guardado corrupto o de un esquema desconocido
        logger.warning("Hash no reconocido para usuario id=%s", usuario.id)
        return False


def to_safe_view(usuario: models.Usuario) -> Dict[str, Any]:
    return schemas.UsuarioSafe.model_validate(usuario).model_dump(mode="json")


def get_usuario(db: Session, usuario_id: int) -> Optional[models.Usuario]:
    return db.get(models.Usuario, usuario_id)


def _email_en_uso(db: Session, email: str, excluir_id: Optional[int] = None) -> bool:
    q = db.query(models.Usuario.id).filter(func.lower(models.Usuario.email) == email)
    if excluir_id is not None:
        q = q.filter(models.Usuario.id != excluir_id)
    return q.first() is not None


def _es_email_duplicado(e: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed: usuarios.email"; mysql: "Duplicate entry ... ix_usuarios_email"
    mensaje = str(e.orig).lower()
    return "email" in mensaje and ("unique" in mensaje or "duplicate" in mensaje)


def _commit(db: Session, email: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not _es_email_duplicado(e):
            raise
        # otra peticion inserto el mismo email entre la comprobacion y el commit
        raise DuplicateEmail(email) from e


def create_usuario(db: Session, nombre: str, email: str, password: str, rol: Optional[str] = None) -> models.Usuario:
    errores = validar_campos(nombre=nombre, email=email, password=password, rol=rol)
    if errores:
        raise ValidationError(errores)
    email = normalize_email(email)
    if _email_en_uso(db, email):
        raise DuplicateEmail(email)
    usuario = models.Usuario(
        nombre=nombre.strip(),
        email=email,
        password_hash=hash_password(password),
        rol=parse_rol(rol),
        activo=True,
    )
    db.add(usuario)
    _commit(db, email)
    db.refresh(usuario)
    logger.info("Usuario creado id=%s rol=%s", usuario.id, usuario.rol.value)
    return usuario


def update_usuario(db: Session, usuario: models.Usuario, changes: Mapping[str, Any]) -> models.Usuario:
    """Aplica changes a un usuario ya persistido.

    Solo se vuelve a calcular el hash si llega un password distinto del
    actual; cualquier otro cambio deja el hash intacto. Se valida todo
    antes de tocar la entidad, asi que un error no deja cambios a medias.
    """
    no_editables = [k for k in changes if k not in CAMPOS_EDITABLES]
    if no_editables:
        raise ValidationError([FieldError(k, f"El campo {k} no se puede modificar") for k in no_editables])
    if not changes:
        return usuario

    errores = validar_campos(**changes)
    if errores:
        raise ValidationError(errores)

    email = usuario.email
    if "email" in changes:
        email = normalize_email(changes["email"])
        if email != usuario.email and _email_en_uso(db, email, excluir_id=usuario.id):
            raise DuplicateEmail(email)

    nuevo_hash = None
    if "password" in changes and not verify_password(usuario, changes["password"]):
        nuevo_hash = hash_password(changes["password"])

    if "email" in changes:
        usuario.email = email
    if "nombre" in changes:
        usuario.nombre = changes["nombre"].strip()
    if "rol" in changes:
        usuario.rol = parse_rol(changes["rol"])
    if "activo" in changes:
        usuario.activo = changes["activo"]
    if nuevo_hash:
        usuario.password_hash = nuevo_hash

    _commit(db, email)
    db.refresh(usuario)
    logger.info("Usuario actualizado id=%s campos=%s", usuario.id, sorted(changes))
    return usuario
