import logging
from datetime import datetime, timezone
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

import config_biblioteca as settings
import db
import schemas_usuarios as schemas
import store_usuarios as store
from errors_usuarios import ConnectivityError, DuplicateEmail, ValidationError
from logging_biblioteca import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="API de Biblioteca",
    description="Servicio de salud, verificación de base de datos y alta de usuarios.",
    version="1.0.0",
)

DbSession = Annotated[Session, Depends(db.get_db)]
DbEngine = Annotated[Engine, Depends(db.get_engine)]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    body = schemas.ErrorResponse(status=status_code, message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.on_event("startup")
def _startup():
    db.check_connection()
    db.init_db()


# ==============================================================================
# --- Rutas ---
# ==============================================================================

@app.get("/api/health")
async def health():
    return {"status": 200, "message": "El API está funcionando", "timestamp": _now()}


@app.get("/api/testmysql")
def test_mysql(engine: DbEngine):
    try:
        db.check_connection(engine)
    except ConnectivityError as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "No se pudo conectar a la base de datos", e.message)
    return {
        "status": 200,
        "message": "Conexión a la base de datos establecida correctamente.",
        "database": settings.DB_NAME,
        "timestamp": _now(),
    }


# Sincrona a proposito: FastAPI la ejecuta en su threadpool y el hash bcrypt no bloquea el event loop
@app.post("/api/test-usuarios", status_code=status.HTTP_201_CREATED, response_model=schemas.UsuarioCreado)
def create_test_usuario(payload: schemas.UsuarioCreate, db_session: DbSession):
    try:
        usuario = store.create_usuario(
            db_session,
            nombre=payload.nombre,
            email=payload.email,
            password=payload.password,
            rol=payload.rol,
        )
    except (ValidationError, DuplicateEmail) as e:
        logger.info("Alta de usuario rechazada: %s", e.message)
        return _error(status.HTTP_400_BAD_REQUEST, "Error al crear el usuario", e.message)
    return {"status": 201, "message": "Usuario creado exitosamente", "usuario": store.to_safe_view(usuario)}


# ==============================================================================
# --- Manejo de errores ---
# ==============================================================================

@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(_request: Request, exc: StarletteHTTPException):
    # Como el catch-all de Express: un metodo no soportado en una ruta conocida tambien es 404
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _error(status.HTTP_404_NOT_FOUND, "La ruta definida no existe")
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def handle_request_validation(_request: Request, exc: RequestValidationError):
    logger.info("Cuerpo de petición inválido: %d errores", len(exc.errors()))
    return _error(status.HTTP_400_BAD_REQUEST, "Petición inválida", "El cuerpo debe ser un objeto JSON")


@app.exception_handler(Exception)
async def handle_unexpected(_request: Request, exc: Exception):
    # El detalle se queda en el log; al cliente solo le llega un mensaje generico
    logger.exception("Error inesperado: %s", type(exc).__name__)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error interno del servidor")


def main():
    import uvicorn

    configure_logging(settings.LOG_LEVEL)
    logger.info("Servidor en ejecución en el puerto %s", settings.PORT)
    uvicorn.run("main_biblioteca:app", host="0.0.0.0", port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
