import logging
from typing import Optional, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import QueuePool

import config_biblioteca as settings
from errors_usuarios import ConnectivityError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def database_url() -> Union[str, URL]:
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    if settings.DB_USER:
        return URL.create(
            "mysql+pymysql",
            username=settings.DB_USER,
            password=str(settings.DB_PASSWORD),
            host=settings.HOST,
            port=settings.DB_PORT,
            database=settings.DB_NAME,
        )
    return "sqlite:///./biblioteca.db"


def build_engine(url: Optional[Union[str, URL]] = None) -> Engine:
    url = url or database_url()
    if str(url).startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    # QueuePool abre conexiones bajo demanda: no mantiene un minimo de conexiones ociosas.
    # pool_recycle descarta las conexiones que llevan mas de DB_POOL_IDLE segundos abiertas.
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_MAX,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_ACQUIRE,
        pool_recycle=settings.DB_POOL_IDLE,
        pool_pre_ping=True,
    )


engine = build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_engine() -> Engine:
    return engine


def init_db(bind: Optional[Engine] = None) -> None:
    import models_usuarios  # noqa: F401  registra la tabla usuarios en Base.metadata

    Base.metadata.create_all(bind=bind or engine)


def check_connection(bind: Optional[Engine] = None) -> None:
    """Equivalente a authenticate(): abre una conexion y ejecuta SELECT 1.

    Lanza ConnectivityError si la base de datos no responde.
    """
    bind = bind or engine
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        # orig es el error del driver, sin la URL ni la contraseña
        reason = str(getattr(e, "orig", None) or e.__class__.__name__)
        logger.error("No se pudo conectar a la base de datos: %s", reason)
        raise ConnectivityError(reason) from e
    logger.info("Conexión a la base de datos establecida correctamente.")
