"""
Fixtures comunes: una base SQLite en memoria por prueba y un TestClient
cuyas dependencias de base de datos apuntan a ella.
"""

import os

# Antes de importar los modulos del servicio: se leen al importarse
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_NAME", "biblioteca_test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import db
from main_biblioteca import app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def session(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(engine, session_factory):
    def override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[db.get_db] = override_get_db
    app.dependency_overrides[db.get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()
