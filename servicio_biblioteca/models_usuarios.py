from __future__ import annotations
from datetime import datetime
from sqlalchemy import Boolean, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from roles_usuarios import DEFAULT_ROL, Rol


class Usuario(Base):
    __tablename__ = "usuarios"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    # La columna se llama "password" pero solo guarda el hash bcrypt
    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)
    rol: Mapped[Rol] = mapped_column(
        Enum(Rol, name="rol", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=DEFAULT_ROL,
    )
    activo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Usuario id={self.id} email={self.email!r} rol={self.rol}>"
