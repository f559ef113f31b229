# config_biblioteca.py
from starlette.config import Config
from starlette.datastructures import Secret

config = Config(".env")

# === Base de datos ===
DB_NAME = config("DB_NAME", default="biblioteca_db")
DB_USER = config("DB_USER", default=None)
DB_PASSWORD = config("DB_PASSWORD", cast=Secret, default="")
HOST = config("HOST", default="localhost")
DB_PORT = config("DB_PORT", cast=int, default=3306)

# Si se define, tiene prioridad sobre DB_* (p.ej. sqlite para desarrollo)
DATABASE_URL = config("DATABASE_URL", default=None)

# === Pool de conexiones ===
DB_POOL_MAX = config("DB_POOL_MAX", cast=int, default=5)
DB_POOL_ACQUIRE = config("DB_POOL_ACQUIRE", cast=float, default=30.0)  # segundos
DB_POOL_IDLE = config("DB_POOL_IDLE", cast=int, default=10)  # segundos

# === Servidor ===
PORT = config("PORT", cast=int, default=3000)
LOG_LEVEL = config("LOG_LEVEL", default="INFO")

# === Contraseñas ===
BCRYPT_ROUNDS = config("BCRYPT_ROUNDS", cast=int, default=12)
