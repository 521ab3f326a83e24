import os
from dotenv import load_dotenv

load_dotenv()

# === Base de datos ===
# Por defecto un SQLite local; en prod se define DATABASE_URL (postgres)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./keystroke.db")
DEV_AUTO_CREATE = os.getenv("DEV_AUTO_CREATE", "0") == "1"

# === Auth ===
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# === CORS ===
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")

# === Puntajes ===
# Máximo de registros guardados por usuario (los más viejos se descartan)
SCORE_RETENTION_CAP = int(os.getenv("SCORE_RETENTION_CAP", "10"))

# Cliente HTTP hacia la API de puntajes (cuando el juego corre fuera del server)
SCORES_API_URL = os.getenv("SCORES_API_URL", "http://localhost:8000").rstrip("/")
SCORES_API_TIMEOUT = float(os.getenv("SCORES_API_TIMEOUT", "10"))

# === Juegos ===
TICK_INTERVAL_SEC = float(os.getenv("TICK_INTERVAL_SEC", "1"))
# sesiones vivas por usuario; al pasarse se cierra la más vieja
MAX_SESSIONS_PER_USER = int(os.getenv("MAX_SESSIONS_PER_USER", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
