import os

BACKEND_URL = os.getenv("BACKEND_URL", "http://backend:8000")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))

# Usuario por defecto (normalmente lo inyecta la pasarela de login)
AVALUOS_USER_ID = os.getenv("AVALUOS_USER_ID", "")

REFRESH_SECONDS = int(os.getenv("REFRESH_SECONDS", "30"))
SIGNED_URL_TTL = int(os.getenv("SIGNED_URL_TTL", "3600"))  # URL válida por 1 hora
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(5 * 1024 * 1024)))  # 5MB en bytes
CACHE_CONTROL = "3600"

ALLOWED_MIME_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/png",
)
