import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./avaluos.db")

MINIO_ENDPOINT = os.getenv("MINIO_ENDPOINT", "minio:9000")
MINIO_ACCESS_KEY = os.getenv("MINIO_ACCESS_KEY", "minioadmin")
MINIO_SECRET_KEY = os.getenv("MINIO_SECRET_KEY", "minioadmin")
MINIO_BUCKET = os.getenv("MINIO_BUCKET", "documentos-avaluos")
MINIO_SECURE = os.getenv("MINIO_SECURE", "false").lower() == "true"
# Host que ven los navegadores; las URLs firmadas se generan contra él
MINIO_PUBLIC_ENDPOINT = os.getenv("MINIO_PUBLIC_ENDPOINT", MINIO_ENDPOINT)
MINIO_PUBLIC_SECURE = os.getenv("MINIO_PUBLIC_SECURE", os.getenv("MINIO_SECURE", "false")).lower() == "true"
MINIO_REGION = os.getenv("MINIO_REGION", "us-east-1")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
