# backend/app/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import CORS_ORIGINS
from app.db.database import init_db

from app.api.routes_healthcheck import router as health_router
from app.api.routes_auth import router as auth_router
from app.api.routes_avaluos import router as avaluos_router
from app.api.routes_storage import router as storage_router
import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(title="avaluos-documentos backend")


@app.on_event("startup")
def create_tables_on_startup():
    init_db()


# CORS para que Streamlit pueda llamar
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(avaluos_router)
app.include_router(storage_router)


# Opcional: para ejecutar con `python -m app.main`
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
