from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from app.db.database import Base


# Columnas de documento que se pueden subir desde el tablero.
# `nss` también es columna de documento pero se muestra como Sí/No y no se sube.
DOCUMENT_SLOTS = (
    "escritura",
    "rpp",
    "num_oficial",
    "predial",
    "agua",
    "luz",
    "prueba_edad",
    "ine_comp",
    "rfc_comp",
    "ine_vend",
    "rfc_vend",
    "solicitud",
    "plano",
)


class Avaluo(Base):
    __tablename__ = "avaluos"

    id = Column(Integer, primary_key=True, autoincrement=True)

    direccion = Column(String)
    folio_shit = Column(String, index=True)
    folio = Column(String)

    # Documentos: referencia (URL/ruta) al objeto en MinIO o NULL
    escritura = Column(Text)
    rpp = Column(Text)
    num_oficial = Column(Text)
    predial = Column(Text)
    agua = Column(Text)
    luz = Column(Text)
    prueba_edad = Column(Text)
    ine_comp = Column(Text)
    rfc_comp = Column(Text)
    nss = Column(Text)
    ine_vend = Column(Text)
    rfc_vend = Column(Text)
    solicitud = Column(Text)
    plano = Column(Text)

    # Estado
    cerrado = Column(Boolean, nullable=False, default=False)
    cancelado = Column(Boolean, nullable=False, default=False)
    enviado = Column(DateTime)  # enviado = NOT NULL


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id = Column(String, primary_key=True)
    perito = Column(String)
    role = Column(String)
