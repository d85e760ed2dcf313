from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from avaluos_ui.errors import AuthError, StorageError, UpdateError
from avaluos_ui.queries import QueryClient
from avaluos_ui.store import DocumentosStore


@dataclass
class FakeFile:
    """Mismo interfaz que el UploadedFile de Streamlit."""

    name: str
    type: str
    data: bytes = b"contenido"
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.data)

    def getvalue(self) -> bytes:
        return self.data


@dataclass
class FakeBackend:
    user_id: Optional[str] = "user-1"
    peritos: Dict[str, str] = field(default_factory=lambda: {"user-1": "P7"})
    fail_put: bool = False
    fail_sign: bool = False
    fail_update: bool = False
    calls: List[tuple] = field(default_factory=list)
    objects: Dict[str, bytes] = field(default_factory=dict)
    updates: List[tuple] = field(default_factory=list)
    avaluos: List[Dict[str, Any]] = field(default_factory=list)

    def get_current_user(self):
        self.calls.append(("get_current_user",))
        return self.user_id

    def get_perito(self, user_id):
        self.calls.append(("get_perito", user_id))
        if user_id not in self.peritos:
            raise AuthError("No se encontró información del perito")
        return self.peritos[user_id]

    def put_object(self, name, data, content_type, upsert=True, cache_control=None):
        self.calls.append(("put_object", name, content_type, upsert, cache_control))
        if self.fail_put:
            raise StorageError("Error subiendo el archivo")
        self.objects[name] = data
        return {"name": name, "size": len(data)}

    def sign_url(self, name, expires_in):
        self.calls.append(("sign_url", name, expires_in))
        if self.fail_sign:
            raise StorageError("Error obteniendo la URL firmada")
        return f"https://minio.local/documentos-avaluos/{name}?X-Amz-Expires={expires_in}"

    def update_record(self, avaluo_id, field_name, value):
        self.calls.append(("update_record", avaluo_id, field_name, value))
        if self.fail_update:
            raise UpdateError("Error al actualizar el avalúo.")
        self.updates.append((avaluo_id, field_name, value))
        return {"id": avaluo_id, field_name: value}

    def query_avaluos(self, **params):
        self.calls.append(("query_avaluos", params))
        return list(self.avaluos)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def queries(clock):
    return QueryClient(refetch_interval=30, clock=clock)


@pytest.fixture
def store(backend, queries):
    return DocumentosStore(backend, queries)


@pytest.fixture
def pdf():
    return FakeFile(name="doc.pdf", type="application/pdf", data=b"%PDF-1.4 ...")


@pytest.fixture
def make_file():
    return FakeFile
