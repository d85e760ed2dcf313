"""Tests for BackendClient error mapping and request shapes."""

import pytest
import requests

from avaluos_ui.backend_client import BackendClient
from avaluos_ui.errors import AuthError, QueryError, StorageError, UpdateError


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(*responses, user_id="user-1"):
    session = FakeSession(*responses)
    return BackendClient("http://backend:8000/", user_id=user_id, session=session), session


class TestIdentity:
    def test_current_user(self):
        client, session = make_client(FakeResponse(200, {"id": "user-1"}))
        assert client.get_current_user() == "user-1"
        method, url, kwargs = session.requests[0]
        assert (method, url) == ("GET", "http://backend:8000/auth/user")
        assert kwargs["headers"] == {"X-User-Id": "user-1"}

    def test_no_user(self):
        client, session = make_client(FakeResponse(401, {"detail": {"message": "Usuario no autenticado"}}), user_id=None)
        assert client.get_current_user() is None
        assert session.requests[0][2]["headers"] == {}

    def test_perito(self):
        client, _ = make_client(FakeResponse(200, {"user_id": "user-1", "perito": "P7"}))
        assert client.get_perito("user-1") == "P7"

    def test_perito_missing(self):
        client, _ = make_client(FakeResponse(404, {"detail": {"message": "x"}}))
        with pytest.raises(AuthError, match="No se encontró información del perito"):
            client.get_perito("user-1")


class TestAvaluos:
    def test_query_params(self):
        client, session = make_client(FakeResponse(200, [{"id": 1}]))
        rows = client.query_avaluos(direccion="reforma", cerrado=True)

        assert rows == [{"id": 1}]
        method, url, kwargs = session.requests[0]
        assert url == "http://backend:8000/avaluos"
        assert kwargs["params"] == {
            "en_proceso": "true",
            "cerrado": "true",
            "cancelado": "false",
            "enviado": "false",
            "direccion": "reforma",
        }

    def test_query_error_status(self):
        client, _ = make_client(
            FakeResponse(500, {"detail": {"error_code": "QUERY_ERROR", "message": "Error al consultar los avalúos."}})
        )
        with pytest.raises(QueryError, match="Error al consultar los avalúos."):
            client.query_avaluos()

    def test_query_transport_error(self):
        client, _ = make_client(requests.ConnectionError("refused"))
        with pytest.raises(QueryError, match="refused"):
            client.query_avaluos()

    def test_update_record(self):
        client, session = make_client(FakeResponse(200, {"id": 7, "luz": "u"}))
        client.update_record(7, "luz", "u")
        method, url, kwargs = session.requests[0]
        assert (method, url) == ("PATCH", "http://backend:8000/avaluos/7")
        assert kwargs["json"] == {"field": "luz", "value": "u"}

    def test_update_error(self):
        client, _ = make_client(FakeResponse(404, {"detail": {"message": "No existe el avalúo 7"}}))
        with pytest.raises(UpdateError, match="No existe el avalúo 7"):
            client.update_record(7, "luz", "u")


class TestStorage:
    def test_put_object(self):
        client, session = make_client(FakeResponse(200, {"name": "A_luz.pdf", "size": 3}))
        client.put_object("A_luz.pdf", b"abc", "application/pdf", upsert=True, cache_control="3600")

        method, url, kwargs = session.requests[0]
        assert (method, url) == ("PUT", "http://backend:8000/storage/objects/A_luz.pdf")
        assert kwargs["params"] == {"upsert": "true", "cache_control": "3600"}
        assert kwargs["files"] == {"file": ("A_luz.pdf", b"abc", "application/pdf")}

    def test_put_object_error_without_json(self):
        client, _ = make_client(FakeResponse(502))
        with pytest.raises(StorageError, match="502"):
            client.put_object("A_luz.pdf", b"abc", "application/pdf")

    def test_sign_url(self):
        client, session = make_client(FakeResponse(200, {"name": "A_luz.pdf", "signed_url": "https://s"}))
        assert client.sign_url("A_luz.pdf", 3600) == "https://s"
        assert session.requests[0][2]["json"] == {"name": "A_luz.pdf", "expires_in": 3600}

    def test_sign_url_missing_object(self):
        client, _ = make_client(FakeResponse(404, {"detail": {"message": "No existe el objeto A_luz.pdf"}}))
        with pytest.raises(StorageError, match="No existe el objeto"):
            client.sign_url("A_luz.pdf", 3600)
