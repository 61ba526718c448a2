from fastapi import FastAPI
from fastapi.testclient import TestClient

from library_api.context import request_id_var
from library_api.middleware import RequestContextMiddleware


def test_request_context_middleware() -> None:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/")
    def read_root() -> dict:
        return {"request_id": request_id_var.get()}

    client = TestClient(app)

    # Without headers
    response = client.get("/")
    assert response.status_code == 200
    generated = response.json()["request_id"]
    assert generated
    assert response.headers["X-Request-ID"] == generated

    # With headers
    response = client.get("/", headers={"X-Request-ID": "req-456"})
    assert response.status_code == 200
    assert response.json() == {"request_id": "req-456"}
    assert response.headers["X-Request-ID"] == "req-456"

    assert request_id_var.get() is None


def test_request_context_middleware_recovers_from_unhandled_errors() -> None:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/boom")
    def boom() -> dict:
        raise RuntimeError("boom")

    client = TestClient(app)

    response = client.get("/boom", headers={"X-Request-ID": "req-789"})

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "internal_error", "message": "An internal error occurred"}
    }
    assert response.headers["X-Request-ID"] == "req-789"
