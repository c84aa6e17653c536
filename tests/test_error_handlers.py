from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from scheduler_bridge.api.errors import register_exception_handlers
from scheduler_bridge.core.errors import UpstreamTimeout


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    class Body(BaseModel):
        value: int

    @app.get("/timeout")
    async def timeout():  # pragma: no cover - exercised via request
        raise UpstreamTimeout()

    @app.get("/boom")
    async def boom():  # pragma: no cover - exercised via request
        raise RuntimeError("password=hunter2")

    @app.post("/validate")
    async def validate(body: Body):  # pragma: no cover - exercised via request
        return {"value": body.value}

    return app


def test_bridge_error_payload_shape():
    res = TestClient(_app()).get("/timeout")
    assert res.status_code == 504
    assert res.json() == {"success": False, "code": "upstream.timeout", "message": "Request timed out."}


def test_unexpected_error_is_generic_internal_error():
    res = TestClient(_app(), raise_server_exceptions=False).get("/boom")
    assert res.status_code == 500
    assert res.json() == {"success": False, "code": "internal.error", "message": "Internal server error"}
    assert "hunter2" not in res.text


def test_validation_error_is_bad_request():
    res = TestClient(_app()).post("/validate", json={"value": "not-a-number"})
    assert res.status_code == 400
    assert res.json()["code"] == "request.bad_request"


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "environment": "test"}
