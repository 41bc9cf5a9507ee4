from fastapi.testclient import TestClient

from plan2n8n.errors import UpstreamError
from plan2n8n.server import app, get_client


class FailingClient:
    def get_workflow(self, workflow_id):
        raise UpstreamError(f"/rest/workflows/{workflow_id}", 404, "not found")


client = TestClient(app)


def test_list_tools():
    resp = client.get("/api/tools")
    assert resp.status_code == 200
    assert "render_workflow" in [t["name"] for t in resp.json()]


def test_render_tool():
    resp = client.post("/api/tools/render_workflow", json={"name": "demo", "trigger": "webhook"})
    assert resp.status_code == 200
    assert resp.json()["nodes"][0]["parameters"] == {"path": "hook", "httpMethod": "POST"}


def test_unknown_tool():
    assert client.post("/api/tools/nope", json={}).status_code == 404


def test_invalid_arguments():
    resp = client.post("/api/tools/render_workflow", json={"steps": []})
    assert resp.status_code == 422


def test_upstream_error_maps_to_502():
    app.dependency_overrides[get_client] = FailingClient
    try:
        resp = client.post("/api/tools/get_workflow", json={"id": 1})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 502
    assert resp.json() == {"error": "not found", "status": 404}


def test_import_configures_logging(monkeypatch):
    import importlib
    import logging

    from rich.logging import RichHandler

    from plan2n8n import server

    monkeypatch.setenv("PLAN2N8N_LOG_LEVEL", "DEBUG")
    importlib.reload(server)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in root.handlers)
    logging.getLogger().setLevel(logging.WARNING)
