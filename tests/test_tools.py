import pytest
from pydantic import ValidationError

from plan2n8n import tools
from plan2n8n.errors import UpstreamError


class FakeClient:
    def __init__(self, fail_activate=False):
        self.calls = []
        self.fail_activate = fail_activate

    def create_workflow(self, name, workflow):
        self.calls.append(("create", name, workflow))
        return {"id": "42", "name": name}

    def activate_workflow(self, workflow_id):
        self.calls.append(("activate", workflow_id))
        if self.fail_activate:
            raise UpstreamError(f"/rest/workflows/{workflow_id}/activate", 500, "boom")

    def deactivate_workflow(self, workflow_id):
        self.calls.append(("deactivate", workflow_id))

    def get_workflow(self, workflow_id):
        return {"id": workflow_id}

    def list_workflows(self, limit, offset):
        return {"data": [], "limit": limit, "offset": offset}

    def delete_workflow(self, workflow_id):
        self.calls.append(("delete", workflow_id))


PLAN = {"name": "demo", "steps": [{"type": "HTTP Request"}]}


def test_list_node_specs():
    assert {"name": "Webhook", "type": "n8n-nodes-base.webhook"} in tools.list_node_specs()


def test_plan_workflow_applies_defaults():
    assert tools.plan_workflow({"goal": "poll an API"}) == {
        "trigger": "manual",
        "steps": [],
        "goal": "poll an API",
    }


def test_plan_workflow_leaves_out_unset_keys():
    plan = tools.plan_workflow({"goal": "g", "trigger": "cron", "cron": "0 * * * *",
                                "steps": [{"type": "HTTP Request"}]})
    assert plan["cron"] == "0 * * * *"
    assert plan["steps"] == [{"type": "HTTP Request", "parameters": {}}]


def test_plan_workflow_rejects_unknown_trigger():
    with pytest.raises(ValidationError):
        tools.plan_workflow({"goal": "x", "trigger": "hourly"})


def test_render_workflow_requires_name():
    with pytest.raises(ValidationError):
        tools.render_workflow({"steps": []})


def test_render_workflow():
    wire = tools.render_workflow(PLAN)
    assert set(wire) == {"nodes", "connections"}
    assert wire["connections"]["1"]["main"][0][0]["node"] == "2"


def test_create_workflow_parses_json_string():
    client = FakeClient()
    created = tools.create_workflow(
        {"name": "demo", "workflow": '{"nodes": [], "connections": {}}', "activate": True}, client=client
    )
    assert created["id"] == "42"
    assert client.calls == [("create", "demo", {"nodes": [], "connections": {}}), ("activate", "42")]


def test_create_workflow_rejects_bad_json():
    with pytest.raises(ValidationError):
        tools.create_workflow({"name": "demo", "workflow": "{nope"}, client=FakeClient())


def test_create_workflow_does_not_activate_by_default():
    client = FakeClient()
    tools.create_workflow({"name": "demo", "workflow": {"nodes": []}}, client=client)
    assert [c[0] for c in client.calls] == ["create"]


def test_compose_workflow_renders_creates_activates():
    client = FakeClient()
    tools.compose_workflow(PLAN, client=client)
    (kind, name, workflow), activation = client.calls
    assert (kind, name) == ("create", "demo")
    assert [n["id"] for n in workflow["nodes"]] == ["1", "2"]
    assert activation == ("activate", "42")


def test_upstream_error_propagates():
    with pytest.raises(UpstreamError):
        tools.create_and_activate({"name": "demo", "workflow": {}}, client=FakeClient(fail_activate=True))


def test_id_tools():
    client = FakeClient()
    assert tools.activate_workflow({"id": 5}, client=client) == {"id": 5, "active": True}
    assert tools.deactivate_workflow({"id": "5"}, client=client) == {"id": "5", "active": False}
    assert tools.get_workflow({"id": 5}, client=client) == {"id": 5}
    assert tools.delete_workflow({"id": 5}, client=client) == {"id": 5, "deleted": True}


def test_list_workflows_bounds():
    client = FakeClient()
    assert tools.list_workflows({}, client=client) == {"data": [], "limit": 20, "offset": 0}
    with pytest.raises(ValidationError):
        tools.list_workflows({"limit": 101}, client=client)


def test_call_tool_unknown():
    with pytest.raises(KeyError):
        tools.call_tool("nope")


def test_tool_registry_is_frozen():
    tool = tools.TOOLS["render_workflow"]
    assert tool.handler is tools.render_workflow
    with pytest.raises(ValidationError):
        tool.name = "other"
