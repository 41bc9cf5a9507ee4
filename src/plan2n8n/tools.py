"""Remote-callable operations.

Each tool takes a plain ``dict`` of arguments, validates it with a pydantic
model and returns JSON-ready data. Tools that talk to n8n accept an optional
``client``; without one a client is built from the environment.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import list_all
from .client import N8nClient
from .config import load_settings
from .ir import PlanSpec
from .renderer import render

logger = logging.getLogger(__name__)

Args = Optional[Dict[str, Any]]


class PlanArgs(PlanSpec):
    name: str = ""
    goal: str


class CreateWorkflowArgs(BaseModel):
    name: str = Field(min_length=1)
    workflow: Dict[str, Any]
    activate: bool = False

    @field_validator("workflow", mode="before")
    @classmethod
    def _parse_json_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError(f"workflow is not valid JSON: {exc}") from exc
        return value


class CreateAndActivateArgs(BaseModel):
    name: str
    workflow: Dict[str, Any]


class IdArgs(BaseModel):
    id: Union[int, str]


class ListArgs(BaseModel):
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


def _client(client: Optional[N8nClient]) -> N8nClient:
    return client or N8nClient.from_settings(load_settings())


def list_node_specs(args: Args = None, client: Optional[N8nClient] = None) -> List[Dict[str, str]]:
    return [{"name": name, "type": engine_type} for name, engine_type in list_all()]


def plan_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    """Echo back a normalized plan template for the caller to fill in ``steps``."""
    plan = PlanArgs.model_validate(args or {})
    return plan.model_dump(by_alias=True, exclude={"name"}, exclude_none=True)


def render_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    plan = PlanSpec.model_validate(args or {})
    return render(plan).to_wire()


def create_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    parsed = CreateWorkflowArgs.model_validate(args or {})
    n8n = _client(client)
    created = n8n.create_workflow(parsed.name, parsed.workflow)
    if parsed.activate:
        n8n.activate_workflow(created["id"])
    return created


def create_and_activate(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    parsed = CreateAndActivateArgs.model_validate(args or {})
    n8n = _client(client)
    created = n8n.create_workflow(parsed.name, parsed.workflow)
    n8n.activate_workflow(created["id"])
    return created


def compose_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    """Render a plan, submit it and activate it in one go."""
    plan = PlanSpec.model_validate(args or {})
    workflow = render(plan).to_wire()
    n8n = _client(client)
    created = n8n.create_workflow(plan.name, workflow)
    n8n.activate_workflow(created["id"])
    return created


def activate_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    parsed = IdArgs.model_validate(args or {})
    _client(client).activate_workflow(parsed.id)
    return {"id": parsed.id, "active": True}


def deactivate_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    parsed = IdArgs.model_validate(args or {})
    _client(client).deactivate_workflow(parsed.id)
    return {"id": parsed.id, "active": False}


def get_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Any:
    parsed = IdArgs.model_validate(args or {})
    return _client(client).get_workflow(parsed.id)


def list_workflows(args: Args = None, client: Optional[N8nClient] = None) -> Any:
    parsed = ListArgs.model_validate(args or {})
    return _client(client).list_workflows(limit=parsed.limit, offset=parsed.offset)


def delete_workflow(args: Args = None, client: Optional[N8nClient] = None) -> Dict[str, Any]:
    parsed = IdArgs.model_validate(args or {})
    _client(client).delete_workflow(parsed.id)
    return {"id": parsed.id, "deleted": True}


class Tool(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    handler: Callable[..., Any]


TOOLS: Dict[str, Tool] = {
    t.name: t
    for t in [
        Tool(name="list_node_specs", description="Supported node display names and their n8n types", handler=list_node_specs),
        Tool(name="plan_workflow", description="Return a plan template; the caller fills in its steps", handler=plan_workflow),
        Tool(name="render_workflow", description="Convert a plan (steps) into n8n JSON {nodes, connections}", handler=render_workflow),
        Tool(name="create_workflow", description="Create a workflow from n8n JSON, optionally activating it", handler=create_workflow),
        Tool(name="create_and_activate", description="Create a workflow from n8n JSON and activate it", handler=create_and_activate),
        Tool(name="compose_workflow", description="Render a plan, create the workflow and activate it", handler=compose_workflow),
        Tool(name="activate_workflow", description="Activate a workflow by id", handler=activate_workflow),
        Tool(name="deactivate_workflow", description="Deactivate a workflow by id", handler=deactivate_workflow),
        Tool(name="get_workflow", description="Fetch a workflow by id", handler=get_workflow),
        Tool(name="list_workflows", description="List workflows page by page", handler=list_workflows),
        Tool(name="delete_workflow", description="Delete a workflow by id", handler=delete_workflow),
    ]
}


def call_tool(name: str, args: Args = None, client: Optional[N8nClient] = None) -> Any:
    """Dispatch ``name``; raises KeyError for an unknown tool."""
    tool = TOOLS[name]
    logger.debug("calling tool %s", name)
    return tool.handler(args, client=client)
