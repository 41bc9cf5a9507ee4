"""Static catalog of the n8n node types the renderer knows by display name.

Lookups never fail: a name that is not in the catalog yields a synthesized
entry whose engine type is the name itself, so callers may pass raw n8n
type strings (``n8n-nodes-base.set``) straight through.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class NodeTypeEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: str
    engine_type: str
    default_parameters: Dict[str, Any] = Field(default_factory=dict)


class Known(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry: NodeTypeEntry
    synthesized: bool = False


class Synthesized(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry: NodeTypeEntry
    synthesized: bool = True


LookupResult = Union[Known, Synthesized]

_ENTRIES: Tuple[NodeTypeEntry, ...] = (
    NodeTypeEntry(display_name="Manual Trigger", engine_type="n8n-nodes-base.manualTrigger"),
    NodeTypeEntry(display_name="Cron", engine_type="n8n-nodes-base.cron"),
    NodeTypeEntry(
        display_name="Webhook",
        engine_type="n8n-nodes-base.webhook",
        default_parameters={"path": "hook", "httpMethod": "POST"},
    ),
    NodeTypeEntry(display_name="HTTP Request", engine_type="n8n-nodes-base.httpRequest"),
)

_BY_NAME: Dict[str, NodeTypeEntry] = {e.display_name: e for e in _ENTRIES}

NODE_CATALOG: Mapping[str, NodeTypeEntry] = MappingProxyType(_BY_NAME)


def lookup(name: str) -> LookupResult:
    """Resolve ``name`` (case-sensitive) to a catalog entry or a synthesized one."""
    entry = _BY_NAME.get(name)
    if entry is not None:
        return Known(entry=entry)
    return Synthesized(entry=NodeTypeEntry(display_name=name, engine_type=name))


def list_all() -> List[Tuple[str, str]]:
    return [(e.display_name, e.engine_type) for e in NODE_CATALOG.values()]
