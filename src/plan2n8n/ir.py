from __future__ import annotations
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Dict, Iterator, List, Literal, Optional, Any, Tuple

Trigger = Literal["manual", "cron", "webhook"]

TYPE_VERSION = 1
PORT_TYPE = "main"


class StepSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    type: str                                               # display name or raw engine type
    parameters: Dict[str, Any] = Field(default_factory=dict)
    depends_on: Optional[List[str]] = Field(default=None, alias="dependsOn")


class PlanSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    trigger: Trigger = "manual"
    cron_expression: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("cron", "cronExpression", "cron_expression"),
        serialization_alias="cron",
    )
    steps: List[StepSpec] = Field(default_factory=list)
    goal: Optional[str] = None


class RenderedNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    type: str                                               # engine type
    type_version: int = Field(default=TYPE_VERSION, alias="typeVersion")
    parameters: Dict[str, Any] = Field(default_factory=dict)
    position: Tuple[int, int]


class ConnectionEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    node: str                                               # target node id
    type: str = PORT_TYPE
    index: int = 0


# source node id -> {"main": [[edge, ...]]}
ConnectionMap = Dict[str, Dict[str, List[List[ConnectionEdge]]]]


class Workflow(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: List[RenderedNode]
    connections: ConnectionMap = Field(default_factory=dict)

    def node_map(self) -> Dict[str, RenderedNode]:
        return {n.id: n for n in self.nodes}

    def edges(self) -> Iterator[Tuple[str, str]]:
        for source, ports in self.connections.items():
            for outputs in ports.values():
                for output in outputs:
                    for edge in output:
                        yield source, edge.node

    def successors_of(self, node_id: str) -> List[str]:
        return [target for source, target in self.edges() if source == node_id]

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready ``{nodes, connections}`` in the shape n8n expects."""
        data = self.model_dump(by_alias=True)
        for node in data["nodes"]:
            node["position"] = list(node["position"])
        return data
