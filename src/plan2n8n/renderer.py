from __future__ import annotations
import logging
from typing import Any, Dict, List, Tuple

from .catalog import lookup
from .ir import ConnectionEdge, ConnectionMap, PlanSpec, RenderedNode, StepSpec, Workflow

logger = logging.getLogger(__name__)

TRIGGER_ID = "1"
TRIGGER_TOKEN = "trigger"

LANE_X = 280
LANE_Y = 300
LANE_SPACING = 220

# what n8n's Cron node does when no rule is supplied
CRON_EVERY_MINUTE: Dict[str, Any] = {"triggerFunctions": [{"function": "everyMinute"}]}


def position_for(index: int) -> Tuple[int, int]:
    """Canvas position of the ``index``-th node (trigger is 0) on the single lane."""
    return (LANE_X + index * LANE_SPACING, LANE_Y)


def step_key(step: StepSpec, ordinal: int) -> str:
    """Key a step can be referenced by in ``dependsOn``; ``ordinal`` is its node id."""
    return step.id or f"{step.type}-{ordinal}"


def _trigger_node(plan: PlanSpec) -> RenderedNode:
    if plan.trigger == "cron":
        entry = lookup("Cron").entry
        if plan.cron_expression:
            # replaces the defaults outright, n8n reads ``rule`` alone
            parameters: Dict[str, Any] = {"rule": plan.cron_expression}
        else:
            parameters = {"triggerFunctions": [dict(f) for f in CRON_EVERY_MINUTE["triggerFunctions"]]}
    elif plan.trigger == "webhook":
        entry = lookup("Webhook").entry
        parameters = dict(entry.default_parameters)
    else:
        entry = lookup("Manual Trigger").entry
        parameters = dict(entry.default_parameters)

    return RenderedNode(
        id=TRIGGER_ID,
        name=entry.display_name,
        type=entry.engine_type,
        parameters=parameters,
        position=position_for(0),
    )


def _step_nodes(steps: List[StepSpec]) -> Tuple[List[RenderedNode], Dict[str, str]]:
    nodes: List[RenderedNode] = []
    id_by_key: Dict[str, str] = {}
    for ordinal, step in enumerate(steps, start=2):
        result = lookup(step.type)
        if result.synthesized:
            logger.debug("step type %r not in catalog, passing through as engine type", step.type)
        node_id = str(ordinal)
        id_by_key[step_key(step, ordinal)] = node_id
        nodes.append(
            RenderedNode(
                id=node_id,
                name=step.type,
                type=result.entry.engine_type,
                parameters={**result.entry.default_parameters, **step.parameters},
                position=position_for(ordinal - 1),
            )
        )
    return nodes, id_by_key


def _connections(steps: List[StepSpec], id_by_key: Dict[str, str]) -> ConnectionMap:
    connections: Dict[str, Dict[str, List[List[ConnectionEdge]]]] = {}
    previous = TRIGGER_ID
    for ordinal, step in enumerate(steps, start=2):
        current = str(ordinal)
        if step.depends_on:
            parents = []
            for token in step.depends_on:
                if token == TRIGGER_TOKEN:
                    parents.append(TRIGGER_ID)
                elif token in id_by_key:
                    parents.append(id_by_key[token])
                else:
                    # TODO: make this a hard error once callers can opt into strict plans
                    logger.warning(
                        "step %s depends on unknown %r, linking it to node %s", current, token, previous
                    )
                    parents.append(previous)
        else:
            parents = [previous]

        for parent in parents:
            ports = connections.setdefault(parent, {"main": [[]]})
            ports["main"][0].append(ConnectionEdge(node=current))
        # the next step chains from this one whatever this one's own parents were
        previous = current
    return connections


def render(plan: PlanSpec) -> Workflow:
    """Render ``plan`` into n8n ``{nodes, connections}``.

    The trigger always becomes node ``"1"``; steps follow in input order. A step
    without ``dependsOn`` chains from the step before it. Unknown node types,
    dangling dependency references and cron triggers without an expression all
    degrade to a best-effort graph instead of raising.
    """
    steps_nodes, id_by_key = _step_nodes(plan.steps)
    nodes = [_trigger_node(plan)] + steps_nodes
    connections = _connections(plan.steps, id_by_key)
    logger.info("rendered %r: %d nodes, %d sources", plan.name, len(nodes), len(connections))
    return Workflow(nodes=nodes, connections=connections)
