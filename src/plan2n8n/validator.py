from __future__ import annotations
import networkx as nx
from typing import Tuple, List
from .ir import PlanSpec, Workflow
from .renderer import TRIGGER_ID, TRIGGER_TOKEN, step_key


def validate_workflow(workflow: Workflow) -> Tuple[bool, List[str]]:
    """Structural report on a rendered graph. The renderer never calls this."""
    messages: List[str] = []
    ok = True

    node_ids = [n.id for n in workflow.nodes]
    # 1) Unique node ids
    if len(set(node_ids)) != len(node_ids):
        ok = False
        messages.append("ERR: Duplicate node IDs detected.")
    else:
        messages.append("OK: Node IDs are unique.")

    # 2) Edges refer to existing nodes
    known = set(node_ids)
    refs_ok = True
    for source, target in workflow.edges():
        if source not in known or target not in known:
            refs_ok = False
            messages.append(f"ERR: Edge {source}->{target} references missing node(s).")
    if refs_ok:
        messages.append("OK: All edges reference existing nodes.")
    ok = ok and refs_ok

    # 3) Every node but the trigger is reachable from something
    targets = {target for _, target in workflow.edges()}
    orphans = [nid for nid in node_ids if nid != TRIGGER_ID and nid not in targets]
    if orphans:
        ok = False
        messages.append(f"ERR: Nodes without incoming edges: {', '.join(orphans)}.")
    else:
        messages.append("OK: Every step has an incoming edge.")

    # 4) Acyclic check
    nxg = nx.DiGraph()
    nxg.add_nodes_from(known)
    nxg.add_edges_from(workflow.edges())
    try:
        list(nx.topological_sort(nxg))
        messages.append("OK: Graph is acyclic.")
    except nx.NetworkXUnfeasible:
        ok = False
        messages.append("ERR: Cycle detected in the graph.")

    return ok, messages


def check_plan(plan: PlanSpec) -> Tuple[bool, List[str]]:
    """Report ``dependsOn`` tokens the renderer would silently relink to the previous step."""
    messages: List[str] = []
    keys = {step_key(step, ordinal) for ordinal, step in enumerate(plan.steps, start=2)}
    for ordinal, step in enumerate(plan.steps, start=2):
        for token in step.depends_on or []:
            if token != TRIGGER_TOKEN and token not in keys:
                messages.append(f"ERR: Step {step_key(step, ordinal)!r} depends on unknown {token!r}.")
    if plan.cron_expression and plan.trigger != "cron":
        messages.append(f"WARN: cron expression is ignored for a {plan.trigger} trigger.")
    if plan.trigger == "cron" and not plan.cron_expression:
        messages.append("WARN: cron trigger without an expression runs every minute.")
    ok = not any(m.startswith("ERR:") for m in messages)
    if ok:
        messages.insert(0, "OK: All dependency references resolve.")
    return ok, messages
