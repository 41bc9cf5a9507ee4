import networkx as nx
from .ir import Workflow

def ascii_plan(workflow: Workflow) -> str:
    nxg = nx.DiGraph()
    nxg.add_nodes_from([n.id for n in workflow.nodes])
    for source, target in workflow.edges():
        nxg.add_edge(source, target)

    try:
        order = list(nx.topological_sort(nxg))
        title = "# ASCII Plan (topological order)"
    except nx.NetworkXUnfeasible:
        order = [n.id for n in workflow.nodes]
        title = "# ASCII Plan (node order, graph has a cycle)"

    node_map = workflow.node_map()
    lines = [title]
    for i, nid in enumerate(order, 1):
        node = node_map.get(nid)
        label = f"{node.name} [{node.type}]" if node else "<missing>"
        lines.append(f"{i:02d}. {nid} {label}")
        for succ in nxg.successors(nid):
            lines.append(f"    └─▶ {succ}")
    return "\n".join(lines)
