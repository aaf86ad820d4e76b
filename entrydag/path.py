import json
from typing import Any, Dict, List

import networkx as nx


def load_artifact(artifact_path: str) -> Dict[str, Any]:
    with open(artifact_path, "r", encoding="utf-8") as f:
        return json.load(f)


def artifact_to_graph(data: Dict[str, Any]) -> nx.MultiDiGraph:
    """Static and dynamic imports of the same pair are parallel edges keyed by kind."""
    G = nx.MultiDiGraph()
    entries = set(data.get("entries", []))
    for node in data.get("nodes", []):
        G.add_node(node["id"], order=node["order"], entry=node["id"] in entries)
    for edge in data.get("edges", []):
        G.add_edge(edge["source"], edge["target"], key=edge["kind"], kind=edge["kind"])
    return G


def load_graph(artifact_path: str) -> nx.MultiDiGraph:
    if artifact_path.endswith(".json"):
        return artifact_to_graph(load_artifact(artifact_path))
    elif artifact_path.endswith(".graphml"):
        return nx.read_graphml(artifact_path, force_multigraph=True)
    else:
        raise RuntimeError(f"Unsupported graph format: {artifact_path}")


def write_graphml(G: nx.MultiDiGraph, graphml_path: str) -> None:
    nx.write_graphml(G, graphml_path)


def by_order(G, node_ids) -> List[str]:
    return sorted(node_ids, key=lambda n: (G.nodes[n].get("order", 0), n))


def fan_out(G: nx.MultiDiGraph, entry: str, kind: str = None) -> List[str]:
    """
    Every module reachable from `entry`, in discovery order.
    With kind="static" only eagerly loaded modules are followed.
    """
    if entry not in G:
        raise KeyError(f"'{entry}' not in graph")
    if kind is not None:
        view = nx.subgraph_view(G, filter_edge=lambda u, v, k: k == kind)
        return by_order(G, nx.descendants(view, entry))
    return by_order(G, nx.descendants(G, entry))


def unreachable(G: nx.MultiDiGraph) -> List[str]:
    """Nodes no entry reaches through recorded edges."""
    reached = set()
    for n, is_entry in G.nodes(data="entry"):
        if is_entry:
            reached.add(n)
            reached |= nx.descendants(G, n)
    return by_order(G, set(G.nodes) - reached)


def format_path(G, node_list):
    return " -> ".join(f"{nid} (#{G.nodes[nid].get('order', '?')})" for nid in node_list)


def find_path(artifact_path, target, source=None, return_obj=False):
    G = load_graph(artifact_path)

    if target not in G:
        print(f"Error: target '{target}' not in graph.")
        return

    if source:
        if source not in G:
            print(f"Error: source '{source}' not in graph.")
            return
        try:
            path = nx.shortest_path(G, source=source, target=target)
            if return_obj:
                return path
            print("  " + format_path(G, path))
        except nx.NetworkXNoPath:
            print(f"No path found from '{source}' to '{target}'.")
    else:
        preds = by_order(G, G.predecessors(target))
        succs = by_order(G, G.successors(target))

        if preds:
            print(f"\nModules importing '{target}' ({len(preds)}):")
            for p in preds:
                for kind in sorted(G.get_edge_data(p, target)):
                    print(f"  {p} --[{kind}]--> {target}")
        else:
            print(f"\nNo incoming edges to '{target}'.")

        if succs:
            print(f"\nModules imported by '{target}' ({len(succs)}):")
            for s in succs:
                for kind in sorted(G.get_edge_data(target, s)):
                    print(f"  {target} --[{kind}]--> {s}")
        else:
            print(f"\nNo outgoing edges from '{target}'.")

        if return_obj:
            return {"predecessors": preds, "successors": succs}
