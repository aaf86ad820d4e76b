from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from entrydag.base.module_info import ModuleLookup
from entrydag.dag.filters import ExtensionFilter, SkipPolicy
from entrydag.dag.ids import to_canonical
from entrydag.dag.output import DYNAMIC, STATIC, DagEdge, DagNode, DagOutput


class OrderAssigner:
    """Hands out 1, 2, 3, ... to newly created nodes, shared by every entry of a run."""

    def __init__(self, start: int = 1):
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    @property
    def assigned(self) -> int:
        return self._next - 1


class EntryDagBuilder:
    """
    Walks the host module graph depth-first from each entry and collects a
    deduplicated node/edge graph keyed by canonical (root-relative) ids.

    All run state lives on the instance; use a fresh builder per run.
    """

    def __init__(
        self,
        root: str,
        lookup: ModuleLookup,
        extension_filter: Optional[ExtensionFilter] = None,
        skip_policy: Optional[SkipPolicy] = None,
    ):
        self.root = root
        self.lookup = lookup
        self.is_supported = extension_filter or ExtensionFilter()
        self.must_skip = skip_policy or SkipPolicy(root)

        self.orders = OrderAssigner()
        self.node_orders: Dict[str, int] = {}
        self.nodes: List[DagNode] = []
        self.edge_keys: Set[Tuple[str, str, str]] = set()
        self.edges: List[DagEdge] = []
        self.entries: List[str] = []

    # ---------- node / edge registration ----------

    def canonical(self, module_id: str) -> str:
        return to_canonical(self.root, module_id)

    def ensure_node(self, module_id: str) -> str:
        rel_id = self.canonical(module_id)
        if rel_id not in self.node_orders:
            order = self.orders.next()
            self.node_orders[rel_id] = order
            self.nodes.append(DagNode(rel_id, order))
        return rel_id

    def add_edge(self, source: str, target: str, kind: str) -> None:
        key = (source, target, kind)
        if key in self.edge_keys:
            return
        self.edge_keys.add(key)
        self.edges.append(DagEdge(source, target, kind))

    # ---------- traversal ----------

    def _expand(self, module_id: str) -> Iterator[str]:
        """
        Process one module: register it, record nodes/edges for its direct
        dependencies, and yield each non-skipped dependency in import order
        (static before dynamic). The caller decides whether to descend, and
        does so before resuming this generator, which keeps discovery order
        identical to a recursive walk.
        """
        source_supported = self.is_supported(module_id)
        from_rel = self.canonical(module_id)
        if source_supported and from_rel not in self.node_orders:
            self.ensure_node(module_id)

        info = self.lookup(module_id)
        if info is None:
            return

        for kind, deps in ((STATIC, info.imported_ids), (DYNAMIC, info.dynamically_imported_ids)):
            for dep in deps:
                if self.must_skip(dep):
                    continue
                if self.is_supported(dep):
                    dep_rel = self.ensure_node(dep)
                    # edges need both ends supported
                    if source_supported:
                        self.add_edge(from_rel, dep_rel, kind)
                yield dep

    def walk(self, entry: str) -> None:
        visited = {entry}
        stack = [self._expand(entry)]
        while stack:
            dep = next(stack[-1], None)
            if dep is None:
                stack.pop()
                continue
            if dep not in visited:
                visited.add(dep)
                stack.append(self._expand(dep))

    def build(self, entries: Iterable[str]) -> DagOutput:
        for entry in entries:
            if not entry:
                continue
            if self.is_supported(entry):
                self.entries.append(self.ensure_node(entry))
            self.walk(entry)
        return self.output()

    def output(self) -> DagOutput:
        return DagOutput(
            nodes=sorted(self.nodes, key=lambda n: n.order),
            edges=list(self.edges),
            entries=list(self.entries),
        )


def build_entry_dag(
    root: str,
    entries: Iterable[str],
    lookup: ModuleLookup,
    extensions: Optional[Iterable[str]] = None,
    exclude: Iterable[str] = (),
) -> DagOutput:
    builder = EntryDagBuilder(
        root,
        lookup,
        extension_filter=ExtensionFilter(extensions),
        skip_policy=SkipPolicy(root, list(exclude)),
    )
    return builder.build(entries)
