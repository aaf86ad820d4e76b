import json
import os
import stat
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, List

STATIC = "static"
DYNAMIC = "dynamic"


@dataclass
class DagNode:
    id: str
    order: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "order": self.order}


@dataclass
class DagEdge:
    source: str
    target: str
    kind: str

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "kind": self.kind}


@dataclass
class DagOutput:
    nodes: List[DagNode] = field(default_factory=list)
    edges: List[DagEdge] = field(default_factory=list)
    entries: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """
        Output shape consumed downstream:
          - nodes    sorted by discovery order
          - edges    in creation order
          - entries  canonical ids of supported entries, input order
        """
        return {
            "nodes": [n.to_dict() for n in sorted(self.nodes, key=lambda n: n.order)],
            "edges": [e.to_dict() for e in self.edges],
            "entries": list(self.entries),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def _artifact_mode(out_path: str) -> int:
    """Keep the mode of the file being replaced, else 0666 minus the umask."""
    if os.path.exists(out_path):
        return stat.S_IMODE(os.stat(out_path).st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_artifact(output: DagOutput, out_path: str) -> str:
    """
    Write the artifact, replacing any previous file at out_path.
    The content goes to a temp file in the same directory first, so a failed
    write never leaves a partial artifact behind.
    """
    out_dir = os.path.dirname(os.path.abspath(out_path))
    os.makedirs(out_dir, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".entry-dag-", suffix=".tmp", dir=out_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(output.to_json())
        os.chmod(tmp_path, _artifact_mode(out_path))
        os.replace(tmp_path, out_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return out_path
