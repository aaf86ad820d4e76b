import os
from typing import Iterable, Optional, Sequence

import pathspec

from entrydag.dag.ids import normalize_id, to_canonical

DEFAULT_EXTENSIONS = [".js", ".jsx", ".ts", ".tsx", ".vue"]

# host marker for virtual (non file-backed) modules
VIRTUAL_PREFIX = "\0"
DEPENDENCY_DIR = "node_modules"


def normalize_ext(ext: str) -> str:
    e = ext.strip().lower()
    return e if e.startswith(".") else f".{e}"


class ExtensionFilter:
    """Decides whether a module id denotes a supported (graphable) module kind."""

    def __init__(self, extensions: Optional[Iterable[str]] = None):
        configured = [normalize_ext(e) for e in extensions or []]
        self.extensions = frozenset(configured or DEFAULT_EXTENSIONS)

    def is_supported(self, module_id: str) -> bool:
        ext = os.path.splitext(normalize_id(module_id))[1]
        return ext.lower() in self.extensions

    __call__ = is_supported


class SkipPolicy:
    """
    Excludes ids that must never become nodes: empty ids, anything under a
    third-party dependency directory, virtual modules, and (optionally) ids
    whose canonical path matches one of the gitignore-style `exclude` patterns.
    """

    def __init__(self, root: str = "", exclude: Sequence[str] = ()):
        self.root = root
        self.exclude = list(exclude)
        self._spec = pathspec.PathSpec.from_lines("gitwildmatch", self.exclude) if self.exclude else None

    def must_skip(self, module_id: Optional[str]) -> bool:
        if not module_id:
            return True
        if DEPENDENCY_DIR in module_id:
            return True
        if module_id.startswith(VIRTUAL_PREFIX):
            return True
        if self._spec is not None:
            return self._spec.match_file(to_canonical(self.root or os.getcwd(), module_id))
        return False

    __call__ = must_skip


def must_skip(module_id: Optional[str]) -> bool:
    return SkipPolicy().must_skip(module_id)
