import os


def norm(p: str) -> str:
    return p.replace("\\", "/")


def normalize_id(module_id: str) -> str:
    """Strip loader/query suffixes: 'a.vue?vue&type=style' -> 'a.vue'."""
    return module_id.split("?", 1)[0]


def to_canonical(root: str, module_id: str) -> str:
    """
    Root-relative, query-stripped POSIX path used as the node key.
    Falls back to the normalized absolute form when the id is the root itself.
    """
    clean = normalize_id(module_id)
    rel = os.path.relpath(clean, root) if clean else ""
    if not rel or rel == ".":
        return clean
    return norm(rel)
