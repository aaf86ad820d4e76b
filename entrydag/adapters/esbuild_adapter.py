# esbuild_adapter.py
import os
import sys
from typing import Any, Dict, List

from entrydag.base.module_info import InMemoryModuleInfo, ModuleInfo

DYNAMIC_KINDS = {"dynamic-import"}


def resolve_input(working_dir: str, path: str) -> str:
    """esbuild input paths are relative to its working dir; namespaced ids ('ns:foo') are kept as-is."""
    if not path or os.path.isabs(path) or ":" in path.split("/", 1)[0]:
        return path
    return os.path.normpath(os.path.join(working_dir, path))


def adapt_esbuild_metafile(raw: Dict[str, Any], working_dir: str = "") -> InMemoryModuleInfo:
    """
    Input: an esbuild metafile, {"inputs": {path: {"imports": [{"path", "kind"}]}}}.
    Output: an in-memory module-info source keyed by absolute path.
    "dynamic-import" goes to the dynamic list, every other import kind
    (import-statement, require-call, ...) to the static list.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("inputs"), dict):
        raise ValueError("Unsupported esbuild metafile: missing 'inputs' object")
    working_dir = working_dir or os.getcwd()

    source = InMemoryModuleInfo()
    for path, info in raw["inputs"].items():
        if not isinstance(info, dict):
            print(f"Warning: skipping malformed input {path!r}", file=sys.stderr)
            continue
        static_ids: List[str] = []
        dynamic_ids: List[str] = []
        for imp in info.get("imports") or []:
            if not isinstance(imp, dict) or not imp.get("path"):
                continue
            # externals are bare specifiers, not inputs
            target = imp["path"] if imp.get("external") else resolve_input(working_dir, imp["path"])
            if imp.get("kind") in DYNAMIC_KINDS:
                dynamic_ids.append(target)
            else:
                static_ids.append(target)
        source.modules[resolve_input(working_dir, path)] = ModuleInfo(static_ids, dynamic_ids)
    return source
