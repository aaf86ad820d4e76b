# rollup_adapter.py
import sys
from typing import Any, Dict, List, Union

from entrydag.base.module_info import InMemoryModuleInfo, ModuleInfo


def _id_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def adapt_rollup_modules(raw: Union[List[Dict[str, Any]], Dict[str, Dict[str, Any]]]) -> InMemoryModuleInfo:
    """
    Input: a dump of the bundler's module infos, either
      - a list of {"id", "importedIds", "dynamicallyImportedIds"} records, or
      - a mapping id -> {"importedIds", "dynamicallyImportedIds"}.
    Output: an in-memory module-info source keyed by module id.
    Records without a usable id are dropped with a warning.
    """
    if isinstance(raw, dict):
        records = []
        for module_id, info in raw.items():
            if info is not None and not isinstance(info, dict):
                print(f"Warning: skipping malformed module record: {module_id!r}: {info!r}", file=sys.stderr)
                continue
            records.append(dict(info or {}, id=module_id))
    elif isinstance(raw, list):
        records = raw
    else:
        raise ValueError(f"Unsupported rollup module dump: expected list or object, got {type(raw).__name__}")

    source = InMemoryModuleInfo()
    for rec in records:
        if not isinstance(rec, dict) or not isinstance(rec.get("id"), str) or not rec["id"]:
            print(f"Warning: skipping malformed module record: {rec!r}", file=sys.stderr)
            continue
        source.modules[rec["id"]] = ModuleInfo(
            imported_ids=_id_list(rec.get("importedIds")),
            dynamically_imported_ids=_id_list(rec.get("dynamicallyImportedIds")),
        )
    return source
