import os
import tomllib
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from entrydag.dag.filters import DEFAULT_EXTENSIONS, normalize_ext

DEFAULT_OUTPUT_FILE = "entry-dag.json"
DEFAULT_OUT_DIR = "dist"


@dataclass
class Options:
    entries: List[str] = field(default_factory=list)
    output_file: str = DEFAULT_OUTPUT_FILE
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.extensions = [normalize_ext(e) for e in self.extensions] or list(DEFAULT_EXTENSIONS)


@dataclass
class BuildContext:
    """What the host build tool resolved: project root and bundle output dir."""

    root: str = ""
    out_dir: str = DEFAULT_OUT_DIR

    def resolved_root(self) -> str:
        return self.root or os.getcwd()

    def artifact_path(self, output_file: str) -> str:
        return os.path.join(self.resolved_root(), self.out_dir or DEFAULT_OUT_DIR, output_file)


_LIST_KEYS = ("entries", "extensions", "exclude")
_OPTION_KEYS = {"entries", "output_file", "extensions", "exclude"}
_CONTEXT_KEYS = {"root", "out_dir"}


def _check_table(table: Dict[str, Any], source: str) -> None:
    unknown = set(table) - _OPTION_KEYS - _CONTEXT_KEYS
    if unknown:
        raise ValueError(f"{source}: unknown option(s): {', '.join(sorted(unknown))}")
    for key in _LIST_KEYS:
        value = table.get(key)
        if value is not None and not (isinstance(value, list) and all(isinstance(v, str) for v in value)):
            raise ValueError(f"{source}: '{key}' must be a list of strings")
    for key in ("output_file", "root", "out_dir"):
        value = table.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{source}: '{key}' must be a string")


def read_config_table(config_path: str) -> Dict[str, Any]:
    """
    Load the entrydag table from a TOML file.

    In a pyproject.toml the settings live under [tool.entrydag]; any other
    file is read as a flat table of options.
    """
    try:
        with open(config_path, "rb") as f:
            parsed = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"Unable to read config {config_path}: {e}") from e

    if os.path.basename(config_path) == "pyproject.toml":
        table = parsed.get("tool", {}).get("entrydag", {})
    else:
        table = parsed
    _check_table(table, config_path)
    return table


def load_config(
    config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None
) -> Tuple[Options, BuildContext]:
    """Defaults < config file < overrides (None values in overrides are ignored)."""
    table: Dict[str, Any] = read_config_table(config_path) if config_path else {}
    if table.get("root"):
        # a root written in the config file is relative to that file
        table["root"] = os.path.join(os.path.dirname(os.path.abspath(config_path)), table["root"])
    for k, v in (overrides or {}).items():
        if v is not None:
            table[k] = v

    options = Options(**{k: table[k] for k in _OPTION_KEYS if k in table})
    context = BuildContext(**{k: table[k] for k in _CONTEXT_KEYS if k in table})
    if context.root:
        context = replace(context, root=os.path.abspath(context.root))
    return options, context
