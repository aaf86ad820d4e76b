import json

from entrydag.adapters.esbuild_adapter import adapt_esbuild_metafile
from entrydag.adapters.rollup_adapter import adapt_rollup_modules

FORMATS = ("rollup", "esbuild")


def get_adapter(fmt: str):
    f = fmt.lower()
    if f in ("rollup", "vite"):
        return adapt_rollup_modules
    if f == "esbuild":
        return adapt_esbuild_metafile
    raise ValueError(f"No adapter for module manifest format: {fmt}")


def load_module_info(manifest_path: str, fmt: str = "rollup", working_dir: str = ""):
    """Read a bundler module manifest (JSON) into a ModuleInfoSource."""
    adapter = get_adapter(fmt)
    with open(manifest_path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if adapter is adapt_esbuild_metafile:
        return adapter(raw, working_dir)
    return adapter(raw)
