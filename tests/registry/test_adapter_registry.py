import json

import pytest

from entrydag.adapters.esbuild_adapter import adapt_esbuild_metafile
from entrydag.adapters.rollup_adapter import adapt_rollup_modules
from entrydag.registry.adapter_registry import get_adapter, load_module_info


def test_get_adapter():
    assert get_adapter("rollup") is adapt_rollup_modules
    assert get_adapter("Vite") is adapt_rollup_modules
    assert get_adapter("ESBUILD") is adapt_esbuild_metafile
    with pytest.raises(ValueError):
        get_adapter("webpack")


def test_load_rollup_manifest(tmp_path):
    manifest = tmp_path / "modules.json"
    manifest.write_text(json.dumps([{"id": "/p/a.ts", "importedIds": ["/p/b.ts"]}]))
    source = load_module_info(str(manifest))
    assert source("/p/a.ts").imported_ids == ["/p/b.ts"]


def test_load_esbuild_metafile(tmp_path):
    manifest = tmp_path / "meta.json"
    manifest.write_text(json.dumps({"inputs": {"src/a.ts": {"imports": [{"path": "src/b.ts", "kind": "dynamic-import"}]}}}))
    source = load_module_info(str(manifest), "esbuild", working_dir="/p")
    assert source("/p/src/a.ts").dynamically_imported_ids == ["/p/src/b.ts"]
