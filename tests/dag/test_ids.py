import os

from entrydag.dag.ids import normalize_id, to_canonical


def test_normalize_strips_query():
    assert normalize_id("/p/App.vue?vue&type=style&index=0") == "/p/App.vue"
    assert normalize_id("/p/a.ts") == "/p/a.ts"
    assert normalize_id("/p/a.ts?x?y") == "/p/a.ts"
    assert normalize_id("") == ""


def test_normalize_is_idempotent():
    for raw in ("/p/App.vue?raw", "a?b?c", "plain.js", "?only"):
        assert normalize_id(normalize_id(raw)) == normalize_id(raw)


def test_canonical_is_root_relative():
    assert to_canonical("/proj", "/proj/src/main.ts") == "src/main.ts"
    assert to_canonical("/proj", "/proj/src/main.ts?v=123") == "src/main.ts"
    assert to_canonical("/proj/", "/proj/src/main.ts") == "src/main.ts"


def test_canonical_outside_root():
    assert to_canonical("/proj/app", "/proj/shared/util.ts") == "../shared/util.ts"


def test_canonical_of_root_falls_back_to_absolute():
    assert to_canonical("/proj", "/proj") == "/proj"
    assert to_canonical("/proj", "/proj?x=1") == "/proj"


def test_canonical_is_deterministic():
    assert to_canonical("/proj", "/proj/a/b.ts?q") == to_canonical("/proj", "/proj/a/b.ts?other")


def test_canonical_uses_forward_slashes():
    rel = to_canonical(os.sep + "proj", os.sep.join(["", "proj", "src", "x.ts"]))
    assert rel == "src/x.ts"
