from entrydag.dag.filters import DEFAULT_EXTENSIONS, ExtensionFilter, SkipPolicy, must_skip, normalize_ext


def test_normalize_ext():
    assert normalize_ext("ts") == ".ts"
    assert normalize_ext(" .VUE ") == ".vue"
    assert normalize_ext(".jsx") == ".jsx"


def test_default_extensions():
    f = ExtensionFilter()
    assert f.extensions == frozenset(DEFAULT_EXTENSIONS)
    for name in ("a.js", "a.jsx", "a.ts", "a.tsx", "a.vue"):
        assert f.is_supported(f"/p/{name}")
    for name in ("a.css", "a.json", "a.html", "Makefile", ".env"):
        assert not f.is_supported(f"/p/{name}")


def test_empty_extension_list_means_defaults():
    assert ExtensionFilter([]).extensions == frozenset(DEFAULT_EXTENSIONS)


def test_configured_extensions_are_normalized():
    f = ExtensionFilter(["Svelte", ".MDX"])
    assert f.is_supported("/p/Page.svelte")
    assert f.is_supported("/p/doc.mdx")
    assert not f.is_supported("/p/main.ts")


def test_suffix_match_ignores_case_and_query():
    f = ExtensionFilter()
    assert f.is_supported("/p/App.VUE")
    assert f.is_supported("/p/App.vue?vue&type=style&lang.css")
    assert not f.is_supported("/p/style.css?inline")


def test_must_skip_defaults():
    assert must_skip("")
    assert must_skip(None)
    assert must_skip("/p/node_modules/vue/dist/vue.js")
    assert must_skip("\0vite/preload-helper.js")
    assert not must_skip("/p/src/main.ts")
    assert not must_skip("/p/src/\0weird.ts")


def test_exclude_patterns_match_canonical_ids():
    policy = SkipPolicy("/p", ["*.stories.tsx", "src/legacy/"])
    assert policy("/p/src/Button.stories.tsx")
    assert policy("/p/src/legacy/old.ts")
    assert not policy("/p/src/Button.tsx")
    assert not policy("/p/src/legacy.ts")
