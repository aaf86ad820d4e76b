import json

import pytest

from entrydag.main import create_dag, main


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "web"
    root.mkdir()
    manifest = tmp_path / "modules.json"
    manifest.write_text(json.dumps([
        {
            "id": f"{root}/src/main.ts",
            "importedIds": [f"{root}/src/a.ts", f"{root}/node_modules/vue/index.js"],
            "dynamicallyImportedIds": [f"{root}/src/pages/About.vue"],
        },
        {"id": f"{root}/src/a.ts", "importedIds": [f"{root}/src/main.ts"], "dynamicallyImportedIds": []},
        {"id": f"{root}/src/pages/About.vue", "importedIds": [f"{root}/src/a.ts"], "dynamicallyImportedIds": []},
    ]))
    return root, manifest


def test_create_dag(project):
    root, manifest = project
    out_path = create_dag(str(manifest), root=str(root), entries=["src/main.ts"])
    assert out_path == str(root / "dist" / "entry-dag.json")
    data = json.loads((root / "dist" / "entry-dag.json").read_text())
    assert [n["id"] for n in data["nodes"]] == ["src/main.ts", "src/a.ts", "src/pages/About.vue"]
    assert data["entries"] == ["src/main.ts"]
    assert {"source": "src/pages/About.vue", "target": "src/a.ts", "kind": "static"} in data["edges"]


def test_create_dag_with_graphml(project):
    root, manifest = project
    create_dag(str(manifest), root=str(root), entries=[f"{root}/src/main.ts"], graphml=True)
    assert (root / "dist" / "entry-dag.graphml").exists()


def test_cli_roundtrip(project, capsys):
    root, manifest = project
    main(["create_dag", str(manifest), "--root", str(root), "--entry", "src/main.ts",
          "--output_file", "routes.json", "--extensions", "ts"])
    artifact = root / "dist" / "routes.json"
    data = json.loads(artifact.read_text())
    assert [n["id"] for n in data["nodes"]] == ["src/main.ts", "src/a.ts"]
    capsys.readouterr()

    main(["fan_out", str(artifact), "src/main.ts"])
    assert capsys.readouterr().out.split() == ["src/a.ts"]


def test_cli_reads_pyproject(project):
    root, manifest = project
    (root / "pyproject.toml").write_text(
        f'[tool.entrydag]\nroot = "{root}"\nentries = ["src/main.ts"]\nout_dir = "out"\n'
    )
    main(["create_dag", str(manifest), "--config", str(root / "pyproject.toml")])
    assert (root / "out" / "entry-dag.json").exists()


def test_cli_errors_exit_1(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["create_dag", str(tmp_path / "missing.json"), "--root", str(tmp_path)])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_no_subcommand_prints_help(capsys):
    main([])
    assert "create_dag" in capsys.readouterr().out
