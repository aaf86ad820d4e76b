import argparse
import os
import sys

from entrydag.config import load_config
from entrydag.path import artifact_to_graph, fan_out, find_path, load_artifact, write_graphml
from entrydag.plugin import EntryDagPlugin
from entrydag.registry.adapter_registry import FORMATS, load_module_info


def create_dag(
    manifest_path: str,
    root: str = None,
    entries=None,
    out_dir: str = None,
    output_file: str = None,
    extensions=None,
    exclude=None,
    manifest_format: str = "rollup",
    config_path: str = None,
    graphml: bool = False,
):
    """
    Offline run of the plugin: read a module manifest dumped by the bundler,
    then build and write the entry DAG as the plugin would at bundle time.
    Returns the artifact path.
    """
    options, context = load_config(
        config_path,
        {
            "root": root,
            "entries": entries,
            "out_dir": out_dir,
            "output_file": output_file,
            "extensions": extensions,
            "exclude": exclude,
        },
    )
    root_dir = context.resolved_root()
    # entries may be given relative to the project root
    options.entries = [os.path.join(root_dir, e) if e and not os.path.isabs(e) else e for e in options.entries]

    lookup = load_module_info(manifest_path, manifest_format, working_dir=root_dir)

    plugin = EntryDagPlugin(options)
    plugin.config_resolved(context)
    out_path = plugin.generate_bundle(lookup)

    if graphml:
        graph_ml = os.path.splitext(out_path)[0] + ".graphml"
        write_graphml(artifact_to_graph(plugin.last_output.to_dict()), graph_ml)
        print(f"Wrote {graph_ml}")

    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Entry DAG tool")
    subparsers = parser.add_subparsers(dest="function", help="Available functions")

    # create_dag
    parser_create = subparsers.add_parser("create_dag", help="Build the entry DAG artifact from a module manifest")
    parser_create.add_argument("manifest", help="Module manifest JSON dumped by the bundler")
    parser_create.add_argument("--root", default=None, help="Project root (default: config or current directory)")
    parser_create.add_argument("--entry", dest="entries", action="append", default=None,
                               help="Entry module, absolute or root-relative (repeatable)")
    parser_create.add_argument("--out_dir", default=None, help="Bundle output directory (default: dist)")
    parser_create.add_argument("--output_file", default=None, help="Artifact file name (default: entry-dag.json)")
    parser_create.add_argument("--extensions", nargs="+", default=None,
                               help="Supported module extensions (default: .js .jsx .ts .tsx .vue)")
    parser_create.add_argument("--exclude", nargs="+", default=None, help="gitignore-style patterns to leave out")
    parser_create.add_argument("--format", dest="manifest_format", choices=FORMATS, default="rollup",
                               help="Manifest format (default: rollup)")
    parser_create.add_argument("--config", dest="config_path", default=None,
                               help="TOML config file (pyproject.toml reads [tool.entrydag])")
    parser_create.add_argument("--graphml", action="store_true", help="Also write a GraphML copy of the DAG")

    # fan_out
    parser_fan = subparsers.add_parser("fan_out", help="List every module an entry reaches")
    parser_fan.add_argument("artifact", help="Entry DAG JSON artifact")
    parser_fan.add_argument("entry", help="Canonical id of the entry")
    parser_fan.add_argument("--static_only", action="store_true", help="Follow static imports only")

    # find_path
    parser_path = subparsers.add_parser("find_path", help="Show how a module is reached")
    parser_path.add_argument("artifact", help="Entry DAG artifact (.json or .graphml)")
    parser_path.add_argument("target", help="Canonical id of the target module")
    parser_path.add_argument("--source", default=None, help="Canonical id to start from")

    args = parser.parse_args(argv)

    if not args.function:
        parser.print_help()
        return

    try:
        if args.function == "create_dag":
            create_dag(
                args.manifest,
                root=args.root,
                entries=args.entries,
                out_dir=args.out_dir,
                output_file=args.output_file,
                extensions=args.extensions,
                exclude=args.exclude,
                manifest_format=args.manifest_format,
                config_path=args.config_path,
                graphml=args.graphml,
            )
        elif args.function == "fan_out":
            G = artifact_to_graph(load_artifact(args.artifact))
            for node in fan_out(G, args.entry, "static" if args.static_only else None):
                print(node)
        elif args.function == "find_path":
            find_path(args.artifact, args.target, args.source)

    except (OSError, ValueError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
