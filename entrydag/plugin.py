from typing import Optional

from entrydag.base.module_info import ModuleLookup
from entrydag.config import BuildContext, Options
from entrydag.dag.builder import build_entry_dag
from entrydag.dag.output import DagOutput, write_artifact

PLUGIN_NAME = "entry-dag"


class EntryDagPlugin:
    """
    Build-tool plugin: remembers the resolved build context, then at bundle
    generation walks the host's module graph from the configured entries and
    writes the DAG artifact into the output directory.
    """

    name = PLUGIN_NAME

    def __init__(self, options: Optional[Options] = None):
        self.options = options or Options()
        self.context: Optional[BuildContext] = None
        self.last_output: Optional[DagOutput] = None

    def config_resolved(self, context: BuildContext) -> None:
        self.context = context

    def generate_bundle(self, lookup: ModuleLookup) -> Optional[str]:
        if self.context is None:
            return None
        root = self.context.resolved_root()

        self.last_output = build_entry_dag(
            root,
            self.options.entries,
            lookup,
            extensions=self.options.extensions,
            exclude=self.options.exclude,
        )
        out_path = write_artifact(self.last_output, self.context.artifact_path(self.options.output_file))
        print(f"[{PLUGIN_NAME}] Generated {self.options.output_file}")
        return out_path


def entry_dag(options: Optional[Options] = None) -> EntryDagPlugin:
    return EntryDagPlugin(options)
