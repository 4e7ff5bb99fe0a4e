"""
BuildPipeline — Drives the reference collector through a process build

Stands in for the process compiler's event source: for each process it
creates a fresh ProcessReferenceCollector, fires the callbacks in the
compiler's order, and publishes the finished ProcessIndex.

Publication is an explicit stage: the index is written into the
process metadata bag (when enabled) and into the IndexRegistry only
after on_build_complete returned. A failed build publishes nothing.

Builds of different processes can run concurrently (build_many);
each build owns its collector, the registry is the only shared object.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from .config import Config
from .core.index import ProcessIndex
from .core.listener import ProcessReferenceCollector
from .core.process import (
    ITEM_DEFINITIONS_KEY,
    MESSAGES_KEY,
    SIGNAL_NAMES_KEY,
    VARIABLE_KEY,
    ProcessDefinition,
)
from .core.registry import IndexRegistry

logger = logging.getLogger(__name__)


class BuildPipeline:
    """
    Builds processes and publishes their indexes.

    Args:
        config: Application configuration (defaults when None)
        registry: Sink for finished indexes (a private one when None)
    """

    def __init__(self, config: Optional[Config] = None, registry: Optional[IndexRegistry] = None):
        self.config = config or Config()
        self.registry = registry if registry is not None else IndexRegistry()

    def create_collector(self) -> ProcessReferenceCollector:
        """A fresh collector configured for one build."""
        return ProcessReferenceCollector(
            resolver=self.config.resolver.create_resolver(),
            dialects=self.config.dialects.create_registry(),
            wildcard_marker=self.config.resolver.wildcard_marker,
        )

    def build(self, process: ProcessDefinition) -> ProcessIndex:
        """Run one build and publish its index."""
        collector = self.create_collector()
        self.replay(process, collector)

        collector.on_complete(process)
        index = collector.on_build_complete(process)

        self.publish(process, index)
        return index

    def replay(self, process: ProcessDefinition, collector: ProcessReferenceCollector) -> None:
        """Fire the parse-phase callbacks for a process."""
        collector.on_process_added(process)

        for node in process.nodes:
            collector.on_node_added(node)
        for variable in process.variables:
            collector.on_meta_data_added(VARIABLE_KEY, variable)
        if process.item_definitions:
            collector.on_meta_data_added(ITEM_DEFINITIONS_KEY, dict(process.item_definitions))
        if process.signals:
            collector.on_meta_data_added(SIGNAL_NAMES_KEY, set(process.signals))
        if process.messages:
            collector.on_meta_data_added(MESSAGES_KEY, dict(process.messages))

    def publish(self, process: ProcessDefinition, index: ProcessIndex) -> bool:
        """
        Hand a finished index to later stages.

        Returns:
            True if the registry entry changed
        """
        if self.config.pipeline.publish_to_metadata:
            index.publish_to(process.metadata)
        changed = self.registry.publish(index)
        if not changed:
            logger.debug("Index of process %s unchanged", process.id)
        return changed

    def build_many(self, processes: Iterable[ProcessDefinition]) -> List[ProcessIndex]:
        """
        Build several processes concurrently.

        Results come back in input order. If any build fails, its
        exception is raised once every other build has finished.
        """
        processes = list(processes)
        if not processes:
            return []

        workers = min(self.config.pipeline.workers, len(processes))
        if workers == 1:
            return [self.build(p) for p in processes]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="procindex") as pool:
            futures = [pool.submit(self.build, p) for p in processes]

        # the with-block waited for every future
        return [future.result() for future in futures]
