"""Per-scene processing and the parallel scene pool.

Each scene runs load -> classify -> build hierarchy -> evaluate behaviours
-> write dump on one worker thread. The only state shared between workers
lives in ExplorationContext: the DeclarationCache (single-flight) and the
UsageRegistry (add-only).
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ...config import ExplorerConfig
from ..scene import (
    TaggedDocument,
    Node,
    build_hierarchy,
    classify_documents,
    load_scene_file,
    write_tree_dump,
)
from ..usage import DeclarationCache, UsageCheck, UsageEvaluator, UsageRegistry

logger = logging.getLogger(__name__)


@dataclass
class ExplorationContext:
    """Run-wide state handed to every scene worker."""
    script_registry: Mapping[str, str]
    declarations: DeclarationCache
    usage: UsageRegistry
    config: ExplorerConfig = field(default_factory=ExplorerConfig)

    @classmethod
    def create(cls, script_registry: Mapping[str, str], config: ExplorerConfig) -> "ExplorationContext":
        return cls(
            script_registry=script_registry,
            declarations=DeclarationCache(
                serializable_modifiers=config.serializable_modifiers,
                serialization_attribute=config.serialization_attribute,
            ),
            usage=UsageRegistry(),
            config=config,
        )


@dataclass
class SceneResult:
    """Outcome of processing one scene."""
    scene_path: str
    dump_path: str
    node_count: int = 0
    root_count: int = 0
    behaviour_count: int = 0
    valid_behaviours: int = 0
    elapsed_ms: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SceneProcessor:
    """Builds scene trees and feeds behaviour references to the evaluator.

    Args:
        context: Shared ExplorationContext
    """

    def __init__(self, context: ExplorationContext):
        self._context = context
        self._evaluator = UsageEvaluator(
            context.declarations,
            context.usage,
            reserved_prefix=context.config.reserved_prefix,
        )

    def build_tree(self, documents: Sequence[TaggedDocument]) -> Tuple[Dict[str, Node], List[UsageCheck]]:
        """Classify documents, build the forest and evaluate behaviours.

        Returns:
            (nodes keyed by entity anchor, one UsageCheck per behaviour)
        """
        config = self._context.config
        scene = classify_documents(
            documents,
            self._context.script_registry,
            reserved_prefix=config.reserved_prefix,
            transform_types=config.transform_types,
        )
        nodes = build_hierarchy(scene.transforms, scene.entities)
        checks = [self._evaluator.evaluate(reference) for reference in scene.behaviours]
        return nodes, checks

    def process(self, scene_path: str, dump_path: str) -> SceneResult:
        """Process one scene file and write its tree dump.

        OSError from reading or writing propagates to the caller.
        """
        start_time = time.time()
        documents = load_scene_file(scene_path)
        nodes, checks = self.build_tree(documents)
        write_tree_dump(nodes, dump_path, indent=self._context.config.indent)

        result = SceneResult(
            scene_path=scene_path,
            dump_path=dump_path,
            node_count=len(nodes),
            root_count=sum(1 for n in nodes.values() if n.is_root),
            behaviour_count=len(checks),
            valid_behaviours=sum(1 for c in checks if c.valid),
            elapsed_ms=int((time.time() - start_time) * 1000),
        )
        logger.info(
            f"Processed {scene_path}: {result.node_count} nodes, "
            f"{result.valid_behaviours}/{result.behaviour_count} behaviours valid "
            f"({result.elapsed_ms}ms)"
        )
        return result

    def process_all(self, jobs: Mapping[str, str]) -> List[SceneResult]:
        """Process scenes in parallel; returns after every worker finished.

        A failing scene is logged and reported in its SceneResult; the
        others carry on.

        Args:
            jobs: scene path -> dump path

        Returns:
            SceneResult list in the order of jobs
        """
        results: Dict[str, SceneResult] = {}
        max_workers = self._context.config.max_workers

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="scene") as executor:
            futures = {
                executor.submit(self.process, scene, dump): scene
                for scene, dump in jobs.items()
            }
            for future in as_completed(futures):
                scene = futures[future]
                try:
                    results[scene] = future.result()
                except Exception as e:
                    logger.error(f"Failed to process scene {scene}: {e}")
                    results[scene] = SceneResult(scene_path=scene, dump_path=jobs[scene], error=str(e))

        return [results[scene] for scene in jobs]
