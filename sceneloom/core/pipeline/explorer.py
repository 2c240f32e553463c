"""Whole-project run: enumerate, process scenes in parallel, report."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ...config import ExplorerConfig
from ..project import build_script_registry, dump_names, list_scenes, validate_project
from ..usage import UnusedScript, find_unused_scripts, write_unused_report
from .scene_processor import ExplorationContext, SceneProcessor, SceneResult

logger = logging.getLogger(__name__)


@dataclass
class ExplorationSummary:
    """Everything a run produced."""
    scenes: List[SceneResult] = field(default_factory=list)
    unused: List[UnusedScript] = field(default_factory=list)
    report_path: str = ""
    cache_stats: Dict[str, int] = field(default_factory=dict)

    @property
    def failed_scenes(self) -> List[SceneResult]:
        return [s for s in self.scenes if not s.ok]


def explore_project(
    project_root: str,
    output_dir: str,
    config: Optional[ExplorerConfig] = None,
) -> ExplorationSummary:
    """Dump every scene tree and report scripts no scene uses.

    Args:
        project_root: Unity project root (must contain the asset directory)
        output_dir: Created if missing; receives dumps and the CSV report
        config: ExplorerConfig, defaults when None

    Returns:
        ExplorationSummary

    Raises:
        ProjectLayoutError: If the project root has no asset directory
    """
    config = config or ExplorerConfig()
    assets = validate_project(project_root, config)

    scenes = list_scenes(project_root, config)
    script_registry = build_script_registry(project_root, config)

    Path(output_dir).mkdir(parents=True, exist_ok=True)
    names = dump_names(scenes, str(assets))
    jobs = {scene: os.path.join(output_dir, f"{names[scene]}.txt") for scene in scenes}

    context = ExplorationContext.create(script_registry, config)
    results = SceneProcessor(context).process_all(jobs)

    # Every worker has joined; the usage registry is complete.
    unused = find_unused_scripts(script_registry, context.usage)
    report_path = os.path.join(output_dir, config.report_name)
    write_unused_report(unused, report_path, project_root=project_root)

    summary = ExplorationSummary(
        scenes=results,
        unused=unused,
        report_path=report_path,
        cache_stats=context.declarations.get_stats(),
    )
    logger.info(
        f"Explored {len(results)} scenes ({len(summary.failed_scenes)} failed), "
        f"{len(context.usage)}/{len(script_registry)} scripts used, "
        f"declaration cache: {summary.cache_stats}"
    )
    return summary
