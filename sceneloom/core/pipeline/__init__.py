from .explorer import ExplorationSummary, explore_project
from .scene_processor import ExplorationContext, SceneProcessor, SceneResult

__all__ = [
    "ExplorationContext",
    "ExplorationSummary",
    "SceneProcessor",
    "SceneResult",
    "explore_project",
]
