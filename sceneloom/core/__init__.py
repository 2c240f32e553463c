# Lazy imports so `from sceneloom.core.scene import ...` does not pull in
# tree-sitter and the project walker.

__all__ = [
    "explore_project",
    "ExplorationContext",
    "SceneProcessor",
    "ProjectLayoutError",
]

_IMPORT_MAP = {
    "explore_project": ".pipeline",
    "ExplorationContext": ".pipeline",
    "SceneProcessor": ".pipeline",
    "ProjectLayoutError": ".project",
}


def __getattr__(name):
    if name in _IMPORT_MAP:
        import importlib
        module = importlib.import_module(_IMPORT_MAP[name], __package__)
        return getattr(module, name)
    raise AttributeError(f"module 'sceneloom.core' has no attribute {name}")
