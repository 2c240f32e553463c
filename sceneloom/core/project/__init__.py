from .unity_project import (
    ProjectLayoutError,
    build_script_registry,
    dump_names,
    list_scenes,
    read_meta_guid,
    validate_project,
)

__all__ = [
    "ProjectLayoutError",
    "build_script_registry",
    "dump_names",
    "list_scenes",
    "read_meta_guid",
    "validate_project",
]
