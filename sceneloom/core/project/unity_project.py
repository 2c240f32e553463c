"""Unity project layout: validation, scene listing, script registry.

A script's identity across scenes is the guid in its `.meta` sidecar:

    Assets/Scripts/Player.cs
    Assets/Scripts/Player.cs.meta   ->   guid: 4c1b2a...
"""

import logging
import os
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Set

from ...config import ExplorerConfig

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"
GUID_PREFIX = "guid:"


class ProjectLayoutError(Exception):
    """The project root does not look like a Unity project."""


def assets_path(project_root: str, config: ExplorerConfig) -> Path:
    return Path(project_root) / config.asset_dir


def validate_project(project_root: str, config: ExplorerConfig) -> Path:
    """Return the asset directory or raise ProjectLayoutError."""
    assets = assets_path(project_root, config)
    if not assets.is_dir():
        raise ProjectLayoutError("Project directory is not a Unity project.")
    return assets


def _is_excluded(path: Path, fragments: Iterable[str]) -> bool:
    text = str(path)
    return any(fragment in text for fragment in fragments)


def _find_files(root: Path, extension: str, fragments: Iterable[str]) -> List[Path]:
    fragments = list(fragments)
    return sorted(
        p for p in root.rglob(f"*{extension}")
        if p.is_file() and not _is_excluded(p.relative_to(root), fragments)
    )


def list_scenes(project_root: str, config: ExplorerConfig) -> List[str]:
    """All scene files under Assets, sorted, excluded fragments dropped."""
    assets = validate_project(project_root, config)
    scenes = [str(p) for p in _find_files(assets, config.scene_extension, config.excluded_fragments)]
    logger.info(f"Found {len(scenes)} scenes under {assets}")
    return scenes


def read_meta_guid(meta_path: Path) -> str | None:
    """The value of the first `guid:` line of a sidecar file."""
    with open(meta_path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            if line.startswith(GUID_PREFIX):
                return line.split(":", 1)[1].strip() or None
    return None


def build_script_registry(project_root: str, config: ExplorerConfig) -> Dict[str, str]:
    """Map guid -> absolute script path for every script with a sidecar.

    Args:
        project_root: Unity project root
        config: ExplorerConfig

    Returns:
        Dict of guid -> script path
    """
    assets = validate_project(project_root, config)
    registry: Dict[str, str] = {}

    for script in _find_files(assets, config.script_extension, config.excluded_fragments):
        meta = script.with_name(script.name + META_SUFFIX)
        if not meta.is_file():
            logger.debug(f"No sidecar for {script}")
            continue
        guid = read_meta_guid(meta)
        if guid is None:
            logger.debug(f"No guid line in {meta}")
            continue
        registry[guid] = str(script.resolve())

    logger.info(f"Registered {len(registry)} scripts")
    return registry


def dump_names(scenes: Iterable[str], assets_root: str) -> Dict[str, str]:
    """Assign each scene a unique dump file stem.

    The scene's own stem is used when no other scene shares it; otherwise
    the path relative to assets_root with separators replaced by `_`.
    Flattened paths can still clash (`X/Main` and `X_Main` both give
    `X_Main`), so any name left in use twice gets a numeric suffix in
    scene order: `X_Main`, `X_Main_2`.
    """
    scenes = list(scenes)
    stems = Counter(Path(scene).stem for scene in scenes)

    candidates = {}
    for scene in scenes:
        stem = Path(scene).stem
        if stems[stem] == 1:
            candidates[scene] = stem
            continue
        relative = os.path.relpath(os.path.splitext(scene)[0], assets_root)
        candidates[scene] = relative.replace(os.sep, "_").replace("/", "_")

    counts = Counter(candidates.values())
    reserved = set(candidates.values())
    taken: Set[str] = set()
    names = {}
    for scene in scenes:
        name = candidates[scene]
        if counts[name] > 1 and name in taken:
            suffix = 2
            while f"{name}_{suffix}" in reserved or f"{name}_{suffix}" in taken:
                suffix += 1
            name = f"{name}_{suffix}"
        taken.add(name)
        names[scene] = name
    return names
