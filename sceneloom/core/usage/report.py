"""Unused script report.

Diffs the script registry against the usage registry once every scene
has been processed and writes the result as CSV:

    Relative Path, GUID
    Assets/Scripts/Legacy.cs, 0f1e2d3c4b5a69788796a5b4c3d2e1f0
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from .registry import UsageRegistry

logger = logging.getLogger(__name__)

REPORT_HEADER = "Relative Path, GUID"


@dataclass(frozen=True)
class UnusedScript:
    guid: str
    path: str


def find_unused_scripts(
    script_registry: Mapping[str, str],
    usage: UsageRegistry,
) -> List[UnusedScript]:
    """Scripts in the registry that no behaviour reference validated.

    Args:
        script_registry: guid -> script source path
        usage: Completed UsageRegistry

    Returns:
        UnusedScript list sorted by path, then guid
    """
    used = usage.snapshot()
    unused = [
        UnusedScript(guid=guid, path=path)
        for guid, path in script_registry.items()
        if path not in used
    ]
    return sorted(unused, key=lambda s: (s.path, s.guid))


def _display_path(path: str, project_root: Optional[str]) -> str:
    if not project_root:
        return path
    root = os.path.realpath(project_root)
    absolute = os.path.realpath(path)
    if os.path.commonpath([root, absolute]) != root:
        return path
    return os.path.relpath(absolute, root).replace(os.sep, "/")


def write_unused_report(
    entries: Iterable[UnusedScript],
    output_path: str,
    project_root: Optional[str] = None,
) -> int:
    """Write the unused script CSV. Returns the number of data rows.

    Args:
        entries: Unused scripts, already ordered
        output_path: Destination CSV file
        project_root: When given, paths under it are written relative to it
    """
    rows = 0
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(REPORT_HEADER + "\n")
        for entry in entries:
            f.write(f"{_display_path(entry.path, project_root)}, {entry.guid}\n")
            rows += 1
    logger.info(f"Wrote {rows} unused scripts to {output_path}")
    return rows
