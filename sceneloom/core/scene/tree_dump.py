"""Plain-text scene tree dumps.

One line per node, depth-first pre-order from every root, indented by
repeating a marker once per level:

    Main Camera
    Player
    --Body
    ----Weapon
"""

import logging
from pathlib import Path
from typing import List, Mapping

from .hierarchy import root_nodes
from .models import Node

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "--"


def render_tree(nodes: Mapping[str, Node], indent: str = DEFAULT_INDENT) -> List[str]:
    """Render the forest as indented lines (no trailing newlines)."""
    lines: List[str] = []
    stack = [(node, 0) for node in reversed(root_nodes(nodes))]
    while stack:
        node, depth = stack.pop()
        lines.append(indent * depth + node.name)
        for child_id in reversed(node.child_ids):
            stack.append((nodes[child_id], depth + 1))
    return lines


def write_tree_dump(nodes: Mapping[str, Node], output_path: str, indent: str = DEFAULT_INDENT) -> int:
    """Write the rendered tree to output_path. Returns the line count."""
    lines = render_tree(nodes, indent)
    with open(Path(output_path), "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    logger.debug(f"Wrote {len(lines)} lines to {output_path}")
    return len(lines)
