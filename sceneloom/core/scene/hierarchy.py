"""Hierarchy reconstruction.

Joins entity and transform records into a forest of Nodes keyed by entity
anchor. Transforms carry the parent links; entities carry the names:

    Transform(&20) -m_GameObject-> GameObject(&10)      node 10
       |
    m_Father
       v
    Transform(&21) -m_GameObject-> GameObject(&11)      parent of node 10

Every hop is a dictionary lookup. A failed hop makes the node a root.
"""

import logging
from typing import Dict, Iterable, List, Mapping

from .models import EntityRecord, Node, TransformRecord

logger = logging.getLogger(__name__)


def _parent_entity_id(
    transform: TransformRecord,
    transforms: Mapping[str, TransformRecord],
    entities: Mapping[str, EntityRecord],
) -> str:
    """Entity owning the parent transform, or "" when either hop fails."""
    parent_transform = transforms.get(transform.parent_transform_id)
    if parent_transform is None:
        return ""
    if parent_transform.owning_entity_id not in entities:
        return ""
    return parent_transform.owning_entity_id


def _reaches(start_id: str, target_id: str, nodes: Mapping[str, Node]) -> bool:
    """True if target_id is start_id or one of its ancestors.

    Stops on any revisited id, so it terminates on data that still
    contains an unbroken cycle.
    """
    seen = set()
    current = start_id
    while current and current not in seen:
        if current == target_id:
            return True
        seen.add(current)
        node = nodes.get(current)
        if node is None:
            return False
        current = node.parent_id
    return False


def build_hierarchy(
    transforms: Iterable[TransformRecord],
    entities: Iterable[EntityRecord],
) -> Dict[str, Node]:
    """Build the node forest from classified records.

    Pass 1 creates one node per entity that owns a transform, in transform
    document order. An entity with several transforms keeps the first.

    Pass 2 links every node into its parent's child list. A parent missing
    from the node table, or a link that would make a node its own ancestor,
    turns the node into a root.

    Args:
        transforms: Transform records in document order
        entities: Entity records

    Returns:
        Dict of entity anchor id -> Node, in first-encountered order
    """
    transforms = list(transforms)
    entity_table = {e.anchor_id: e for e in entities}
    transform_table = {t.anchor_id: t for t in transforms}
    nodes: Dict[str, Node] = {}

    for transform in transforms:
        entity = entity_table.get(transform.owning_entity_id)
        if entity is None:
            logger.debug(
                f"Transform {transform.anchor_id} references unknown entity "
                f"{transform.owning_entity_id!r}"
            )
            continue
        if entity.anchor_id in nodes:
            logger.debug(f"Entity {entity.anchor_id} already placed; ignoring transform {transform.anchor_id}")
            continue
        nodes[entity.anchor_id] = Node(
            id=entity.anchor_id,
            name=entity.display_name,
            parent_id=_parent_entity_id(transform, transform_table, entity_table),
        )

    for node in nodes.values():
        if not node.parent_id:
            continue
        parent = nodes.get(node.parent_id)
        if parent is None:
            node.parent_id = ""
            continue
        if _reaches(parent.id, node.id, nodes):
            logger.warning(f"Parent cycle through entity {node.id} ({node.name}); placing it at the root")
            node.parent_id = ""
            continue
        parent.child_ids.append(node.id)

    return nodes


def root_nodes(nodes: Mapping[str, Node]) -> List[Node]:
    """Nodes without a parent, in first-encountered order."""
    return [node for node in nodes.values() if node.is_root]
