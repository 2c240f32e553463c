"""Data contracts for scene reconstruction.

Relationships between records are stored as anchor ids and resolved by
explicit lookups; no record holds a reference to another record.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional


@dataclass
class TaggedDocument:
    """One `--- !u!<classId> &<anchor>` document of a scene stream."""
    type_name: str                 # "GameObject", "Transform", "MonoBehaviour", ...
    anchor: Optional[str]          # "1234567" or None when unlabelled
    payload: Dict[str, Any]        # Ordered mapping, every scalar kept as str


@dataclass
class EntityRecord:
    """A scene entity (GameObject) and the anchor of its transform."""
    anchor_id: str
    display_name: str
    owned_transform_id: str


@dataclass
class TransformRecord:
    """A transform and the anchors it points at ("" or "0" means none)."""
    anchor_id: str
    owning_entity_id: str
    parent_transform_id: str = ""


@dataclass
class BehaviourReference:
    """Serialized properties of one MonoBehaviour bound to a known script."""
    script_guid: str
    script_path: str
    property_names: FrozenSet[str]
    anchor_id: str = ""


@dataclass
class ClassifiedScene:
    """Output of the document classifier, in document order."""
    entities: List[EntityRecord] = field(default_factory=list)
    transforms: List[TransformRecord] = field(default_factory=list)
    behaviours: List[BehaviourReference] = field(default_factory=list)


@dataclass
class Node:
    """A resolved scene tree node, keyed by entity anchor id.

    child_ids keeps first-encountered order so dumps are reproducible.
    """
    id: str
    name: str
    parent_id: str = ""
    child_ids: List[str] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return not self.parent_id
