"""Scene reconstruction: loading, classification, hierarchy and dumps."""

from .classifier import classify_documents
from .hierarchy import build_hierarchy, root_nodes
from .loader import load_documents, load_scene_file
from .models import (
    BehaviourReference,
    ClassifiedScene,
    EntityRecord,
    Node,
    TaggedDocument,
    TransformRecord,
)
from .tree_dump import render_tree, write_tree_dump

__all__ = [
    "classify_documents",
    "build_hierarchy",
    "root_nodes",
    "load_documents",
    "load_scene_file",
    "render_tree",
    "write_tree_dump",
    "BehaviourReference",
    "ClassifiedScene",
    "EntityRecord",
    "Node",
    "TaggedDocument",
    "TransformRecord",
]
