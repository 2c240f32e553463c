"""Document classification.

Partitions a scene's tagged documents into entity records, transform
records and behaviour references. Unity stores every cross-document link
as a single-key wrapper record such as `{fileID: 1234}`, and the
classifier reads those links by position, never by key name.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from .models import (
    BehaviourReference,
    ClassifiedScene,
    EntityRecord,
    TaggedDocument,
    TransformRecord,
)

logger = logging.getLogger(__name__)

ENTITY_TYPE = "GameObject"
TRANSFORM_TYPES = frozenset({"Transform", "RectTransform"})
BEHAVIOUR_TYPE = "MonoBehaviour"

RESERVED_PREFIX = "m_"
UNNAMED_ENTITY = "(unnamed)"

# m_Script is {fileID, guid, type}; the guid is always the second value.
SCRIPT_GUID_INDEX = 1


def _first_value(record: Any) -> Any:
    """First value of a mapping, or None."""
    if isinstance(record, dict) and record:
        return next(iter(record.values()))
    return None


def _as_id(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _reference(payload: Mapping[str, Any], key: str) -> str:
    """Anchor held by a single-key wrapper record, e.g. m_Father."""
    return _as_id(_first_value(payload.get(key)))


def _owned_transform(payload: Mapping[str, Any]) -> str:
    """Anchor held by the first component record of a GameObject.

    m_Component is a list of `{component: {fileID: N}}`; the transform is
    always the first entry.
    """
    components = payload.get("m_Component")
    if not isinstance(components, list):
        return ""
    for entry in components:
        if isinstance(entry, dict):
            return _as_id(_first_value(_first_value(entry)))
    return ""


def script_guid(payload: Mapping[str, Any]) -> Optional[str]:
    """Content identifier of a MonoBehaviour's m_Script record."""
    script = payload.get("m_Script")
    if not isinstance(script, dict):
        return None
    values = list(script.values())
    if len(values) <= SCRIPT_GUID_INDEX:
        return None
    guid = values[SCRIPT_GUID_INDEX]
    return guid if isinstance(guid, str) and guid else None


def is_reserved_property(name: str, reserved_prefix: str = RESERVED_PREFIX) -> bool:
    """Engine-internal keys (m_Enabled, m_Script, ...) are never script fields."""
    return name.startswith(reserved_prefix)


def classify_documents(
    documents: Iterable[TaggedDocument],
    script_registry: Mapping[str, str],
    reserved_prefix: str = RESERVED_PREFIX,
    transform_types: Iterable[str] = TRANSFORM_TYPES,
) -> ClassifiedScene:
    """Partition documents into entities, transforms and behaviour references.

    Documents without an anchor cannot be referenced and are skipped.
    Missing nested fields yield empty values for that record only.
    Behaviours whose guid is absent or unknown to script_registry are dropped.

    Args:
        documents: Tagged documents in file order
        script_registry: guid -> script source path
        reserved_prefix: Property prefix excluded from behaviour references
        transform_types: Document types treated as transforms

    Returns:
        ClassifiedScene with records in document order
    """
    transform_types = frozenset(transform_types)
    scene = ClassifiedScene()
    skipped = 0

    for document in documents:
        if not document.anchor:
            skipped += 1
            continue
        payload = document.payload

        if document.type_name == ENTITY_TYPE:
            name = payload.get("m_Name")
            scene.entities.append(EntityRecord(
                anchor_id=document.anchor,
                display_name=name if isinstance(name, str) else UNNAMED_ENTITY,
                owned_transform_id=_owned_transform(payload),
            ))

        elif document.type_name in transform_types:
            scene.transforms.append(TransformRecord(
                anchor_id=document.anchor,
                owning_entity_id=_reference(payload, "m_GameObject"),
                parent_transform_id=_reference(payload, "m_Father"),
            ))

        elif document.type_name == BEHAVIOUR_TYPE:
            guid = script_guid(payload)
            if guid is None or guid not in script_registry:
                continue
            scene.behaviours.append(BehaviourReference(
                script_guid=guid,
                script_path=script_registry[guid],
                property_names=frozenset(
                    key for key in payload if not is_reserved_property(key, reserved_prefix)
                ),
                anchor_id=document.anchor,
            ))

    if skipped:
        logger.debug(f"Skipped {skipped} documents without an anchor")

    return scene
