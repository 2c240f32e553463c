"""Scene stream loading with PyYAML's composer.

Unity scene files are multi-document YAML streams:

    %YAML 1.1
    %TAG !u! tag:unity3d.com,2011:
    --- !u!1 &1234
    GameObject:
      m_Name: Player
    --- !u!4 &5678 stripped
    Transform: ...

Documents are composed (not constructed) so every scalar keeps its raw
text, e.g. `{fileID: 0123}` keeps "0123". Each document is composed on
its own; a syntax error skips that document and nothing else.
"""

import logging
import re
from typing import Any, Iterator, List, Optional

import yaml

from .models import TaggedDocument

logger = logging.getLogger(__name__)

UNITY_TAG_HANDLE = "!u!"
UNITY_TAG_PREFIX = "tag:unity3d.com,2011:"

_DOCUMENT_START = re.compile(r"^---(\s|$)")
_STRIPPED_SUFFIX = re.compile(r"^(--- !u!\d+ &-?\w+) stripped\s*$")


class UnitySceneLoader(yaml.SafeLoader):
    """SafeLoader that records anchors on composed nodes and keeps the
    `!u!` tag handle declared for every document in the stream."""

    def process_directives(self):
        version, tags = super().process_directives()
        self.tag_handles.setdefault(UNITY_TAG_HANDLE, UNITY_TAG_PREFIX)
        return version, tags

    def compose_node(self, parent, index):
        event = self.peek_event()
        node = super().compose_node(parent, index)
        if not isinstance(event, yaml.AliasEvent) and event.anchor is not None:
            node.anchor = event.anchor
        return node


def _to_python(node: yaml.Node) -> Any:
    """Convert a composed node to ordered dicts/lists of raw strings."""
    if isinstance(node, yaml.MappingNode):
        return {str(_to_python(key)): _to_python(value) for key, value in node.value}
    if isinstance(node, yaml.SequenceNode):
        return [_to_python(item) for item in node.value]
    return node.value


def split_documents(text: str) -> Iterator[str]:
    """Yield the text of each `---` document, directives dropped."""
    chunk: List[str] = []
    started = False
    for line in text.splitlines():
        if _DOCUMENT_START.match(line):
            if started and chunk:
                yield "\n".join(chunk) + "\n"
            started = True
            chunk = [_STRIPPED_SUFFIX.sub(r"\1", line)]
        elif started:
            chunk.append(line)
    if started and chunk:
        yield "\n".join(chunk) + "\n"


def compose_document(chunk: str) -> Optional[TaggedDocument]:
    """Compose a single document chunk into a TaggedDocument.

    Returns None for empty documents and documents whose root is not a
    single-key mapping.

    Raises:
        yaml.YAMLError: If the chunk is not valid YAML
    """
    root = yaml.compose(chunk, Loader=UnitySceneLoader)
    if not isinstance(root, yaml.MappingNode) or not root.value:
        return None

    key_node, value_node = root.value[0]
    payload = _to_python(value_node)
    if not isinstance(payload, dict):
        payload = {}

    return TaggedDocument(
        type_name=str(key_node.value),
        anchor=getattr(root, "anchor", None),
        payload=payload,
    )


def load_documents(text: str, source_name: str = "<scene>") -> List[TaggedDocument]:
    """Load every well-formed document of a scene stream, in file order.

    Args:
        text: Full scene file contents
        source_name: Used in log messages only

    Returns:
        List of TaggedDocument
    """
    documents: List[TaggedDocument] = []
    for index, chunk in enumerate(split_documents(text)):
        try:
            document = compose_document(chunk)
        except yaml.YAMLError as e:
            logger.warning(f"Skipping malformed document #{index} in {source_name}: {e}")
            continue
        if document is not None:
            documents.append(document)
    return documents


def load_scene_file(path: str) -> List[TaggedDocument]:
    """Read and load a scene file. OSError propagates to the caller."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        text = f.read()
    documents = load_documents(text, source_name=path)
    logger.debug(f"Loaded {len(documents)} documents from {path}")
    return documents
