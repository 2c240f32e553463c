"""AST Parser utilities.

Language detection and parser registry.
"""

import os
import threading
from typing import Dict, Iterable, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseLanguageParser

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".cs": "csharp",
}

# Parser registry, keyed by language and serialization rules
_parser_registry: Dict[Tuple[str, frozenset, str], "BaseLanguageParser"] = {}
_registry_lock = threading.Lock()


def detect_language(file_path: str) -> Optional[str]:
    """Detect programming language from file extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier string or None if unsupported
    """
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_parser(
    language: str,
    serializable_modifiers: Iterable[str] = ("public",),
    serialization_attribute: str = "SerializeField",
) -> "BaseLanguageParser":
    """Get a parser instance for the given language.

    Parsers hold no per-file state, so one instance per configuration is
    shared by every worker thread.

    Args:
        language: Language identifier (e.g., "csharp")
        serializable_modifiers: Modifiers that make a field assignable
        serialization_attribute: Attribute name that forces a field assignable

    Returns:
        Parser instance

    Raises:
        ValueError: If language is not supported
    """
    key = (language, frozenset(serializable_modifiers), serialization_attribute)
    with _registry_lock:
        if key not in _parser_registry:
            if language == "csharp":
                from .csharp_parser import CSharpParser
                _parser_registry[key] = CSharpParser(serializable_modifiers, serialization_attribute)
            else:
                raise ValueError(
                    f"Unsupported language: {language}. "
                    f"Supported: {list(SUPPORTED_EXTENSIONS.values())}"
                )

        return _parser_registry[key]


def is_supported_file(file_path: str) -> bool:
    """Check if a file has a supported language extension."""
    return detect_language(file_path) is not None
