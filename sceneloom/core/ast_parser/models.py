"""AST Parser data models.

Defines the data structures for parsed field declarations.
These are pure data containers with no parsing logic.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List


@dataclass
class FieldDeclaration:
    """A single field declarator extracted from a script.

    `public int a, b;` produces two FieldDeclaration objects sharing
    type, modifiers and attributes.
    """

    name: str  # "speed"
    type_name: str  # "float"
    line: int
    parent_name: str = ""  # Enclosing type: "PlayerController"
    modifiers: List[str] = field(default_factory=list)  # ["public", "static"]
    attributes: List[str] = field(default_factory=list)  # ["SerializeField", "Range"]
    serializable: bool = False


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class DeclarationResult:
    """Complete declaration scan for a single script file."""

    file_path: str
    language: str
    fields: List[FieldDeclaration]
    line_count: int = 0
    errors: List[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """False when the script could not be scanned at all."""
        return not any(e.severity == "error" for e in self.errors)

    @property
    def serializable_names(self) -> FrozenSet[str]:
        return frozenset(f.name for f in self.fields if f.serializable)
