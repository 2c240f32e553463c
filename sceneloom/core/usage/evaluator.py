"""Usage evaluation for serialized behaviour instances.

A behaviour instance proves its script is used only when every one of its
non-reserved properties is a serializable field of that script. One
unexplained property voids the whole instance.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..scene.classifier import RESERVED_PREFIX, is_reserved_property
from ..scene.models import BehaviourReference
from .declaration_cache import DeclarationCache
from .registry import UsageRegistry

logger = logging.getLogger(__name__)


@dataclass
class UsageCheck:
    """Outcome of evaluating one behaviour reference."""
    script_guid: str
    script_path: str
    valid: bool
    unmatched: List[str] = field(default_factory=list)
    skipped: Optional[str] = None  # Reason the script could not be checked


class UsageEvaluator:
    """Checks behaviour references against declarations and records usage.

    Args:
        declarations: Shared DeclarationCache
        registry: Shared UsageRegistry
        reserved_prefix: Property prefix ignored during checks
    """

    def __init__(
        self,
        declarations: DeclarationCache,
        registry: UsageRegistry,
        reserved_prefix: str = RESERVED_PREFIX,
    ):
        self._declarations = declarations
        self._registry = registry
        self._reserved_prefix = reserved_prefix

    def evaluate(self, reference: BehaviourReference) -> UsageCheck:
        """Evaluate a reference, marking its script used when it is valid."""
        declared = self._declarations.fields(reference.script_path)
        if declared is None:
            return UsageCheck(
                script_guid=reference.script_guid,
                script_path=reference.script_path,
                valid=False,
                skipped="script could not be scanned",
            )

        unmatched = sorted(
            name for name in reference.property_names
            if not is_reserved_property(name, self._reserved_prefix) and name not in declared
        )
        if unmatched:
            logger.debug(
                f"Behaviour {reference.anchor_id or '?'} does not match {reference.script_path}: "
                f"undeclared {unmatched}"
            )
            return UsageCheck(
                script_guid=reference.script_guid,
                script_path=reference.script_path,
                valid=False,
                unmatched=unmatched,
            )

        if self._registry.add(reference.script_path):
            logger.debug(f"Marked {reference.script_path} as used")
        return UsageCheck(
            script_guid=reference.script_guid,
            script_path=reference.script_path,
            valid=True,
        )
