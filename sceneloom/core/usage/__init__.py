"""Script usage tracking: declaration cache, registry, evaluation, report."""

from .declaration_cache import DeclarationCache
from .evaluator import UsageCheck, UsageEvaluator
from .registry import UsageRegistry
from .report import UnusedScript, find_unused_scripts, write_unused_report

__all__ = [
    "DeclarationCache",
    "UsageCheck",
    "UsageEvaluator",
    "UsageRegistry",
    "UnusedScript",
    "find_unused_scripts",
    "write_unused_report",
]
