"""Conflict detection and resolution."""

from .detector import ConflictDetector, intervals_overlap
from .resolver import ConflictResolver, FallbackStrategy, NoFallback, severity_label

__all__ = [
    "ConflictDetector",
    "ConflictResolver",
    "FallbackStrategy",
    "NoFallback",
    "intervals_overlap",
    "severity_label",
]
