"""Core domain: form schema, persisted store, and submission reconciliation.

RULES:
- No Slack SDK imports in this package
"""

from officeorbit.core.reconciler import (
    EffectResult,
    PlanOutcome,
    SubmissionReconciler,
    TimeOffOutcome,
)
from officeorbit.core.store import JsonFileBackend, MemoryBackend, Store, load_manager_map

__all__ = [
    "EffectResult",
    "JsonFileBackend",
    "MemoryBackend",
    "PlanOutcome",
    "Store",
    "SubmissionReconciler",
    "TimeOffOutcome",
    "load_manager_map",
]
