"""Shared test fixtures for the officeorbit test suite.

WHY: The reconciler, bot handlers and HTTP API all need a store that does
not touch disk, a controllable clock, and a fake Slack platform.

HOW: MemoryBackend-backed Store, a step clock returning increasing epoch
milliseconds, and a MagicMock platform whose profile lookup succeeds by
default.

RULES:
- No fixture touches the real filesystem except through tmp_path
- Slack is never called for real
"""

from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from officeorbit.core.reconciler import SubmissionReconciler
from officeorbit.core.store import MemoryBackend, Store

EPOCH_START_MS = 1_700_000_000_000


class StepClock:
    """Returns start, start + step, start + 2*step, ... on each call."""

    def __init__(self, start: int = EPOCH_START_MS, step: int = 1000) -> None:
        self.start = start
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


def _plan_view(selections: Dict[str, str], week: str = "current") -> Dict[str, Any]:
    values = {
        slot: {"location_select": {"type": "static_select", "selected_option": {"value": code}}}
        for slot, code in selections.items()
    }
    return {"callback_id": "submit_plan", "private_metadata": week, "state": {"values": values}}


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return Store(backend)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def platform():
    fake = MagicMock()
    fake.get_user_profile.return_value = {"image_72": "https://avatars.example/U1_72.png"}
    return fake


@pytest.fixture
def reconciler(store, platform, clock):
    return SubmissionReconciler(store, platform, clock=clock)


@pytest.fixture
def plan_view():
    """Factory for weekly plan view payloads as Slack delivers them."""
    return _plan_view
