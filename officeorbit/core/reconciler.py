"""Submission reconciler: form values in, persisted records and Slack side effects out.

WHY: A weekly plan submission has to land in the store and then be
mirrored into the user's Slack profile. The persisted record is the
primary outcome; the profile updates are best-effort and must never undo
or block it.

HOW: SubmissionReconciler owns a Store and a Platform (the outbound Slack
calls). reconcile_plan_submission() writes the record under the store
lock, then runs three independent side effects: avatar refresh, status
update derived from Monday, confirmation DM. Each side effect returns an
EffectResult which is logged; exceptions from the platform are caught
per effect.

RULES:
- Only day-slot keys are kept; other fields are ignored
- Resubmitting a week replaces the whole record (no per-day merge)
- Timestamps are epoch milliseconds from the injected clock
- Status comes from day_0 only, defaulting to "home" when absent
- An unknown location code means no status call and no error
- A failed profile fetch leaves users[user_id] untouched
- Time-off submissions are persisted and confirmed by DM, with no
  avatar/status side effects
"""

from __future__ import annotations

import copy
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from officeorbit.core.schema import (
    DURATION_OPTIONS,
    LEAVE_TYPE_OPTIONS,
    LOCATION_HOME,
    MONDAY_SLOT,
    is_day_slot,
    option_label,
    status_for_location,
)
from officeorbit.core.store import Store

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class Platform(Protocol):
    """Outbound chat-platform calls the reconciler depends on.

    Every method raises on failure; the reconciler catches.
    """

    def get_user_profile(self, user_id: str) -> Dict[str, Any]:
        ...

    def set_status(self, user_id: str, text: str, emoji: str, expiration: int = 0) -> None:
        ...

    def post_direct_message(self, user_id: str, text: str) -> None:
        ...


@dataclass
class EffectResult:
    """Outcome of one best-effort side effect."""

    name: str
    ok: bool
    skipped: bool = False
    error: Optional[str] = None

    def log(self, user_id: str) -> None:
        if self.skipped:
            logger.info("Skipped %s for %s", self.name, user_id)
        elif self.ok:
            logger.debug("%s succeeded for %s", self.name, user_id)
        else:
            logger.warning("%s failed for %s: %s", self.name, user_id, self.error)


@dataclass
class PlanOutcome:
    """What reconcile_plan_submission did."""

    user_id: str
    week: str
    record: Dict[str, Any]
    persisted: bool
    effects: List[EffectResult] = field(default_factory=list)

    def effect(self, name: str) -> Optional[EffectResult]:
        for result in self.effects:
            if result.name == name:
                return result
        return None


@dataclass
class TimeOffOutcome:
    """What reconcile_timeoff_submission did."""

    user_id: str
    date: str
    record: Dict[str, Any]
    persisted: bool
    effects: List[EffectResult] = field(default_factory=list)


def extract_locations(field_values: Mapping[str, Any]) -> Dict[str, str]:
    """Keep only day-slot entries with a value."""
    return {
        key: value
        for key, value in field_values.items()
        if is_day_slot(key) and value is not None
    }


def plan_saved_text(week: str) -> str:
    return "Your {} week working location plan was saved successfully!".format(week)


def timeoff_saved_text(date: str, leave_type: str, duration: str) -> str:
    return "Your time off request for {} ({}, {}) was saved successfully!".format(
        date,
        option_label(LEAVE_TYPE_OPTIONS, leave_type),
        option_label(DURATION_OPTIONS, duration),
    )


class SubmissionReconciler:
    """Applies plan and time-off submissions to the store."""

    EFFECT_AVATAR = "avatar_refresh"
    EFFECT_STATUS = "status_update"
    EFFECT_CONFIRM = "confirmation"

    def __init__(
        self,
        store: Store,
        platform: Platform,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.store = store
        self.platform = platform
        self._clock = clock or now_ms

    # -- weekly plan ------------------------------------------------------

    def reconcile_plan_submission(
        self,
        user_id: str,
        week: str,
        field_values: Mapping[str, Any],
    ) -> PlanOutcome:
        """Persist a weekly plan and mirror Monday into the Slack profile.

        HOW: Writes {locations, timestamp} to plans[user_id][week] inside
        the store's mutation region, then runs the side effects in order.

        RULES:
        - Never raises because of a platform or storage failure
        - The persisted record is not rolled back by any side effect
        """
        locations = extract_locations(field_values)
        record = {"locations": locations, "timestamp": self._clock()}

        persisted = self._write_plan(user_id, week, record)
        logger.info(
            "Saved %s week plan for %s (%d days)", week, user_id, len(locations)
        )

        outcome = PlanOutcome(user_id=user_id, week=week, record=record, persisted=persisted)
        outcome.effects.append(self.refresh_avatar(user_id))
        outcome.effects.append(
            self.update_status(user_id, locations.get(MONDAY_SLOT, LOCATION_HOME))
        )
        outcome.effects.append(self._send_confirmation(user_id, plan_saved_text(week)))

        for result in outcome.effects:
            result.log(user_id)
        return outcome

    def _write_plan(self, user_id: str, week: str, record: Dict[str, Any]) -> bool:
        with self.store.mutate() as mutation:
            mutation.state["plans"].setdefault(user_id, {})[week] = copy.deepcopy(record)
        return mutation.persisted

    def refresh_avatar(self, user_id: str) -> EffectResult:
        """Fetch the user's profile and cache its 72px image URL.

        RULES:
        - On fetch failure the user record is left as it was
        - A profile without image_72 stores None
        """
        try:
            profile = self.platform.get_user_profile(user_id)
        except Exception as exc:
            logger.exception("Failed to fetch profile for %s", user_id)
            return EffectResult(self.EFFECT_AVATAR, ok=False, error=str(exc))

        avatar = (profile or {}).get("image_72") or None
        with self.store.mutate() as mutation:
            mutation.state["users"].setdefault(user_id, {})["avatar"] = avatar
        return EffectResult(self.EFFECT_AVATAR, ok=True)

    def update_status(self, user_id: str, location: Optional[str]) -> EffectResult:
        """Set the Slack status matching *location*, if it has one."""
        status = status_for_location(location)
        if status is None:
            return EffectResult(self.EFFECT_STATUS, ok=True, skipped=True)

        try:
            self.platform.set_status(user_id, text=status.text, emoji=status.emoji, expiration=0)
        except Exception as exc:
            logger.exception("Failed to update status for %s", user_id)
            return EffectResult(self.EFFECT_STATUS, ok=False, error=str(exc))
        return EffectResult(self.EFFECT_STATUS, ok=True)

    def _send_confirmation(self, user_id: str, text: str) -> EffectResult:
        try:
            self.platform.post_direct_message(user_id, text)
        except Exception as exc:
            logger.exception("Failed to send confirmation to %s", user_id)
            return EffectResult(self.EFFECT_CONFIRM, ok=False, error=str(exc))
        return EffectResult(self.EFFECT_CONFIRM, ok=True)

    # -- time off ---------------------------------------------------------

    def reconcile_timeoff_submission(
        self,
        user_id: str,
        date: str,
        leave_type: str,
        duration: str,
    ) -> TimeOffOutcome:
        """Persist a time-off request keyed by user and date, then confirm by DM.

        RULES:
        - Same date resubmitted replaces the earlier request
        - No avatar or status side effects
        - A failed DM is reported in the outcome, the record stays
        """
        record = {
            "leave_type": leave_type,
            "duration": duration,
            "timestamp": self._clock(),
        }
        with self.store.mutate() as mutation:
            mutation.state["timeoff"].setdefault(user_id, {})[date] = dict(record)

        logger.info("Saved time off for %s on %s (%s, %s)", user_id, date, leave_type, duration)

        outcome = TimeOffOutcome(
            user_id=user_id, date=date, record=record, persisted=mutation.persisted
        )
        outcome.effects.append(
            self._send_confirmation(user_id, timeoff_saved_text(date, leave_type, duration))
        )
        for result in outcome.effects:
            result.log(user_id)
        return outcome
