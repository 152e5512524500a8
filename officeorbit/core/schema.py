"""Shared form schema: day slots, location catalog, status table, leave options.

WHY: The weekly plan modal and the submission parser are linked only by
block and action ids. Both sides import them from here so the form layout
and the parsing code cannot drift apart.

HOW: Plain module-level tuples and dicts, plus a few lookup helpers.
Option lists are ordered tuples of (code, label) pairs so the renderer can
keep the display order.

RULES:
- DAY_SLOTS are "day_0".."day_4", Monday through Friday
- LOCATION_OPTIONS is a closed set of five codes
- STATUS_MAP has exactly one entry per location code
- Week selectors are "current" and "next"; anything else means "current"
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# ---------------------------------------------------------------------------
# Weeks and days
# ---------------------------------------------------------------------------

WEEK_CURRENT = "current"
WEEK_NEXT = "next"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
DAY_SLOTS = tuple("day_{}".format(idx) for idx in range(len(WEEKDAYS)))
MONDAY_SLOT = DAY_SLOTS[0]

# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------

LOCATION_HOME = "home"

LOCATION_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("home", "\U0001f3e0 Working from Home"),
    ("london", "\U0001f1ec\U0001f1e7 London Office"),
    ("prague", "\U0001f1e8\U0001f1ff Prague Office"),
    ("travel", "\U0001f6b6 Traveling / On the Go"),
    ("timeoff", "\U0001f334 Time Off"),
)


@dataclass(frozen=True)
class Status:
    """A Slack status: emoji plus text."""

    emoji: str
    text: str


STATUS_MAP: Dict[str, Status] = {
    "home": Status("\U0001f3e0", "Working from Home"),
    "london": Status("\U0001f1ec\U0001f1e7", "In London Office"),
    "prague": Status("\U0001f1e8\U0001f1ff", "In Prague Office"),
    "travel": Status("\U0001f6b6", "Traveling / On the Go"),
    "timeoff": Status("\U0001f334", "Time Off"),
}

# ---------------------------------------------------------------------------
# Time off
# ---------------------------------------------------------------------------

LEAVE_TYPE_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("holiday", "Holiday"),
    ("sick", "Sick"),
    ("other", "Other"),
)

DURATION_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("full", "Full Day"),
    ("am", "Half Day AM"),
    ("pm", "Half Day PM"),
)

# ---------------------------------------------------------------------------
# Block Kit ids: must match between messages.py and bot.py
# ---------------------------------------------------------------------------

PLAN_CALLBACK_ID = "submit_plan"
TIMEOFF_CALLBACK_ID = "submit_timeoff"

ACTION_LOCATION_SELECT = "location_select"

BLOCK_DATES = "dates"
ACTION_DATE_PICKER = "date_picker"
BLOCK_LEAVE_TYPE = "leave_type"
ACTION_LEAVE_TYPE_SELECT = "leave_type_select"
BLOCK_DURATION = "half_full"
ACTION_DURATION_SELECT = "half_full_select"


def is_day_slot(key: str) -> bool:
    """Return True if *key* names one of the five weekday slots."""
    return key in DAY_SLOTS


def normalize_week(value: Optional[str]) -> str:
    """Coerce a week selector to "current" or "next".

    RULES:
    - Case and surrounding whitespace are ignored
    - Anything that is not "next" becomes "current"
    """
    if value and value.strip().lower() == WEEK_NEXT:
        return WEEK_NEXT
    return WEEK_CURRENT


def status_for_location(code: Optional[str]) -> Optional[Status]:
    """Look up the Slack status for a location code, or None if unknown."""
    if code is None:
        return None
    return STATUS_MAP.get(code)


def option_label(options: Tuple[Tuple[str, str], ...], code: str) -> str:
    """Return the human label for *code*, falling back to the code itself."""
    for value, label in options:
        if value == code:
            return label
    return code
