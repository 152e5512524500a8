"""Block Kit modal builders for the OfficeOrbit bot.

WHY: The bot opens two modals: the weekly working-location plan and the
time-off request. Keeping the view JSON here leaves bot.py focused on
handler logic, and the builders are pure so they are trivial to test.

HOW: Each builder returns a complete modal view dict ready for
client.views_open(view=...). Block and action ids come from
core.schema, which the submission parsers in bot.py also use.

RULES:
- Builders are pure: no I/O, no Slack client
- The weekly plan week selector travels in private_metadata, not as a field
- Every input block is required (Slack's default, optional is never set)
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from officeorbit.core.schema import (
    ACTION_DATE_PICKER,
    ACTION_DURATION_SELECT,
    ACTION_LEAVE_TYPE_SELECT,
    ACTION_LOCATION_SELECT,
    BLOCK_DATES,
    BLOCK_DURATION,
    BLOCK_LEAVE_TYPE,
    DAY_SLOTS,
    DURATION_OPTIONS,
    LEAVE_TYPE_OPTIONS,
    LOCATION_OPTIONS,
    PLAN_CALLBACK_ID,
    TIMEOFF_CALLBACK_ID,
    WEEKDAYS,
    normalize_week,
)


def _plain_text(text: str) -> Dict[str, str]:
    return {"type": "plain_text", "text": text}


def _options(pairs: Tuple[Tuple[str, str], ...]) -> List[Dict[str, Any]]:
    """Turn (code, label) pairs into Block Kit option objects."""
    return [
        {"text": _plain_text(label), "value": code}
        for code, label in pairs
    ]


def _modal(callback_id: str, title: str, blocks: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "type": "modal",
        "callback_id": callback_id,
        "title": _plain_text(title),
        "submit": _plain_text("Submit"),
        "close": _plain_text("Cancel"),
        "blocks": blocks,
    }


# ---------------------------------------------------------------------------
# Command text parsing
# ---------------------------------------------------------------------------


def parse_week_selector(text: Optional[str]) -> str:
    """Map the /officeorbit command text to a week selector.

    "next" (any case, surrounding whitespace ignored) selects next week;
    everything else, including no text, selects the current week.
    """
    return normalize_week(text)


# ---------------------------------------------------------------------------
# Weekly plan modal
# ---------------------------------------------------------------------------


def build_weekly_plan_modal(week: str) -> Dict[str, Any]:
    """Build the weekly working-location modal.

    WHY: Users pick one location per weekday for the current or next week.

    HOW: One input block per weekday. The block_id is the day slot
    ("day_0".."day_4") and every select shares ACTION_LOCATION_SELECT, so
    the submission state reads values[day_N][location_select].

    RULES:
    - Exactly five input blocks, Monday to Friday
    - Same five location options in every block
    - private_metadata carries the (normalized) week selector
    """
    options = _options(LOCATION_OPTIONS)

    blocks = []
    for slot, day in zip(DAY_SLOTS, WEEKDAYS):
        blocks.append({
            "type": "input",
            "block_id": slot,
            "label": _plain_text(day),
            "element": {
                "type": "static_select",
                "action_id": ACTION_LOCATION_SELECT,
                "placeholder": _plain_text("Select location"),
                "options": [dict(opt) for opt in options],
            },
        })

    view = _modal(PLAN_CALLBACK_ID, "Working Location Plan", blocks)
    view["private_metadata"] = normalize_week(week)
    return view


# ---------------------------------------------------------------------------
# Time-off modal
# ---------------------------------------------------------------------------


def build_timeoff_modal() -> Dict[str, Any]:
    """Build the time-off request modal: date, leave type, duration."""
    blocks = [
        {
            "type": "input",
            "block_id": BLOCK_DATES,
            "label": _plain_text("Select Date(s)"),
            "element": {
                "type": "datepicker",
                "action_id": ACTION_DATE_PICKER,
            },
        },
        {
            "type": "input",
            "block_id": BLOCK_LEAVE_TYPE,
            "label": _plain_text("Leave Type"),
            "element": {
                "type": "static_select",
                "action_id": ACTION_LEAVE_TYPE_SELECT,
                "options": _options(LEAVE_TYPE_OPTIONS),
            },
        },
        {
            "type": "input",
            "block_id": BLOCK_DURATION,
            "label": _plain_text("Duration"),
            "element": {
                "type": "static_select",
                "action_id": ACTION_DURATION_SELECT,
                "options": _options(DURATION_OPTIONS),
            },
        },
    ]
    return _modal(TIMEOFF_CALLBACK_ID, "Time Off Request", blocks)
