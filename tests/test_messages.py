"""Tests for the Block Kit modal builders and the shared form schema.

WHY: The submission parser finds values by block_id and action_id. If the
modal layout drifts from core.schema, submissions silently lose days.

HOW: Build each modal and inspect the resulting dicts.
"""

from __future__ import annotations

import pytest

from officeorbit.core.schema import (
    DAY_SLOTS,
    LEAVE_TYPE_OPTIONS,
    LOCATION_OPTIONS,
    STATUS_MAP,
    is_day_slot,
    normalize_week,
    option_label,
)
from officeorbit.slack.messages import (
    build_timeoff_modal,
    build_weekly_plan_modal,
    parse_week_selector,
)


# ---------------------------------------------------------------------------
# Tests: schema
# ---------------------------------------------------------------------------


class TestSchema:
    def test_five_day_slots(self):
        assert DAY_SLOTS == ("day_0", "day_1", "day_2", "day_3", "day_4")

    def test_status_table_covers_every_location(self):
        codes = [code for code, _ in LOCATION_OPTIONS]
        assert set(STATUS_MAP) == set(codes)
        assert codes == ["home", "london", "prague", "travel", "timeoff"]

    def test_is_day_slot(self):
        assert is_day_slot("day_3") is True
        assert is_day_slot("day_5") is False
        assert is_day_slot("dates") is False

    def test_option_label_fallback(self):
        assert option_label(LEAVE_TYPE_OPTIONS, "sick") == "Sick"
        assert option_label(LEAVE_TYPE_OPTIONS, "sabbatical") == "sabbatical"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("next", "next"),
            ("  NEXT ", "next"),
            ("current", "current"),
            ("", "current"),
            (None, "current"),
            ("last", "current"),
        ],
    )
    def test_normalize_week(self, raw, expected):
        assert normalize_week(raw) == expected
        assert parse_week_selector(raw) == expected


# ---------------------------------------------------------------------------
# Tests: weekly plan modal
# ---------------------------------------------------------------------------


class TestBuildWeeklyPlanModal:
    def test_is_modal_with_callback(self):
        view = build_weekly_plan_modal("current")
        assert view["type"] == "modal"
        assert view["callback_id"] == "submit_plan"

    def test_week_travels_in_metadata(self):
        assert build_weekly_plan_modal("next")["private_metadata"] == "next"
        assert build_weekly_plan_modal("someday")["private_metadata"] == "current"

    def test_one_required_input_per_weekday(self):
        blocks = build_weekly_plan_modal("current")["blocks"]

        assert [b["block_id"] for b in blocks] == list(DAY_SLOTS)
        assert [b["label"]["text"] for b in blocks] == [
            "Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
        ]
        for block in blocks:
            assert block["type"] == "input"
            assert block.get("optional", False) is False

    def test_every_day_offers_full_catalog(self):
        for block in build_weekly_plan_modal("current")["blocks"]:
            element = block["element"]
            assert element["type"] == "static_select"
            assert element["action_id"] == "location_select"
            values = [opt["value"] for opt in element["options"]]
            assert values == ["home", "london", "prague", "travel", "timeoff"]
            assert all(opt["text"]["type"] == "plain_text" for opt in element["options"])

    def test_title_fits_slack_limit(self):
        view = build_weekly_plan_modal("current")
        assert len(view["title"]["text"]) <= 24


# ---------------------------------------------------------------------------
# Tests: time-off modal
# ---------------------------------------------------------------------------


class TestBuildTimeOffModal:
    def test_callback_and_blocks(self):
        view = build_timeoff_modal()
        assert view["callback_id"] == "submit_timeoff"
        assert [b["block_id"] for b in view["blocks"]] == ["dates", "leave_type", "half_full"]
        assert "private_metadata" not in view

    def test_date_picker(self):
        element = build_timeoff_modal()["blocks"][0]["element"]
        assert element == {"type": "datepicker", "action_id": "date_picker"}

    def test_leave_type_options(self):
        element = build_timeoff_modal()["blocks"][1]["element"]
        assert element["action_id"] == "leave_type_select"
        assert [o["value"] for o in element["options"]] == ["holiday", "sick", "other"]

    def test_duration_options(self):
        element = build_timeoff_modal()["blocks"][2]["element"]
        assert element["action_id"] == "half_full_select"
        assert [o["text"]["text"] for o in element["options"]] == [
            "Full Day", "Half Day AM", "Half Day PM",
        ]
