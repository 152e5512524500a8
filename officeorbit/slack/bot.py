"""Slack bot: slash commands, modal submissions, and the Slack platform adapter.

WHY: Users interact only through Slack. /officeorbit opens the weekly
location plan modal, /timeoff opens the time-off modal, and the view
submission handlers hand the parsed values to the SubmissionReconciler.

HOW: create_app() builds a slack-bolt App (HTTP mode, request signature
verification by Bolt), registers a middleware that puts the shared Store
into the listener context, and registers the command and view handlers.
SlackPlatform wraps the WebClient passed to each listener so the
reconciler never sees Slack SDK types.

RULES:
- ack() before any Slack Web API call (3 second limit)
- View validation errors are returned through ack(response_action="errors")
- Every Web API failure is logged and swallowed
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, Optional

from slack_bolt import App

from officeorbit.core.reconciler import SubmissionReconciler
from officeorbit.core.schema import (
    ACTION_DATE_PICKER,
    ACTION_DURATION_SELECT,
    ACTION_LEAVE_TYPE_SELECT,
    ACTION_LOCATION_SELECT,
    BLOCK_DATES,
    BLOCK_DURATION,
    BLOCK_LEAVE_TYPE,
    PLAN_CALLBACK_ID,
    TIMEOFF_CALLBACK_ID,
    is_day_slot,
    normalize_week,
)
from officeorbit.core.store import MemoryBackend, Store
from officeorbit.slack.messages import (
    build_timeoff_modal,
    build_weekly_plan_modal,
    parse_week_selector,
)

logger = logging.getLogger(__name__)

COMMAND_PLAN = "/officeorbit"
COMMAND_TIMEOFF = "/timeoff"

CONTEXT_STORE = "officeorbit_store"


# ---------------------------------------------------------------------------
# Platform adapter
# ---------------------------------------------------------------------------


class SlackPlatform:
    """Outbound Slack calls used by the reconciler.

    Methods raise whatever the WebClient raises (usually SlackApiError);
    the reconciler decides how to degrade.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_user_profile(self, user_id: str) -> Dict[str, Any]:
        resp = self.client.users_info(user=user_id)
        user = resp.get("user") or {}
        return user.get("profile") or {}

    def set_status(self, user_id: str, text: str, emoji: str, expiration: int = 0) -> None:
        self.client.users_profile_set(
            user=user_id,
            profile={
                "status_text": text,
                "status_emoji": emoji,
                "status_expiration": expiration,
            },
        )

    def post_direct_message(self, user_id: str, text: str) -> None:
        self.client.chat_postMessage(channel=user_id, text=text)


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------


def create_app(
    bot_token: Optional[str] = None,
    signing_secret: Optional[str] = None,
    store: Optional[Store] = None,
    token_verification_enabled: bool = True,
    process_before_response: bool = False,
) -> App:
    """Create and configure the Slack Bolt app with all handlers.

    WHY: Factory function lets tests inject tokens and an in-memory store
    and avoids module-level side effects.

    RULES:
    - Missing tokens fall back to SLACK_BOT_TOKEN / SLACK_SIGNING_SECRET
    - Without a store, an in-memory store is used (nothing hits disk)
    - The unknown-command catch-all is registered last
    - process_before_response=True finishes listeners before replying
    """
    token = bot_token or os.environ.get("SLACK_BOT_TOKEN", "")
    secret = signing_secret or os.environ.get("SLACK_SIGNING_SECRET", "")
    shared_store = store if store is not None else Store(MemoryBackend())

    app = App(
        token=token,
        signing_secret=secret,
        token_verification_enabled=token_verification_enabled,
        process_before_response=process_before_response,
    )

    def inject_state(context: Any, next: Any) -> None:
        context[CONTEXT_STORE] = shared_store
        next()

    app.use(inject_state)

    app.command(COMMAND_PLAN)(handle_plan_command)
    app.command(COMMAND_TIMEOFF)(handle_timeoff_command)
    app.command(re.compile(r".*"))(handle_unknown_command)

    app.view(PLAN_CALLBACK_ID)(handle_plan_submission)
    app.view(TIMEOFF_CALLBACK_ID)(handle_timeoff_submission)

    return app


# ---------------------------------------------------------------------------
# Slash commands
# ---------------------------------------------------------------------------


def handle_plan_command(ack: Any, command: Dict[str, Any], client: Any, logger: Any) -> None:
    """Open the weekly plan modal; "/officeorbit next" plans next week."""
    ack()

    user_id = command.get("user_id", "")
    week = parse_week_selector(command.get("text"))
    logger.info("Received %s from %s for %s week", COMMAND_PLAN, user_id, week)

    try:
        client.views_open(
            trigger_id=command.get("trigger_id", ""),
            view=build_weekly_plan_modal(week),
        )
    except Exception:
        logger.exception("Failed to open weekly plan modal for %s", user_id)


def handle_timeoff_command(ack: Any, command: Dict[str, Any], client: Any, logger: Any) -> None:
    """Open the time-off request modal."""
    ack()

    user_id = command.get("user_id", "")
    logger.info("Received %s from %s", COMMAND_TIMEOFF, user_id)

    try:
        client.views_open(
            trigger_id=command.get("trigger_id", ""),
            view=build_timeoff_modal(),
        )
    except Exception:
        logger.exception("Failed to open time off modal for %s", user_id)


def handle_unknown_command(ack: Any, command: Dict[str, Any]) -> None:
    ack("Command {} received".format(command.get("command", "")))


# ---------------------------------------------------------------------------
# View submissions
# ---------------------------------------------------------------------------


def extract_plan_selections(view: Dict[str, Any]) -> Dict[str, str]:
    """Collect {day_N: location} from a weekly plan submission.

    HOW: Walks view.state.values; only blocks whose id is a day slot are
    considered, and only if a location was actually selected.
    """
    values = view.get("state", {}).get("values", {})

    selections = {}
    for block_id, actions in values.items():
        if not is_day_slot(block_id):
            continue
        selected = (actions.get(ACTION_LOCATION_SELECT) or {}).get("selected_option")
        if selected and selected.get("value"):
            selections[block_id] = selected["value"]
    return selections


def extract_timeoff_fields(view: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """Collect date, leave type and duration from a time-off submission."""
    values = view.get("state", {}).get("values", {})

    date = (values.get(BLOCK_DATES, {}).get(ACTION_DATE_PICKER) or {}).get("selected_date")
    leave_opt = (values.get(BLOCK_LEAVE_TYPE, {}).get(ACTION_LEAVE_TYPE_SELECT) or {}).get(
        "selected_option"
    )
    duration_opt = (values.get(BLOCK_DURATION, {}).get(ACTION_DURATION_SELECT) or {}).get(
        "selected_option"
    )

    return {
        "date": date,
        "leave_type": leave_opt.get("value") if leave_opt else None,
        "duration": duration_opt.get("value") if duration_opt else None,
    }


def _reconciler(context: Any, client: Any) -> SubmissionReconciler:
    return SubmissionReconciler(context[CONTEXT_STORE], SlackPlatform(client))


def handle_plan_submission(
    ack: Any, body: Any, view: Any, client: Any, context: Any, logger: Any
) -> None:
    """Persist a submitted weekly plan and update the user's Slack profile.

    RULES:
    - ack() closes the modal first; reconciliation runs after
    - The week comes from private_metadata and is coerced to current/next
    """
    ack()

    user_id = body.get("user", {}).get("id", "")
    week = normalize_week(view.get("private_metadata"))
    selections = extract_plan_selections(view)

    _reconciler(context, client).reconcile_plan_submission(user_id, week, selections)


def handle_timeoff_submission(
    ack: Any, body: Any, view: Any, client: Any, context: Any, logger: Any
) -> None:
    """Persist a submitted time-off request; the reconciler confirms it by DM.

    RULES:
    - A missing field is reported inline; the modal stays open
    - No status or avatar changes
    """
    fields = extract_timeoff_fields(view)

    errors = {}
    if not fields["date"]:
        errors[BLOCK_DATES] = "Please select a date"
    if not fields["leave_type"]:
        errors[BLOCK_LEAVE_TYPE] = "Please select a leave type"
    if not fields["duration"]:
        errors[BLOCK_DURATION] = "Please select a duration"
    if errors:
        ack(response_action="errors", errors=errors)
        return

    ack()

    user_id = body.get("user", {}).get("id", "")
    _reconciler(context, client).reconcile_timeoff_submission(
        user_id, fields["date"], fields["leave_type"], fields["duration"]
    )
