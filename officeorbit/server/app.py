"""FastAPI application hosting the Slack endpoints and a read-only plan API.

WHY: Slack delivers slash commands and modal submissions over HTTP, so the
bot needs a web server listening on one configurable port. The same server
exposes the stored plans as JSON for dashboards and manager views.

HOW: create_server() wraps a configured Bolt App in slack-bolt's FastAPI
adapter and mounts it on /slack/events and /slack/commands. The plan
endpoints (plans, time off, cached avatar) read from the shared Store.
main() wires config, store, manager map, Bolt app and server together
and runs uvicorn.

RULES:
- Signature verification and routing of Slack requests belong to Bolt
- Plan endpoints are read-only and return 404 for unknown users/managers
- Missing Slack credentials exit the process with status 1 at startup
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response
from slack_bolt import App
from slack_bolt.adapter.fastapi import SlackRequestHandler

from officeorbit import __version__, config
from officeorbit.core.store import JsonFileBackend, Store, load_manager_map
from officeorbit.server.models import (
    ErrorResponse,
    HealthResponse,
    PlanRecord,
    TeamPlansResponse,
    TimeOffRecord,
    UserPlansResponse,
)
from officeorbit.slack.bot import create_app

logger = logging.getLogger(__name__)


def _user_plans(store: Store, user_id: str) -> Optional[UserPlansResponse]:
    plans = store.plans_for(user_id)
    timeoff = store.timeoff_for(user_id)
    user = store.get_user(user_id) or {}
    if not plans and not timeoff and not user:
        return None
    return UserPlansResponse(
        user_id=user_id,
        avatar=user.get("avatar"),
        plans={week: PlanRecord(**record) for week, record in plans.items()},
        timeoff={day: TimeOffRecord(**record) for day, record in timeoff.items()},
    )


def create_server(
    bolt_app: App,
    store: Store,
    managers: Optional[Dict[str, str]] = None,
) -> FastAPI:
    """Build the FastAPI app around a Bolt app and the shared store."""
    manager_map = dict(managers or {})
    slack_handler = SlackRequestHandler(bolt_app)

    api = FastAPI(
        title="OfficeOrbit",
        description=(
            "Slack bot for weekly working-location plans and time-off "
            "requests, with a read-only JSON view of the stored plans."
        ),
        version=__version__,
    )

    @api.post("/slack/events", include_in_schema=False)
    async def slack_events(req: Request) -> Response:
        return await slack_handler.handle(req)

    @api.post("/slack/commands", include_in_schema=False)
    async def slack_commands(req: Request) -> Response:
        return await slack_handler.handle(req)

    @api.get("/health", response_model=HealthResponse, tags=["system"])
    def health() -> HealthResponse:
        state = store.snapshot()
        return HealthResponse(users=len(state["users"]), plans=len(state["plans"]))

    @api.get(
        "/plans/{user_id}",
        response_model=UserPlansResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["plans"],
    )
    def get_user_plans(user_id: str) -> UserPlansResponse:
        result = _user_plans(store, user_id)
        if result is None:
            raise HTTPException(status_code=404, detail="No plans for user {}".format(user_id))
        return result

    @api.get(
        "/teams/{manager_id}",
        response_model=TeamPlansResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["plans"],
    )
    def get_team_plans(manager_id: str) -> TeamPlansResponse:
        reports = sorted(
            user for user, manager in manager_map.items() if manager == manager_id
        )
        if not reports:
            raise HTTPException(
                status_code=404,
                detail="No reports for manager {}".format(manager_id),
            )

        members = []
        for user_id in reports:
            entry = _user_plans(store, user_id)
            members.append(entry or UserPlansResponse(user_id=user_id, plans={}))
        return TeamPlansResponse(manager_id=manager_id, members=members)

    return api


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Start the bot server.

    RULES:
    - Requires SLACK_SIGNING_SECRET and SLACK_BOT_TOKEN
    - Blocks on uvicorn.run()
    """
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    try:
        signing_secret, bot_token = config.load_slack_credentials()
    except ValueError as exc:
        logger.error("Error: %s", exc)
        sys.exit(1)

    store = Store(JsonFileBackend(config.DATA_FILE))
    managers = load_manager_map(config.MANAGERS_FILE)

    bolt_app = create_app(
        bot_token=bot_token,
        signing_secret=signing_secret,
        store=store,
    )
    api = create_server(bolt_app, store, managers)

    import uvicorn

    logger.info("OfficeOrbit Slack app is running on port %d", config.PORT)
    uvicorn.run(api, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
