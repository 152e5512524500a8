"""Slack integration for OfficeOrbit.

WHY: Users submit plans and time off from inside their Slack workspace.
This package opens the modals for /officeorbit and /timeoff and turns
modal submissions into reconciler calls.

HOW: slack-bolt App in HTTP mode (hosted by the FastAPI server). The
Block Kit views live in messages.py, handlers in bot.py.

RULES:
- Requires SLACK_BOT_TOKEN and SLACK_SIGNING_SECRET
- All Slack commands and views must be ack()'d within 3 seconds
"""
