"""OfficeOrbit: weekly working-location plans and time off, from Slack.

WHY: Teams want to know who is in which office on which day without a
separate tool. Members submit a weekly plan through a Slack modal; the bot
stores it and mirrors Monday's choice into their Slack status.

HOW: Three layers. core/ holds the shared form schema, the persisted
store and the submission reconciler. slack/ builds the modals and handles
Slack commands and submissions with slack-bolt. server/ hosts the Bolt
app behind FastAPI and exposes the stored plans as JSON.

RULES:
- core/ has no Slack SDK imports; the platform is injected
- The modal builders and the submission parsers share core.schema ids
"""

__version__ = "0.1.0"
