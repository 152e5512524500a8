"""HTTP server for OfficeOrbit.

WHY: Slack delivers commands and interactions over HTTP, and the stored
plans are useful outside Slack too.

HOW: FastAPI app built by server.app.create_server(), run with uvicorn.

RULES:
- Slack request verification is handled by slack-bolt, not here
- The plan endpoints are read-only
"""
