"""Package entry point for ``python -m officeorbit``.

Runs the FastAPI server hosting the Slack bot on the configured port.
"""

from officeorbit.server.app import main

if __name__ == "__main__":
    main()
