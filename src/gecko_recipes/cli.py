"""Command line entry point.

Settings are resolved from the usual sources with command line flags on
top, e.g. ``gecko-recipes --host 0.0.0.0 --port 9000`` or the nested
``--server.host`` form. ``--database-url`` sets the connection string.
"""

from __future__ import annotations

import uvicorn

from gecko_recipes.core.config import Settings
from gecko_recipes.factory import create_app


def run() -> None:
    """Parse command line flags and serve the API with uvicorn."""
    settings = Settings(
        _cli_parse_args=True,
        _cli_prog_name="gecko-recipes",
    )

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.logging.level.lower(),
        # Logging is configured by the application lifespan
        log_config=None,
    )


if __name__ == "__main__":
    run()
