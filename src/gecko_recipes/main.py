"""Application entry point.

This module creates the application instance using the factory pattern.

Usage:
    # Development with auto-reload
    uvicorn gecko_recipes.main:app --reload

    # With command line overrides
    gecko-recipes --server.port 9000 --DATABASE_URL postgresql://...
"""

from gecko_recipes.factory import create_app


app = create_app()
