#!/usr/bin/env python3
"""Run the modeler API with uvicorn from the project root."""

import sys

import uvicorn

from services.modeler.app.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    print(f"App running on http://localhost:{settings.static.port}")
    try:
        uvicorn.run("services.modeler.app.main:app", host=settings.static.host, port=settings.static.port)
    except Exception as e:
        print(f"Failed to start the server: {e}")
        sys.exit(1)
