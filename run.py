#!/usr/bin/env python3
"""Wrapper script for running the Fabricator app with Rich and Structlog."""
import os
import sys
import uvicorn
from rich.traceback import install

# Show detailed tracebacks
install(show_locals=True, width=120, suppress=[uvicorn])

# Ensure the package is importable when run from a checkout
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

# Import config and logging AFTER setting up path and Rich
from fabricator.config import settings
from fabricator.logging_config import setup_logging, get_uvicorn_log_config

setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

if __name__ == "__main__":
    log_config = get_uvicorn_log_config(log_level=settings.LOG_LEVEL)

    # Run the server using import string so reload works
    uvicorn.run(
        "fabricator.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
        log_config=log_config,
    )
