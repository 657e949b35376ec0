#!/usr/bin/env python
"""Script to run the Taskboard API server."""
import uvicorn

from taskboard.config import HOST, LOG_LEVEL, PORT

if __name__ == "__main__":
    uvicorn.run(
        "taskboard.main:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower(),
    )
