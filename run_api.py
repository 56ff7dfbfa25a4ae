"""
Launch the notes HTTP API with uvicorn.
"""

import argparse

import uvicorn

from notes_app.config import config
from notes_app.utils.logger import logging


def main():
    parser = argparse.ArgumentParser(description=f"{config.APP_NAME} API")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to listen on")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    logging.info(f"Serving {config.APP_NAME} v{config.APP_VERSION} on {args.host}:{args.port}")
    uvicorn.run(
        "notes_app.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
