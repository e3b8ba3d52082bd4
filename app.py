#!/usr/bin/env python3
"""
Main entry point for link shorter service.

Usage:
    python app.py

Environment variables:
    DATABASE_PATH - SQLite database file
    HOST - Host to bind to
    PORT - Port to listen on
    RANDOM_PATH_LENGTH - Length of generated paths
    LOG_LEVEL - Logging level
    LOG_FILE - Optional log file
    LOG_JSON - Set to 1 for JSON formatted logs
    DOT - Alternative dotenv file (default .env)
"""

import sys

from config import load_config
from link_shorter.common.logging_config import setup_logging
from web_app.server import run_server


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Link Shorter Service")
    logger.info(f"Configuration: {config.model_dump()}")

    try:
        run_server(config, logger)
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
