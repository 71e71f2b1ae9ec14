"""Run the DDL sandbox service with uvicorn."""

import logging

import uvicorn
from dotenv import load_dotenv

from common.config.env import get_env_int, get_env_str


def main() -> None:
    """Start the HTTP service."""
    load_dotenv()
    logging.basicConfig(
        level=get_env_str("SANDBOX_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "sandbox_service.app:app",
        host=get_env_str("SANDBOX_HOST", "127.0.0.1"),
        port=get_env_int("SANDBOX_PORT", 8080),
    )


if __name__ == "__main__":
    main()
