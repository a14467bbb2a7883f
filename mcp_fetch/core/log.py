import logging
import sys
from typing import Optional

from mcp_fetch.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging.

    Records go to stderr: in stdio mode stdout carries the MCP protocol
    stream and must not receive anything else.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
