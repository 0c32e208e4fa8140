"""Shared error handling for MCP tool wrappers."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_and_return_tool_error(*, tool_name: str, exc: Exception, user_message: str) -> str:
    """Log an unexpected tool failure with traceback and return a safe message."""
    logger.exception("Tool %s failed: %s", tool_name, exc)
    return user_message
