"""Numeric limits shared across actionbar."""

from __future__ import annotations

COMMAND_BAR_PAGE_JUMP = 8
"""Rows skipped by page up/page down in an actions dialog."""

MAX_LOG_LINES = 2000
MAX_LOG_MESSAGE_LENGTH = 4096
