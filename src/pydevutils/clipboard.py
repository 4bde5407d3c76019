"""Best-effort clipboard writes through a host-supplied primitive."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

ClipboardWriter = Callable[[str], object]
"""Host primitive that places text on the system clipboard."""


def copy_to_clipboard(text: str, writer: ClipboardWriter | None) -> bool:
    """Hand ``text`` to ``writer``, swallowing any failure.

    Returns:
        True if the writer accepted the text, False otherwise.
    """
    if writer is None:
        logger.debug("no clipboard writer available")
        return False
    try:
        writer(text)
    except Exception:
        logger.warning("clipboard write failed", exc_info=True)
        return False
    return True
