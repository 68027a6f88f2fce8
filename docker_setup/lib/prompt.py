from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def confirm(question: str) -> bool:
    """Ask a y/N question on the terminal. Only ``y``/``Y`` counts as yes."""

    try:
        reply = input(f"{question} (y/N): ")
    except EOFError:
        # No terminal attached: treat as "no".
        logger.info("No answer on stdin; treating as 'no'")
        return False
    return reply.strip() in {"y", "Y"}
