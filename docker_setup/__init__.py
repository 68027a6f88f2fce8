"""Docker setup for Ubuntu 24.04 (Python-first, step-driven).

Core design goals:
- Ordered, fail-fast steps
- Idempotent configuration writes
- Every external command logged
- Run record persisted for support/repro
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
