"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- The core depends on the abstraction, not on `subprocess`.
"""

from ibs.core.interfaces.runner import CommandRunner

__all__ = ["CommandRunner"]
