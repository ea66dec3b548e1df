"""Optional callbacks through which workflows report progress.

The CLI wires these to a rich console; tests leave them empty or collect
messages in lists. Workflows never print directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (steps, key/value details, warnings)."""

    step: Callable[[str], None] | None = None
    detail: Callable[[str, str], None] | None = None
    warning: Callable[[str], None] | None = None

    def emit_step(self, message: str) -> None:
        if self.step is not None:
            self.step(message)

    def emit_detail(self, label: str, value: str) -> None:
        if self.detail is not None:
            self.detail(label, value)

    def emit_warning(self, message: str) -> None:
        if self.warning is not None:
            self.warning(message)
