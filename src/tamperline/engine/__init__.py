"""Item processing: runs configured tamper chains over items."""

from tamperline.engine.runner import FieldError, RunnerResult, TamperRunner

__all__ = [
    "FieldError",
    "RunnerResult",
    "TamperRunner",
]
