"""Process execution adapters."""

from vendortrace.adapters.process.subprocess_runner import SubprocessRunner

__all__ = ["SubprocessRunner"]
