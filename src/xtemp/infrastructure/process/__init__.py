"""Process infrastructure."""

from xtemp.infrastructure.process.runner import SubprocessRunner

__all__ = ['SubprocessRunner']
