"""Application layer package."""

from xtemp.application.orchestrator import BatchRunner
from xtemp.application.resolver import resolve_arguments, build_argv

__all__ = ["BatchRunner", "resolve_arguments", "build_argv"]
