"""Presentation layer package."""

from xtemp.presentation.cli import main, build_parser

__all__ = ["main", "build_parser"]
