"""Run a command over batches of stdin lines materialized as temporary files."""

__version__ = "0.1.0"
