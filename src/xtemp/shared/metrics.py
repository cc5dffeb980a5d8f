"""Run statistics collection."""

import time
from typing import Dict, List
from collections import defaultdict


def _describe(values: List[float]) -> Dict[str, float]:
    total = sum(values)
    return {
        "count": len(values),
        "sum": total,
        "avg": total / len(values),
        "min": min(values),
        "max": max(values),
    }


class MetricsCollector:
    """
    Timings, per-batch series and counters for one batch run.
    Implements IMetricsCollector protocol.

    The runner feeds it ``batch_duration`` and ``batch_records`` series and
    the ``invocations``/``batches``/``records`` counters; ``get_summary``
    is what ends up in ``RunResult.metrics``.
    """

    def __init__(self):
        self._started = time.monotonic()
        self._running: Dict[str, float] = {}
        self._series: Dict[str, List[float]] = defaultdict(list)
        self._counters: Dict[str, int] = defaultdict(int)

    def start_timer(self, name: str) -> None:
        self._running[name] = time.monotonic()

    def stop_timer(self, name: str) -> float:
        """
        Stop a named timer, record it under ``<name>_duration`` and return it.

        Raises:
            KeyError: If timer was not started
        """
        try:
            started = self._running.pop(name)
        except KeyError:
            raise KeyError(f"Timer '{name}' was not started") from None

        elapsed = time.monotonic() - started
        self.record_metric(f"{name}_duration", elapsed)
        return elapsed

    def record_metric(self, name: str, value: float) -> None:
        self._series[name].append(value)

    def increment_counter(self, name: str, amount: int = 1) -> None:
        self._counters[name] += amount

    def get_summary(self) -> Dict[str, object]:
        """Elapsed time, counters, and count/sum/avg/min/max per series."""
        return {
            "total_elapsed": time.monotonic() - self._started,
            "counters": dict(self._counters),
            "metrics": {name: _describe(values) for name, values in self._series.items() if values},
        }
