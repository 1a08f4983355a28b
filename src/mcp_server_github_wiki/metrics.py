import asyncio
import time
from collections import defaultdict
from typing import Any, Dict, Optional


class MetricsCollector:
    """
    Global metrics collector for MCP GitHub Wiki Server.
    Aggregates per-tool call counts, failures and durations.
    Safe to share between concurrent tool calls.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._metrics = self._empty()

    @staticmethod
    def _empty() -> Dict[str, Any]:
        return {
            "tool_calls": defaultdict(int),
            "failures": defaultdict(int),
            "errors_by_type": defaultdict(int),
            "durations_ms": defaultdict(list),
            "startup_time": time.time(),
        }

    async def record_tool_call(
        self,
        tool_name: str,
        success: bool,
        duration_ms: float,
        error_type: Optional[str] = None,
    ):
        async with self._lock:
            self._metrics["tool_calls"][tool_name] += 1
            self._metrics["durations_ms"][tool_name].append(duration_ms)
            if not success:
                self._metrics["failures"][tool_name] += 1
                if error_type:
                    self._metrics["errors_by_type"][error_type] += 1

    async def get_metrics(self) -> Dict[str, Any]:
        async with self._lock:
            avg_durations = {
                name: sum(values) / len(values)
                for name, values in self._metrics["durations_ms"].items()
                if values
            }
            total_calls = sum(self._metrics["tool_calls"].values())
            total_failures = sum(self._metrics["failures"].values())
            return {
                "tool_calls": dict(self._metrics["tool_calls"]),
                "failures": dict(self._metrics["failures"]),
                "errors_by_type": dict(self._metrics["errors_by_type"]),
                "avg_duration_ms": avg_durations,
                "total_calls": total_calls,
                "failure_rate": total_failures / total_calls if total_calls else 0.0,
                "uptime_sec": time.time() - self._metrics["startup_time"],
            }

    async def reset(self):
        async with self._lock:
            self._metrics = self._empty()


# Singleton instance for global use
global_metrics_collector = MetricsCollector()
