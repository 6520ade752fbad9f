"""Telemetry collector for dispatched tool calls."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import json


@dataclass
class ToolExecutionEvent:
    """Detailed tool execution telemetry event."""

    tool_name: str
    call_id: str
    timestamp: datetime
    duration: float
    success: bool
    error: Optional[str] = None
    error_type: Optional[str] = None
    request_summary: Optional[str] = None
    response_kind: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "tool_name": self.tool_name,
            "call_id": self.call_id,
            "timestamp": self.timestamp.isoformat(),
            "duration": self.duration,
            "success": self.success,
            "error": self.error,
            "error_type": self.error_type,
            "request_summary": self.request_summary,
            "response_kind": self.response_kind,
        }


@dataclass
class DispatchTelemetry:
    counters: Dict[str, int] = field(default_factory=lambda: {
        "calls_total": 0,
        "calls_failed": 0,
        "calls_rejected": 0,
    })
    tool_executions: List[ToolExecutionEvent] = field(default_factory=list)
    tool_execution_times: Dict[str, List[float]] = field(default_factory=dict)
    tool_error_counts: Dict[str, int] = field(default_factory=dict)

    def incr(self, key: str, amount: int = 1) -> None:
        self.counters[key] = self.counters.get(key, 0) + amount

    def snapshot(self) -> Dict[str, int]:
        return dict(self.counters)

    def record_rejection(self) -> None:
        """Count a call refused before any handler ran."""
        self.incr("calls_rejected")

    def record_tool_execution(
        self,
        *,
        tool_name: str,
        call_id: str,
        duration: float,
        success: bool,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
        request_summary: Optional[str] = None,
        response_kind: Optional[str] = None,
    ) -> None:
        event = ToolExecutionEvent(
            tool_name=tool_name,
            call_id=call_id,
            timestamp=datetime.now(),
            duration=duration,
            success=success,
            error=error,
            error_type=error_type,
            request_summary=request_summary,
            response_kind=response_kind,
        )
        self.tool_executions.append(event)
        self.tool_execution_times.setdefault(tool_name, []).append(duration)
        self.incr("calls_total")
        if not success:
            self.incr("calls_failed")
            self.tool_error_counts[tool_name] = self.tool_error_counts.get(tool_name, 0) + 1

    def tool_stats(self, tool_name: str) -> Dict[str, float]:
        times = self.tool_execution_times.get(tool_name, [])
        if not times:
            return {"calls": 0, "errors": 0}
        errors = self.tool_error_counts.get(tool_name, 0)
        calls = len(times)
        return {
            "calls": calls,
            "avg_duration": sum(times) / calls,
            "min_duration": min(times),
            "max_duration": max(times),
            "errors": errors,
            "success_rate": (calls - errors) / calls,
        }

    def iter_events(self) -> Iterable[Dict[str, object]]:
        for event in self.tool_executions:
            yield event.to_dict()

    def export_json(self) -> str:
        return json.dumps({"events": list(self.iter_events())}, ensure_ascii=False, indent=2)


__all__ = ["DispatchTelemetry", "ToolExecutionEvent"]
