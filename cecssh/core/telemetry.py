"""
In-process session telemetry

Records are kept in memory for the lifetime of the process; nothing is
exported. The reader thread and the main thread both record, so every
access goes through one lock.
"""
import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional


@dataclass(frozen=True)
class Metric:
    """Point-in-time measurement"""
    name: str
    value: float
    timestamp: float = field(default_factory=time.monotonic)


@dataclass(frozen=True)
class Event:
    """Something that happened, with free-form details"""
    name: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.monotonic)


class Telemetry:
    def __init__(self):
        self._metrics: List[Metric] = []
        self._events: List[Event] = []
        self._counters: Counter = Counter()
        self._lock = threading.Lock()

    def record_metric(self, name: str, value: float) -> None:
        with self._lock:
            self._metrics.append(Metric(name=name, value=value))

    def record_event(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        with self._lock:
            self._events.append(Event(name=name, metadata=dict(metadata or {})))

    def increment(self, name: str, amount: int = 1) -> None:
        """Bump a running counter (e.g. chunks read)"""
        with self._lock:
            self._counters[name] += amount

    def get_metrics(self) -> List[Metric]:
        with self._lock:
            return list(self._metrics)

    def get_events(self, name: Optional[str] = None) -> List[Event]:
        """
        Get recorded events in order.

        Args:
            name: Only return events with this name
        """
        with self._lock:
            if name is None:
                return list(self._events)
            return [e for e in self._events if e.name == name]

    def get_counter(self, name: str) -> int:
        with self._lock:
            return self._counters[name]


_telemetry = Telemetry()


def get_telemetry() -> Telemetry:
    """Process-wide telemetry used when none is injected"""
    return _telemetry
