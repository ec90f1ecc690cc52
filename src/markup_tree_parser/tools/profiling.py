"""Performance profiling tools for Markup Tree Parser.

Times the tokenizer and tree builder stages separately and tracks the
process's resident memory around each of them.
"""

import json
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import psutil

from markup_tree_parser.shared import ParserConfig, get_logger
from markup_tree_parser.tokenization import MarkupTokenizer
from markup_tree_parser.tree import TreeBuilder

TOKENIZE_LAYER = "tokenize"
BUILD_LAYER = "build"


@dataclass
class LayerPerformance:
    """Performance metrics for one processing stage."""

    layer_name: str
    start_time: float
    end_time: float = 0.0
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    operations_count: int = 0

    @property
    def duration_ms(self) -> float:
        """Processing duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Memory usage change in bytes."""
        return self.memory_end - self.memory_start

    @property
    def ops_per_second(self) -> float:
        duration_s = self.end_time - self.start_time
        return self.operations_count / duration_s if duration_s > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layer_name": self.layer_name,
            "duration_ms": self.duration_ms,
            "memory_delta": self.memory_delta,
            "operations_count": self.operations_count,
            "ops_per_second": self.ops_per_second,
        }


@dataclass
class ProfilingSession:
    """Container for one profiled parse."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    input_size: int = 0  # characters
    layers: List[LayerPerformance] = field(default_factory=list)

    @property
    def total_duration_ms(self) -> float:
        """Total session duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def characters_per_second(self) -> float:
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return self.input_size / duration_s

    def layer(self, layer_name: str) -> Optional[LayerPerformance]:
        """Return the metrics recorded for ``layer_name``, if any."""
        return next((layer for layer in self.layers if layer.layer_name == layer_name), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "input_size": self.input_size,
            "total_duration_ms": self.total_duration_ms,
            "characters_per_second": self.characters_per_second,
            "layers": [layer.to_dict() for layer in self.layers],
        }


@dataclass
class PerformanceReport:
    """Aggregate over profiled sessions."""

    sessions: List[ProfilingSession]
    generation_time: float

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def average_duration_ms(self) -> float:
        """Average processing duration across sessions."""
        if not self.sessions:
            return 0.0
        return sum(s.total_duration_ms for s in self.sessions) / len(self.sessions)

    def average_layer_duration_ms(self, layer_name: str) -> float:
        """Average duration of one stage across the sessions that ran it."""
        durations = [
            layer.duration_ms
            for session in self.sessions
            for layer in session.layers
            if layer.layer_name == layer_name
        ]
        if not durations:
            return 0.0
        return sum(durations) / len(durations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_count": self.session_count,
            "average_duration_ms": self.average_duration_ms,
            "average_layer_duration_ms": {
                name: self.average_layer_duration_ms(name)
                for name in (TOKENIZE_LAYER, BUILD_LAYER)
            },
            "sessions": [session.to_dict() for session in self.sessions],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class PerformanceProfiler:
    """Profiler for parse operations.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> sessions = profiler.profile_parse("<a><b>x</b></a>", iterations=3)
        >>> report = profiler.generate_report()
        >>> report.session_count
        3
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        enable_memory_tracking: bool = True
    ) -> None:
        """Initialize performance profiler.

        Args:
            config: Parser configuration used for profiled parses
            enable_memory_tracking: Whether to sample resident memory
        """
        self.config = config or ParserConfig()
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "performance_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def _memory_rss(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    @contextmanager
    def profile_layer(
        self, session: ProfilingSession, layer_name: str
    ) -> Iterator[LayerPerformance]:
        """Record the duration and memory change of the enclosed block."""
        layer = LayerPerformance(
            layer_name=layer_name,
            start_time=time.perf_counter(),
            memory_start=self._memory_rss(),
        )
        try:
            yield layer
        finally:
            layer.end_time = time.perf_counter()
            layer.memory_end = self._memory_rss()
            session.layers.append(layer)

    def profile_parse(self, text: str, iterations: int = 1) -> List[ProfilingSession]:
        """Tokenize and build ``text`` ``iterations`` times, one session each.

        Parse errors propagate; sessions completed before the error are kept.
        """
        if iterations <= 0:
            raise ValueError("iterations must be > 0")

        tokenizer = MarkupTokenizer(self.config.tokenizer)
        builder = TreeBuilder(self.config.tree)
        new_sessions = []

        for _ in range(iterations):
            session = ProfilingSession(
                session_id=f"session_{len(self.sessions) + 1}",
                start_time=time.perf_counter(),
                input_size=len(text),
            )
            with self.profile_layer(session, TOKENIZE_LAYER) as layer:
                tokens = tokenizer.tokenize(text)
                layer.operations_count = len(tokens)
            with self.profile_layer(session, BUILD_LAYER) as layer:
                builder.build(tokens)
                layer.operations_count = len(tokens)
            session.end_time = time.perf_counter()

            self.sessions.append(session)
            new_sessions.append(session)

        self.logger.info(
            "Profiling completed",
            extra={"iterations": iterations, "input_size": len(text)}
        )
        return new_sessions

    def generate_report(self) -> PerformanceReport:
        """Build a report over every recorded session."""
        return PerformanceReport(sessions=list(self.sessions), generation_time=time.time())
