"""Tests for performance profiling tools."""

import json
from unittest.mock import Mock, patch

import pytest

from markup_tree_parser.shared import MismatchedTagError, ParserConfig, UnclosedTagError
from markup_tree_parser.tools.profiling import (
    BUILD_LAYER,
    TOKENIZE_LAYER,
    LayerPerformance,
    PerformanceProfiler,
    PerformanceReport,
    ProfilingSession,
)


class TestLayerPerformance:
    """Tests for LayerPerformance class."""

    def test_layer_performance_calculations(self) -> None:
        """Test duration, memory and throughput calculations."""
        layer = LayerPerformance(
            layer_name=TOKENIZE_LAYER,
            start_time=1.0,
            end_time=1.5,
            memory_start=1000,
            memory_end=1500,
            operations_count=100,
        )

        assert layer.duration_ms == 500.0
        assert layer.memory_delta == 500
        assert layer.ops_per_second == 200.0

    def test_zero_duration(self) -> None:
        """Test throughput is zero when no time elapsed."""
        layer = LayerPerformance(TOKENIZE_LAYER, start_time=2.0, end_time=2.0,
                                 operations_count=5)

        assert layer.ops_per_second == 0.0


class TestProfilingSession:
    """Tests for ProfilingSession class."""

    def test_session_calculations(self) -> None:
        """Test session totals."""
        session = ProfilingSession("session_1", start_time=0.0, end_time=2.0, input_size=100)

        assert session.total_duration_ms == 2000.0
        assert session.characters_per_second == 50.0

    def test_layer_lookup(self) -> None:
        """Test layers are found by name."""
        build = LayerPerformance(BUILD_LAYER, start_time=0.0)
        session = ProfilingSession("session_1", start_time=0.0, layers=[build])

        assert session.layer(BUILD_LAYER) is build
        assert session.layer(TOKENIZE_LAYER) is None


class TestPerformanceReport:
    """Tests for PerformanceReport class."""

    def test_averages(self) -> None:
        """Test averages over sessions and per layer."""
        sessions = [
            ProfilingSession("a", 0.0, 1.0, layers=[LayerPerformance(BUILD_LAYER, 0.0, 0.5)]),
            ProfilingSession("b", 0.0, 3.0, layers=[LayerPerformance(BUILD_LAYER, 0.0, 1.5)]),
        ]
        report = PerformanceReport(sessions=sessions, generation_time=0.0)

        assert report.session_count == 2
        assert report.average_duration_ms == 2000.0
        assert report.average_layer_duration_ms(BUILD_LAYER) == 1000.0
        assert report.average_layer_duration_ms(TOKENIZE_LAYER) == 0.0

    def test_empty_report(self) -> None:
        """Test an empty report serializes with zero averages."""
        report = PerformanceReport(sessions=[], generation_time=0.0)

        data = json.loads(report.to_json())
        assert data["session_count"] == 0
        assert data["average_duration_ms"] == 0.0
        assert data["sessions"] == []


class TestPerformanceProfiler:
    """Tests for PerformanceProfiler class."""

    def test_profile_parse(self) -> None:
        """Test one session per iteration with both stages recorded."""
        profiler = PerformanceProfiler(enable_memory_tracking=False)

        sessions = profiler.profile_parse("<a><b>x</b></a>", iterations=3)

        assert [s.session_id for s in sessions] == ["session_1", "session_2", "session_3"]
        for session in sessions:
            assert session.input_size == len("<a><b>x</b></a>")
            assert [layer.layer_name for layer in session.layers] == [
                TOKENIZE_LAYER,
                BUILD_LAYER,
            ]
            assert session.layer(TOKENIZE_LAYER).operations_count == 5
            assert session.layer(BUILD_LAYER).operations_count == 5
            assert session.layer(BUILD_LAYER).memory_delta == 0

    def test_sessions_accumulate(self) -> None:
        """Test session numbering continues across calls."""
        profiler = PerformanceProfiler(enable_memory_tracking=False)
        profiler.profile_parse("<a></a>")
        second = profiler.profile_parse("<a></a>")

        assert second[0].session_id == "session_2"
        assert profiler.generate_report().session_count == 2

    def test_memory_tracking(self) -> None:
        """Test resident memory is sampled around each stage."""
        process = Mock()
        process.memory_info.side_effect = [Mock(rss=rss) for rss in (100, 150, 150, 400)]

        with patch("markup_tree_parser.tools.profiling.psutil.Process", return_value=process):
            profiler = PerformanceProfiler()
            session = profiler.profile_parse("<a></a>")[0]

        assert session.layer(TOKENIZE_LAYER).memory_delta == 50
        assert session.layer(BUILD_LAYER).memory_delta == 250

    def test_invalid_iterations(self) -> None:
        """Test iteration counts must be positive."""
        with pytest.raises(ValueError, match="iterations must be > 0"):
            PerformanceProfiler(enable_memory_tracking=False).profile_parse("<a></a>", 0)

    def test_parse_errors_propagate(self) -> None:
        """Test parse failures surface to the caller."""
        profiler = PerformanceProfiler(enable_memory_tracking=False)

        with pytest.raises(MismatchedTagError):
            profiler.profile_parse("<a></b>")
        assert profiler.generate_report().session_count == 0

    def test_uses_config(self) -> None:
        """Test the profiled stages honor the configuration."""
        profiler = PerformanceProfiler(ParserConfig.strict(), enable_memory_tracking=False)

        with pytest.raises(UnclosedTagError):
            profiler.profile_parse("<a>")
