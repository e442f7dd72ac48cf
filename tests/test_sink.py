"""Tests for formcheck.validation.sink — ordered, unique messages."""

from formcheck.validation.sink import ErrorSink


class TestErrorSink:
    def test_empty(self) -> None:
        sink = ErrorSink()
        assert sink.drain() == []
        assert not sink
        assert len(sink) == 0

    def test_push_keeps_order(self) -> None:
        sink = ErrorSink()
        sink.push("first")
        sink.push("second")
        assert sink.drain() == ["first", "second"]

    def test_duplicates_suppressed(self) -> None:
        sink = ErrorSink()
        sink.push("same")
        sink.push("other")
        sink.push("same")
        assert sink.drain() == ["same", "other"]
        assert len(sink) == 2

    def test_drain_does_not_clear(self) -> None:
        sink = ErrorSink()
        sink.push("kept")
        assert sink.drain() == ["kept"]
        assert sink.drain() == ["kept"]

    def test_drain_returns_copy(self) -> None:
        sink = ErrorSink()
        sink.push("a")
        drained = sink.drain()
        drained.append("b")
        assert sink.drain() == ["a"]

    def test_clear(self) -> None:
        sink = ErrorSink()
        sink.push("gone")
        sink.clear()
        assert sink.drain() == []
        sink.push("gone")
        assert list(sink) == ["gone"]

    def test_repr(self) -> None:
        sink = ErrorSink()
        sink.push("x")
        assert repr(sink) == "ErrorSink(['x'])"
