# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the interception dispatcher phases."""

from __future__ import annotations

import logging
import threading

import pytest

from aspectlog.interceptor import extractor
from aspectlog.interceptor.dispatcher import InterceptionDispatcher, get_dispatcher, set_dispatcher
from aspectlog.interceptor.extractor import describe
from aspectlog.interceptor.params import LogParameter
from aspectlog.interceptor.sink import StructlogSink
from aspectlog.interceptor.types import JoinPoint, LogConfig, LogRecord, MethodSignature, Phase
from aspectlog.kernel.exceptions import SinkWriteException
from aspectlog.testing import RecordingSink


class Greeter:
    def greet(self, name: LogParameter[str], last_name: str) -> str:
        return f"Hello {name} {last_name}"


def _join_point(config: LogConfig | None = None, **overrides) -> JoinPoint:
    return JoinPoint(
        method=describe(Greeter.greet),
        config=config or LogConfig(),
        args=(Greeter(), "Ada", "Lovelace"),
        kwargs={},
        **overrides,
    )


class _FailingSink:
    def write(self, level: str, record: LogRecord, exc_info: BaseException | None = None) -> None:
        raise OSError("disk full")


class TestBefore:
    def test_writes_parameter_record_at_configured_level(self) -> None:
        sink = RecordingSink()
        InterceptionDispatcher(sink=sink).before(_join_point(LogConfig(level="debug")))

        assert sink.levels() == ["debug"]
        assert sink.lines() == ["class=Greeter, method=greet, name=Ada"]

    def test_inactive_phase_skips_extraction(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _fail(*args, **kwargs):
            raise AssertionError("extract must not run")

        monkeypatch.setattr(extractor, "extract", _fail)
        sink = RecordingSink()
        InterceptionDispatcher(sink=sink).before(_join_point(LogConfig(log_parameters=False)))

        assert sink.writes == []


class TestAfterReturning:
    def test_writes_result_record(self) -> None:
        sink = RecordingSink()
        jp = _join_point(return_value=42)
        InterceptionDispatcher(sink=sink).after_returning(jp)

        assert sink.levels() == ["info"]
        assert sink.lines() == ["class=Greeter, method=greet, result=42"]

    def test_context_is_extracted_once_per_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[MethodSignature] = []
        original = extractor.extract

        def _counting(method, args, kwargs):
            calls.append(method)
            return original(method, args, kwargs)

        monkeypatch.setattr(extractor, "extract", _counting)
        dispatcher = InterceptionDispatcher(sink=RecordingSink())
        jp = _join_point(return_value="ok")

        dispatcher.before(jp)
        dispatcher.after_returning(jp)

        assert len(calls) == 1
        assert jp.context is not None


class TestAfterThrowing:
    def test_writes_error_record_at_error_level(self) -> None:
        sink = RecordingSink()
        jp = _join_point(LogConfig(level="debug"), exception=ValueError("boom"))
        InterceptionDispatcher(sink=sink).after_throwing(jp)

        assert sink.levels() == ["error"]
        assert sink.lines() == ["class=Greeter, method=greet, errorType=ValueError, errorMessage=boom"]
        assert sink.writes[0][2] is None

    def test_exception_is_attached_when_stack_requested(self) -> None:
        sink = RecordingSink()
        error = ValueError("boom")
        InterceptionDispatcher(sink=sink).after_throwing(
            _join_point(LogConfig(log_exception_stack=True), exception=error)
        )

        assert sink.writes[0][2] is error

    def test_no_exception_means_nothing_to_log(self) -> None:
        sink = RecordingSink()
        InterceptionDispatcher(sink=sink).after_throwing(_join_point())
        assert sink.writes == []


class TestGlobalSwitch:
    def test_disabled_dispatcher_writes_nothing(self) -> None:
        sink = RecordingSink()
        dispatcher = InterceptionDispatcher(sink=sink, enabled=False)
        jp = _join_point(return_value=1, exception=ValueError("x"))

        dispatcher.before(jp)
        dispatcher.after_returning(jp)
        dispatcher.after_throwing(jp)

        assert sink.writes == []
        assert dispatcher.enabled is False


class TestFailureIsolation:
    def test_sink_failure_is_reported_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        dispatcher = InterceptionDispatcher(sink=_FailingSink())

        with caplog.at_level(logging.WARNING, logger="aspectlog.interceptor.dispatcher"):
            dispatcher.before(_join_point())

        assert "disk full" in caplog.text
        assert "Greeter.greet" in caplog.text

    def test_sink_write_exception_is_reported_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        class _RejectingSink:
            def write(self, level, record, exc_info=None):
                raise SinkWriteException("rejected")

        with caplog.at_level(logging.WARNING, logger="aspectlog.interceptor.dispatcher"):
            InterceptionDispatcher(sink=_RejectingSink()).after_returning(_join_point(return_value=1))

        assert "rejected" in caplog.text

    def test_metadata_failure_skips_phase(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = RecordingSink()
        jp = JoinPoint(
            method=MethodSignature(type_name="Opaque", method_name="run"),
            config=LogConfig(),
            args=(),
            kwargs={},
        )

        with caplog.at_level(logging.WARNING, logger="aspectlog.interceptor.dispatcher"):
            InterceptionDispatcher(sink=sink).before(jp)

        assert sink.writes == []
        assert "Skipped pre logging for Opaque.run" in caplog.text

    def test_post_phases_do_not_need_parameter_metadata(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _fail(*args, **kwargs):
            raise AssertionError("extract must not run")

        monkeypatch.setattr(extractor, "extract", _fail)
        sink = RecordingSink()
        dispatcher = InterceptionDispatcher(sink=sink)
        method = MethodSignature(type_name="Opaque", method_name="run")

        dispatcher.after_returning(JoinPoint(method=method, config=LogConfig(), args=(), kwargs={}, return_value=7))
        dispatcher.after_throwing(
            JoinPoint(method=method, config=LogConfig(), args=(), kwargs={}, exception=KeyError("k"))
        )

        assert sink.lines() == [
            "class=Opaque, method=run, result=7",
            "class=Opaque, method=run, errorType=KeyError, errorMessage='k'",
        ]


class TestDefaultDispatcher:
    def test_created_lazily_with_structlog_sink(self) -> None:
        default = get_dispatcher()
        assert isinstance(default.sink, StructlogSink)
        assert get_dispatcher() is default

    def test_concurrent_first_use_creates_one_default(self) -> None:
        barrier = threading.Barrier(8)
        seen: list[InterceptionDispatcher] = []

        def _first_call() -> None:
            barrier.wait()
            seen.append(get_dispatcher())

        threads = [threading.Thread(target=_first_call) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(seen) == 8
        assert all(d is seen[0] for d in seen)

    def test_set_dispatcher_replaces_default(self) -> None:
        replacement = InterceptionDispatcher(sink=RecordingSink())
        set_dispatcher(replacement)
        assert get_dispatcher() is replacement

    def test_phase_enum_values(self) -> None:
        assert [p.value for p in Phase] == ["pre", "post_success", "post_failure"]
