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
"""Test helpers for code instrumented with ``@loggable``."""

from __future__ import annotations

from aspectlog.interceptor.types import LogRecord, Phase


class RecordingSink:
    """LogSink that keeps every write in memory.

    Usage::

        sink = RecordingSink()
        set_dispatcher(InterceptionDispatcher(sink=sink))
        Greeter().greet("Ada", "Lovelace")
        assert sink.lines() == ["class=Greeter, method=greet, name=Ada", ...]
    """

    def __init__(self) -> None:
        self.writes: list[tuple[str, LogRecord, BaseException | None]] = []

    def write(self, level: str, record: LogRecord, exc_info: BaseException | None = None) -> None:
        self.writes.append((level, record, exc_info))

    @property
    def records(self) -> list[LogRecord]:
        return [record for _, record, _ in self.writes]

    def lines(self) -> list[str]:
        return [record.render() for record in self.records]

    def levels(self) -> list[str]:
        return [level for level, _, _ in self.writes]

    def of_phase(self, phase: Phase) -> list[LogRecord]:
        return [record for record in self.records if record.phase is phase]

    def clear(self) -> None:
        self.writes.clear()
