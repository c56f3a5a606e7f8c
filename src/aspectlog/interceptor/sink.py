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
"""LogSink — the port records are written to, and its structlog adapter."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import structlog

from aspectlog.interceptor.types import LEVELS, LogRecord
from aspectlog.kernel.exceptions import SinkWriteException


@runtime_checkable
class LogSink(Protocol):
    """Destination for formatted records.

    ``level`` is one of ``debug``, ``info``, ``warning``, ``error`` or
    ``critical``. ``exc_info`` is only passed for failure records of methods
    declared with ``log_exception_stack=True``, so sinks that never enable
    it may implement ``write(level, record)`` alone.
    """

    def write(self, level: str, record: LogRecord, exc_info: BaseException | None = None) -> None: ...


class StructlogSink:
    """Writes each record as one rendered line through a structlog logger."""

    def __init__(self, logger_name: str = "aspectlog", logger: Any = None) -> None:
        self._logger_name = logger_name
        self._logger = logger if logger is not None else structlog.get_logger(logger_name)

    @property
    def logger_name(self) -> str:
        return self._logger_name

    def write(self, level: str, record: LogRecord, exc_info: BaseException | None = None) -> None:
        log_method = getattr(self._logger, level, None) if level in LEVELS else None
        if log_method is None:
            raise SinkWriteException(
                f"Logger '{self._logger_name}' has no '{level}' method",
                code="UNKNOWN_LEVEL",
                context={"level": level},
            )
        try:
            if exc_info is not None:
                log_method(record.render(), exc_info=exc_info)
            else:
                log_method(record.render())
        except Exception as exc:
            raise SinkWriteException(
                f"Failed to write {record.phase.value} record to '{self._logger_name}'",
                code="SINK_WRITE_FAILED",
                context={"level": level},
            ) from exc
