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
"""Interception dispatcher — runs the three logging phases of a call.

For each phase the dispatcher asks the activation resolver, renders the
record and writes it to the sink. Only PRE binds the call's arguments (at
most once per call); POST-SUCCESS and POST-FAILURE need just the method
identity, so they are logged even when the arguments cannot be bound.
Metadata and sink failures end that phase's logging and are reported on the
dispatcher's own logger; they never reach the caller.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from aspectlog.interceptor import activation, extractor, formatter
from aspectlog.interceptor.sink import LogSink, StructlogSink
from aspectlog.interceptor.types import ERROR_LEVEL, InvocationContext, JoinPoint, LogRecord, Phase
from aspectlog.kernel.exceptions import InstrumentationException

logger = logging.getLogger(__name__)


def _identity(jp: JoinPoint) -> InvocationContext:
    return InvocationContext(type_name=jp.method.type_name, method_name=jp.method.method_name)


class InterceptionDispatcher:
    """Orchestrates PRE, POST-SUCCESS and POST-FAILURE logging for calls.

    Args:
        sink: Destination for records; a :class:`StructlogSink` by default.
        enabled: Process-wide switch ANDed with each method's ``enabled``.
    """

    def __init__(self, sink: LogSink | None = None, enabled: bool = True) -> None:
        self._sink: LogSink = sink if sink is not None else StructlogSink()
        self._enabled = enabled

    @property
    def sink(self) -> LogSink:
        return self._sink

    @property
    def enabled(self) -> bool:
        return self._enabled

    def before(self, jp: JoinPoint) -> None:
        """PRE: log the marked parameters before the method body runs."""
        if not (self._enabled and activation.should_log_parameters(jp.config)):
            return
        self._emit(jp, Phase.PRE, jp.config.level, lambda: formatter.render_parameters(self._context(jp)))

    def after_returning(self, jp: JoinPoint) -> None:
        """POST-SUCCESS: log ``jp.return_value``."""
        if not (self._enabled and activation.should_log_result(jp.config)):
            return
        self._emit(
            jp,
            Phase.POST_SUCCESS,
            jp.config.level,
            lambda: formatter.render_result(_identity(jp), jp.return_value),
        )

    def after_throwing(self, jp: JoinPoint) -> None:
        """POST-FAILURE: log ``jp.exception``. The caller re-raises it."""
        if jp.exception is None or not (self._enabled and activation.should_log_error(jp.config)):
            return
        exception = jp.exception
        self._emit(
            jp,
            Phase.POST_FAILURE,
            ERROR_LEVEL,
            lambda: formatter.render_error(_identity(jp), exception),
            exc_info=exception if jp.config.log_exception_stack else None,
        )

    def _context(self, jp: JoinPoint) -> InvocationContext:
        if jp.context is None:
            jp.context = extractor.extract(jp.method, jp.args, jp.kwargs)
        return jp.context

    def _emit(
        self,
        jp: JoinPoint,
        phase: Phase,
        level: str,
        render: Callable[[], LogRecord],
        exc_info: BaseException | None = None,
    ) -> None:
        try:
            record = render()
        except InstrumentationException as exc:
            logger.warning(
                "Skipped %s logging for %s.%s: %s",
                phase.value,
                jp.method.type_name,
                jp.method.method_name,
                exc,
            )
            return

        try:
            if exc_info is None:
                self._sink.write(level, record)
            else:
                self._sink.write(level, record, exc_info=exc_info)
        except Exception as exc:
            logger.warning(
                "Log sink failed to write %s record for %s.%s: %s",
                phase.value,
                jp.method.type_name,
                jp.method.method_name,
                exc,
            )


_default_dispatcher: InterceptionDispatcher | None = None
_default_lock = threading.Lock()


def get_dispatcher() -> InterceptionDispatcher:
    """Return the process default dispatcher, creating it on first use."""
    global _default_dispatcher
    if _default_dispatcher is None:
        with _default_lock:
            if _default_dispatcher is None:
                _default_dispatcher = InterceptionDispatcher()
    return _default_dispatcher


def set_dispatcher(dispatcher: InterceptionDispatcher | None) -> None:
    """Replace the process default dispatcher (``None`` resets it)."""
    global _default_dispatcher
    with _default_lock:
        _default_dispatcher = dispatcher
