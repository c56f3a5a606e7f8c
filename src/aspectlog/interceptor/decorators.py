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
"""``@loggable`` — declares per-method logging and instruments the method.

Usage::

    class Greeter:
        @loggable
        def greet(self, name: LogParameter[str], last_name: str) -> str:
            return f"Hello {name} {last_name}"

        @loggable(log_parameters=False, log_exception_stack=True)
        async def charge(self, amount: int) -> str: ...

The ``LogConfig`` and the parameter markers are captured once, here; calls
only read them.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

from aspectlog.interceptor.dispatcher import InterceptionDispatcher
from aspectlog.interceptor.extractor import describe
from aspectlog.interceptor.types import LogConfig, MethodSignature
from aspectlog.interceptor.weaver import LOGGABLE_ATTR, METHOD_ATTR, build_wrapper

F = TypeVar("F", bound=Callable[..., Any])


@overload
def loggable(fn: F) -> F: ...


@overload
def loggable(
    *,
    enabled: bool = True,
    log_parameters: bool = True,
    log_error: bool = True,
    log_result: bool = True,
    level: str = "info",
    log_exception_stack: bool = False,
    dispatcher: InterceptionDispatcher | None = None,
) -> Callable[[F], F]: ...


def loggable(
    fn: Any = None,
    *,
    enabled: bool = True,
    log_parameters: bool = True,
    log_error: bool = True,
    log_result: bool = True,
    level: str = "info",
    log_exception_stack: bool = False,
    dispatcher: InterceptionDispatcher | None = None,
) -> Any:
    """Instrument a function or method; usable bare or with options.

    Args:
        enabled: Master switch for all three phases.
        log_parameters: Log ``LogParameter``-marked arguments before the call.
        log_error: Log the exception when the call raises.
        log_result: Log the return value when the call succeeds.
        level: Level of the parameter and result records.
        log_exception_stack: Attach the exception to the failure record.
        dispatcher: Dispatcher to use instead of the process default.

    Raises:
        InvalidLogConfigException: *level* is not a known level. Also raised when a
            marked parameter is named ``method``.
    """
    config = LogConfig(
        enabled=enabled,
        log_parameters=log_parameters,
        log_error=log_error,
        log_result=log_result,
        level=level,
        log_exception_stack=log_exception_stack,
    )

    def decorator(func: F) -> F:
        return build_wrapper(func, describe(func), config, dispatcher)  # type: ignore[return-value]

    if fn is not None:
        return decorator(fn)
    return decorator


def get_log_config(fn: Any) -> LogConfig | None:
    """Return the ``LogConfig`` declared on *fn*, or ``None``."""
    return getattr(fn, LOGGABLE_ATTR, None)


def get_method_signature(fn: Any) -> MethodSignature | None:
    """Return the metadata captured for *fn* when it was decorated."""
    return getattr(fn, METHOD_ATTR, None)
