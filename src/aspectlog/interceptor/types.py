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
"""Interceptor core types — configuration, method metadata, call context and records."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from aspectlog.kernel.exceptions import InvalidLogConfigException

LEVELS: tuple[str, ...] = ("debug", "info", "warning", "error", "critical")
ERROR_LEVEL = "error"


class Phase(str, Enum):
    """Join points at which an instrumented call can be logged."""

    PRE = "pre"
    POST_SUCCESS = "post_success"
    POST_FAILURE = "post_failure"


@dataclass(frozen=True)
class LogConfig:
    """Per-method logging intent declared with ``@loggable``.

    Attributes:
        enabled: Master switch; when False no phase is ever logged.
        log_parameters: Log marked parameters before the call.
        log_error: Log the exception when the call raises.
        log_result: Log the return value when the call succeeds.
        level: Level of the PRE and POST-SUCCESS records. Failures are
            always written at ``"error"``.
        log_exception_stack: Hand the exception to the sink together with
            the failure record so a traceback can be rendered.
    """

    enabled: bool = True
    log_parameters: bool = True
    log_error: bool = True
    log_result: bool = True
    level: str = "info"
    log_exception_stack: bool = False

    def __post_init__(self) -> None:
        level = str(self.level).lower()
        if level not in LEVELS:
            raise InvalidLogConfigException(
                f"Unsupported log level '{self.level}', expected one of {', '.join(LEVELS)}",
                code="INVALID_LOG_LEVEL",
                context={"level": self.level},
            )
        object.__setattr__(self, "level", level)


@dataclass(frozen=True)
class ParameterSpec:
    """A declared parameter and whether it carries the ``LogParameter`` marker."""

    name: str
    marked: bool
    kind: inspect._ParameterKind = inspect.Parameter.POSITIONAL_OR_KEYWORD


@dataclass(frozen=True)
class MethodSignature:
    """Metadata captured once when a method is decorated.

    ``signature`` is ``None`` when the callable cannot be introspected; every
    later extraction for it then fails with ``MetadataUnavailableException``.
    """

    type_name: str
    method_name: str
    parameters: tuple[ParameterSpec, ...] = ()
    signature: inspect.Signature | None = None
    has_receiver: bool = False

    @property
    def marked_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters if p.marked)


@dataclass(frozen=True)
class InvocationArgument:
    """One (name, marked, value) triple of a concrete call."""

    name: str
    marked: bool
    value: Any


@dataclass
class InvocationContext:
    """Normalized description of a single call, owned by that call only."""

    type_name: str
    method_name: str
    arguments: tuple[InvocationArgument, ...] = ()
    result: Any = None
    error: BaseException | None = None

    @property
    def marked_arguments(self) -> tuple[InvocationArgument, ...]:
        return tuple(a for a in self.arguments if a.marked)


@dataclass(frozen=True)
class LogRecord:
    """Ordered key/value pairs produced for one phase of one call."""

    phase: Phase
    fields: tuple[tuple[str, str], ...]

    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.fields)

    def get(self, key: str, default: str | None = None) -> str | None:
        for k, v in self.fields:
            if k == key:
                return v
        return default

    def render(self) -> str:
        """Render as a single ``key=value, key=value`` line."""
        return ", ".join(f"{key}={value}" for key, value in self.fields)

    def __str__(self) -> str:
        return self.render()


@dataclass
class JoinPoint:
    """Raw call-site data for one intercepted call.

    Attributes:
        method: Registration-time metadata of the intercepted method.
        config: The method's ``LogConfig``.
        args: Positional arguments passed to the method.
        kwargs: Keyword arguments passed to the method.
        return_value: The return value (set after a successful call).
        exception: The exception raised by the call, if any.
        context: The extracted ``InvocationContext``, filled by the first
            phase that needs it.
    """

    method: MethodSignature
    config: LogConfig
    args: tuple
    kwargs: dict[str, Any]
    return_value: Any = None
    exception: BaseException | None = None
    context: InvocationContext | None = field(default=None, repr=False)
