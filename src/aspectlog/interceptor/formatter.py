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
"""Record formatter — renders a call context into an ordered key/value record.

Wire keys: ``class``, ``method``, then the marked parameters (PRE),
``result`` (POST-SUCCESS) or ``errorType`` + ``errorMessage``
(POST-FAILURE). The same context and payload always render to the same
record: no timestamps, no reordering.
"""

from __future__ import annotations

from typing import Any

from aspectlog.interceptor.types import InvocationContext, LogRecord, Phase

CLASS_KEY = "class"
METHOD_KEY = "method"
RESULT_KEY = "result"
ERROR_TYPE_KEY = "errorType"
ERROR_MESSAGE_KEY = "errorMessage"

MISSING = "null"


def format_value(value: Any) -> str:
    """Natural string form of *value*; ``None`` becomes ``"null"``.

    Structured values are not traversed beyond their own ``__str__``.
    """
    if value is None:
        return MISSING
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _identity(ctx: InvocationContext) -> list[tuple[str, str]]:
    return [(CLASS_KEY, ctx.type_name), (METHOD_KEY, ctx.method_name)]


def render_parameters(ctx: InvocationContext) -> LogRecord:
    """PRE record: identity fields plus every marked parameter in declaration order."""
    fields = _identity(ctx)
    fields.extend((arg.name, format_value(arg.value)) for arg in ctx.arguments if arg.marked)
    return LogRecord(phase=Phase.PRE, fields=tuple(fields))


def render_result(ctx: InvocationContext, value: Any) -> LogRecord:
    """POST-SUCCESS record carrying the stringified return value."""
    fields = _identity(ctx)
    fields.append((RESULT_KEY, format_value(value)))
    return LogRecord(phase=Phase.POST_SUCCESS, fields=tuple(fields))


def render_error(ctx: InvocationContext, err: BaseException) -> LogRecord:
    """POST-FAILURE record; ``errorMessage`` is present even when empty."""
    fields = _identity(ctx)
    fields.append((ERROR_TYPE_KEY, type(err).__name__))
    fields.append((ERROR_MESSAGE_KEY, format_value(err)))
    return LogRecord(phase=Phase.POST_FAILURE, fields=tuple(fields))
