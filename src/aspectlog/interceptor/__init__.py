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
"""Method-call interception: declaration, activation, extraction, formatting, dispatch."""

from aspectlog.interceptor.activation import (
    is_active,
    should_log_error,
    should_log_parameters,
    should_log_result,
)
from aspectlog.interceptor.decorators import get_log_config, get_method_signature, loggable
from aspectlog.interceptor.dispatcher import InterceptionDispatcher, get_dispatcher, set_dispatcher
from aspectlog.interceptor.extractor import describe, extract
from aspectlog.interceptor.formatter import format_value, render_error, render_parameters, render_result
from aspectlog.interceptor.params import LogParameter
from aspectlog.interceptor.sink import LogSink, StructlogSink
from aspectlog.interceptor.types import (
    InvocationArgument,
    InvocationContext,
    JoinPoint,
    LogConfig,
    LogRecord,
    MethodSignature,
    ParameterSpec,
    Phase,
)
from aspectlog.interceptor.weaver import weave_bean

__all__ = [
    "InterceptionDispatcher",
    "InvocationArgument",
    "InvocationContext",
    "JoinPoint",
    "LogConfig",
    "LogParameter",
    "LogRecord",
    "LogSink",
    "MethodSignature",
    "ParameterSpec",
    "Phase",
    "StructlogSink",
    "describe",
    "extract",
    "format_value",
    "get_dispatcher",
    "get_log_config",
    "get_method_signature",
    "is_active",
    "loggable",
    "render_error",
    "render_parameters",
    "render_result",
    "set_dispatcher",
    "should_log_error",
    "should_log_parameters",
    "should_log_result",
    "weave_bean",
]
