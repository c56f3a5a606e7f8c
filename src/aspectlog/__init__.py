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
"""aspectlog — declarative method-call logging.

Decorate a method with ``@loggable`` and mark the parameters worth logging
with ``LogParameter``; calls are then logged before they run, after they
return, and when they raise.
"""

from aspectlog.bootstrap import configure
from aspectlog.core.config import Config
from aspectlog.interceptor import (
    InterceptionDispatcher,
    LogConfig,
    LogParameter,
    LogRecord,
    LogSink,
    Phase,
    StructlogSink,
    get_dispatcher,
    get_log_config,
    loggable,
    set_dispatcher,
    weave_bean,
)
from aspectlog.kernel.exceptions import (
    AspectLogException,
    MetadataUnavailableException,
    SinkWriteException,
)

__version__ = "0.1.0"

__all__ = [
    "AspectLogException",
    "Config",
    "InterceptionDispatcher",
    "LogConfig",
    "LogParameter",
    "LogRecord",
    "LogSink",
    "MetadataUnavailableException",
    "Phase",
    "SinkWriteException",
    "StructlogSink",
    "configure",
    "get_dispatcher",
    "get_log_config",
    "loggable",
    "set_dispatcher",
    "weave_bean",
]
