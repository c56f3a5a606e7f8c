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
"""Wire configuration, the logging backend and the default dispatcher together."""

from __future__ import annotations

from aspectlog.core.config import Config
from aspectlog.core.properties import InterceptorProperties, LoggingProperties
from aspectlog.interceptor.dispatcher import InterceptionDispatcher, set_dispatcher
from aspectlog.interceptor.sink import StructlogSink
from aspectlog.kernel.exceptions import ConfigurationException
from aspectlog.logging.port import LoggingPort
from aspectlog.logging.stdlib_adapter import StdlibLoggingAdapter
from aspectlog.logging.structlog_adapter import StructlogAdapter

_ADAPTERS: dict[str, type] = {
    "structlog": StructlogAdapter,
    "stdlib": StdlibLoggingAdapter,
}


def create_logging_port(config: Config) -> LoggingPort:
    """Instantiate and configure the adapter named by ``aspectlog.logging.adapter``."""
    name = config.bind(LoggingProperties).adapter.lower()
    adapter_cls = _ADAPTERS.get(name)
    if adapter_cls is None:
        raise ConfigurationException(
            f"Unknown logging adapter '{name}', expected one of {', '.join(sorted(_ADAPTERS))}",
            code="UNKNOWN_LOGGING_ADAPTER",
        )
    port: LoggingPort = adapter_cls()
    port.configure(config)
    return port


def configure(config: Config | None = None) -> InterceptionDispatcher:
    """Configure logging and install a new process default dispatcher.

    Functions decorated without an explicit dispatcher pick it up on their
    next call.
    """
    config = config or Config()
    port = create_logging_port(config)
    props = config.bind(InterceptorProperties)

    sink = StructlogSink(props.logger_name, logger=port.get_logger(props.logger_name))
    dispatcher = InterceptionDispatcher(sink=sink, enabled=props.enabled)
    set_dispatcher(dispatcher)
    return dispatcher
