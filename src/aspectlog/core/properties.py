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
"""Configuration properties for the interceptor and its logging backend."""

from __future__ import annotations

from dataclasses import dataclass

from aspectlog.core.config import config_properties


@config_properties(prefix="aspectlog.interceptor")
@dataclass(frozen=True)
class InterceptorProperties:
    """Process-wide interceptor settings.

    ``enabled`` is ANDed with every method's own ``enabled`` flag, so a
    deployment can silence all instrumentation without touching code.
    """

    enabled: bool = True
    logger_name: str = "aspectlog"


@config_properties(prefix="aspectlog.logging")
@dataclass(frozen=True)
class LoggingProperties:
    """Logging backend settings (``console`` or ``json`` output)."""

    format: str = "console"
    adapter: str = "structlog"
