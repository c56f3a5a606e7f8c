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
"""Activation resolver — decides whether a phase of a call is logged.

``enabled`` is a kill switch over the three per-phase flags. Each check is
evaluated on its own at its phase; nothing is memoized between phases.
"""

from __future__ import annotations

from aspectlog.interceptor.types import LogConfig, Phase


def should_log_parameters(cfg: LogConfig) -> bool:
    return cfg.enabled and cfg.log_parameters


def should_log_result(cfg: LogConfig) -> bool:
    return cfg.enabled and cfg.log_result


def should_log_error(cfg: LogConfig) -> bool:
    return cfg.enabled and cfg.log_error


_RESOLVERS = {
    Phase.PRE: should_log_parameters,
    Phase.POST_SUCCESS: should_log_result,
    Phase.POST_FAILURE: should_log_error,
}


def is_active(cfg: LogConfig, phase: Phase) -> bool:
    """Return whether *phase* is logged under *cfg*."""
    return _RESOLVERS[phase](cfg)
