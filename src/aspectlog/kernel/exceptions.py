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
"""Unified exception hierarchy for aspectlog.

All library exceptions inherit from AspectLogException, so callers can catch
every instrumentation error in one place.

Categories:
- ConfigurationException: invalid @loggable declarations or settings
- InstrumentationException: failures while producing or writing a record
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class AspectLogException(Exception):
    """Base exception for all aspectlog errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "METADATA_UNAVAILABLE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(AspectLogException):
    """A declaration or a configuration value cannot be used."""


class InvalidLogConfigException(ConfigurationException):
    """A @loggable declaration carries an unsupported option value."""


# =============================================================================
# Instrumentation Exceptions
# =============================================================================


class InstrumentationException(AspectLogException):
    """Logging of a single phase failed.

    Never propagated to the caller of an instrumented method: the dispatcher
    skips the phase and reports the failure on its own logger.
    """


class MetadataUnavailableException(InstrumentationException):
    """Parameter names, markers and values cannot be aligned for a call."""


class SinkWriteException(InstrumentationException):
    """The log sink rejected or failed to write a record."""
