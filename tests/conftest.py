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
"""Shared fixtures: fresh default dispatcher and structlog state per test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from aspectlog.interceptor.dispatcher import InterceptionDispatcher, set_dispatcher
from aspectlog.testing import RecordingSink


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    yield
    set_dispatcher(None)
    structlog.reset_defaults()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def dispatcher(sink: RecordingSink) -> InterceptionDispatcher:
    """Process default dispatcher writing to the ``sink`` fixture."""
    active = InterceptionDispatcher(sink=sink)
    set_dispatcher(active)
    return active
