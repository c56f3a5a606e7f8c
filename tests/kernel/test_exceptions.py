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
"""Tests for the aspectlog exception hierarchy."""

from aspectlog.kernel.exceptions import (
    AspectLogException,
    ConfigurationException,
    InstrumentationException,
    InvalidLogConfigException,
    MetadataUnavailableException,
    SinkWriteException,
)


class TestAspectLogException:
    def test_basic_creation(self):
        exc = AspectLogException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = AspectLogException("no names", code="METADATA_UNAVAILABLE", context={"method": "greet"})
        assert exc.code == "METADATA_UNAVAILABLE"
        assert exc.context["method"] == "greet"

    def test_context_is_not_shared(self):
        first = AspectLogException("a")
        first.context["key"] = "value"
        assert AspectLogException("b").context == {}


class TestExceptionHierarchy:
    def test_instrumentation_failures(self):
        assert issubclass(MetadataUnavailableException, InstrumentationException)
        assert issubclass(SinkWriteException, InstrumentationException)
        assert issubclass(InstrumentationException, AspectLogException)

    def test_configuration_failures(self):
        assert issubclass(InvalidLogConfigException, ConfigurationException)
        assert issubclass(ConfigurationException, AspectLogException)
