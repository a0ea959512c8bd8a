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
"""Tests for the FlyMap exception hierarchy."""

from flymap.kernel.exceptions import (
    AmbiguousBindingException,
    FlyMapException,
    MappingConfigurationException,
    MappingExecutionException,
    ResolutionException,
)


class TestFlyMapException:
    def test_basic_creation(self):
        exc = FlyMapException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = FlyMapException("bad binding", code="MAPPING_001", context={"source": "login"})
        assert exc.code == "MAPPING_001"
        assert exc.context["source"] == "login"

    def test_context_not_shared_between_instances(self):
        exc = FlyMapException("first")
        exc.context["key"] = "value"
        assert FlyMapException("second").context == {}


class TestExceptionHierarchy:
    def test_configuration_is_flymap(self):
        assert issubclass(MappingConfigurationException, FlyMapException)

    def test_execution_is_flymap(self):
        assert issubclass(MappingExecutionException, FlyMapException)

    def test_resolution_is_configuration(self):
        assert issubclass(ResolutionException, MappingConfigurationException)

    def test_ambiguous_is_configuration(self):
        assert issubclass(AmbiguousBindingException, MappingConfigurationException)


class TestResolutionException:
    def test_message_and_context(self):
        class Target:
            pass

        exc = ResolutionException("location.city", "location", Target)

        assert "'location'" in str(exc)
        assert "'location.city'" in str(exc)
        assert exc.code == "MAPPING_PATH"
        assert exc.context == {"path": "location.city", "segment": "location", "type": Target}
