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
"""Exception hierarchy for FlyMap.

All mapping errors inherit from FlyMapException so callers can catch the
whole family at once, or target a specific failure.

Categories:
- MappingConfigurationException: binding declarations that cannot be honoured
- MappingExecutionException: failures while copying values between objects
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyMapException(Exception):
    """Base exception for all FlyMap errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "MAPPING_PATH").
        context: Arbitrary key-value pairs describing the failing binding.
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


class MappingConfigurationException(FlyMapException):
    """A binding, ignore rule or annotation is declared incorrectly."""


class ResolutionException(MappingConfigurationException):
    """A dotted member path names a segment the type does not expose.

    ``context`` holds ``path``, ``segment`` and ``type`` of the failing lookup.
    """

    def __init__(self, path: str, segment: str, owner: type) -> None:
        owner_name = getattr(owner, "__qualname__", repr(owner))
        super().__init__(
            f"Cannot resolve '{segment}' of path '{path}' on {owner_name}",
            code="MAPPING_PATH",
            context={"path": path, "segment": segment, "type": owner},
        )


class AmbiguousBindingException(MappingConfigurationException):
    """Several target members declare they receive the same source member."""


# =============================================================================
# Execution Exceptions
# =============================================================================


class MappingExecutionException(FlyMapException):
    """A mapping plan could not be applied to concrete objects."""
