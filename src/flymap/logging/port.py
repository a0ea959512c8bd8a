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
"""LoggingPort — how FlyMap hands its log configuration to a backend.

``Mapper.from_config`` configures a port from the ``flymap.logging``
section; :class:`~flymap.logging.structlog_adapter.StructlogAdapter` is the
default implementation.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from flymap.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Logging backend configured from ``flymap.logging``."""

    def configure(self, config: Config) -> None:
        """Apply root level, per-module levels and output format."""
        ...

    def get_logger(self, name: str) -> Any:
        """Return an event-style logger (``logger.info(event, **fields)``)."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Set the level of one stdlib logger, e.g. ``flymap.mapping``."""
        ...
