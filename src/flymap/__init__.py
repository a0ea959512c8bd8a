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
"""FlyMap — member correspondence resolution for object-to-object mapping."""

from flymap.kernel.exceptions import (
    AmbiguousBindingException,
    FlyMapException,
    MappingConfigurationException,
    MappingExecutionException,
    ResolutionException,
)
from flymap.mapping import (
    Bind,
    BindingConfig,
    BindingRegistry,
    Ignore,
    Mapper,
    MappingMemberBuilder,
    MappingMemberPath,
    TypePair,
)

__version__ = "0.1.0"

__all__ = [
    "AmbiguousBindingException",
    "Bind",
    "BindingConfig",
    "BindingRegistry",
    "FlyMapException",
    "Ignore",
    "Mapper",
    "MappingConfigurationException",
    "MappingExecutionException",
    "MappingMemberBuilder",
    "MappingMemberPath",
    "ResolutionException",
    "TypePair",
    "__version__",
]
