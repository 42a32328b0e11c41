#
# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Union

from .exceptions import CircularReferenceException, DeserializationException, SerializationException

__all__ = ["SerializationState", "DecodeContext"]


@dataclass(frozen=True)
class SerializationState:
    """
    Tracks the containers currently being written so that cycles and
    runaway nesting are reported instead of recursing forever.
    """

    maximum_depth: int = 100
    current_depth: int = 0
    _visited_objects: FrozenSet[int] = field(default=frozenset(), repr=False)

    def validate_circular_reference(self, obj: Any) -> None:
        if id(obj) in self._visited_objects:
            raise CircularReferenceException(f"Circular reference detected for {type(obj).__name__}")
        if self.current_depth >= self.maximum_depth:
            raise SerializationException(f"Maximum serialization depth ({self.maximum_depth}) exceeded")

    def create_child_state(self, obj: Any) -> "SerializationState":
        return SerializationState(
            maximum_depth=self.maximum_depth,
            current_depth=self.current_depth + 1,
            _visited_objects=self._visited_objects | {id(obj)},
        )


@dataclass(frozen=True)
class DecodeContext:
    """Position of the node being bound, plus the engine's parsing policy."""

    path: str = "$"
    depth: int = 0
    strict: bool = True
    maximum_depth: int = 100

    def child(self, key: Union[str, int]) -> "DecodeContext":
        if self.depth + 1 > self.maximum_depth:
            raise self.error(f"Maximum deserialization depth ({self.maximum_depth}) exceeded")
        path = f"{self.path}[{key}]" if isinstance(key, int) else f"{self.path}.{key}"
        return DecodeContext(path=path, depth=self.depth + 1, strict=self.strict, maximum_depth=self.maximum_depth)

    def error(self, message: str) -> DeserializationException:
        return DeserializationException(message, path=self.path)
