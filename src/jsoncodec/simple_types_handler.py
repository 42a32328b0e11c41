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

from pathlib import PurePath
from typing import Any
from uuid import UUID

from ._interfaces import TypeHandler
from .shapes import AnyShape, PrimitiveShape, Shape, StringConvertedShape

__all__ = ["SimpleTypesHandler"]


class SimpleTypesHandler(TypeHandler):
    """
    Type handler for JSON primitives, untyped values, UUID and Path.

    Primitives map to the matching JSON scalar, ``typing.Any`` passes parsed
    JSON through, UUID and Path are written as strings.
    """

    _PRIMITIVES = (str, int, float, bool)

    def can_handle_type(self, type_descriptor: Any) -> bool:
        """
        Check if this handler can resolve simple types.

        :param type_descriptor: The type descriptor to check.
        :type type_descriptor: Any
        :return: True if the descriptor is a primitive, Any, UUID or a Path class.
        :rtype: bool
        """
        if type_descriptor is Any or type_descriptor in self._PRIMITIVES or type_descriptor is UUID:
            return True
        return isinstance(type_descriptor, type) and issubclass(type_descriptor, PurePath)

    def resolve_shape(self, type_descriptor: Any, resolver) -> Shape:
        if type_descriptor is Any:
            return AnyShape()
        if type_descriptor in self._PRIMITIVES:
            return PrimitiveShape(type_descriptor)
        return StringConvertedShape(type_descriptor)
