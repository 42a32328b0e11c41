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

import abc
from typing import TYPE_CHECKING, Any

from .shapes import Shape

if TYPE_CHECKING:
    from .type_resolution import TypeResolver

__all__ = ["TypeHandler"]


class TypeHandler(abc.ABC):
    """
    Base interface for all type-specific shape resolvers.

    Each type handler should implement:
    - can_handle_type: determine if the type descriptor belongs to this handler
    - resolve_shape: build the JSON shape of the type descriptor
    """

    @abc.abstractmethod
    def can_handle_type(self, type_descriptor: Any) -> bool:
        """
        Returns True if this handler can resolve the given type descriptor.

        :param type_descriptor: A class or a parameterized typing form.
        :type type_descriptor: Any
        :return: True if this handler can resolve the type.
        :rtype: bool
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def resolve_shape(self, type_descriptor: Any, resolver: "TypeResolver") -> Shape:
        """
        Resolve the type descriptor into a JSON shape.

        :param type_descriptor: The type descriptor to resolve.
        :type type_descriptor: Any
        :param resolver: The resolver to use for nested types.
        :type resolver: TypeResolver
        :return: The resolved shape.
        :rtype: Shape
        :raises CodecConstructionException: If the type has no JSON shape.
        """
        raise NotImplementedError()
