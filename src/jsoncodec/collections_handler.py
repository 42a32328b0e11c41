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

import collections.abc
from typing import Any, get_args, get_origin

from ._interfaces import TypeHandler
from .exceptions import CodecConstructionException
from .shapes import Shape, type_name

__all__ = ["CollectionHandler"]

_SEQUENCE_CONTAINERS = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    tuple: tuple,
    set: set,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    frozenset: frozenset,
}

_MAPPING_CONTAINERS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


class CollectionHandler(TypeHandler):
    """
    Type handler for parameterized collections.

    ``list[T]``, ``tuple[T, ...]``, ``set[T]`` and friends become arrays of T;
    ``dict[str, T]`` and ``Mapping[str, T]`` become objects keyed by string.
    Bare collection classes are rejected because their element type is unknown.
    """

    def can_handle_type(self, type_descriptor: Any) -> bool:
        """
        Check if this handler can resolve collection types.

        :param type_descriptor: The type descriptor to check.
        :type type_descriptor: Any
        :return: True for sequence, set and mapping types, bare or parameterized.
        :rtype: bool
        """
        container = get_origin(type_descriptor) or type_descriptor
        try:
            return container in _SEQUENCE_CONTAINERS or container in _MAPPING_CONTAINERS
        except TypeError:
            return False

    def resolve_shape(self, type_descriptor: Any, resolver) -> Shape:
        container = get_origin(type_descriptor) or type_descriptor
        args = get_args(type_descriptor)
        if not args:
            raise CodecConstructionException(
                f"Cannot resolve bare {type_name(type_descriptor)}: the element type must be given, "
                f"e.g. list[Person] or dict[str, Person]"
            )

        if container in _MAPPING_CONTAINERS:
            key_type, value_type = args
            if key_type is not str:
                raise CodecConstructionException(
                    f"Cannot resolve {type_name(type_descriptor)}: mapping keys must be str, got {type_name(key_type)}"
                )
            return resolver.mapping_of(resolver.resolve(value_type))

        if container is tuple:
            if len(args) != 2 or args[1] is not Ellipsis:
                raise CodecConstructionException(
                    f"Cannot resolve {type_name(type_descriptor)}: only variable-length tuple[T, ...] is supported"
                )
        return resolver.sequence_of(resolver.resolve(args[0]), _SEQUENCE_CONTAINERS[container])
