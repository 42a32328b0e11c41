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

import logging
from typing import Any, Dict, List, Optional

from .codec import JsonCodec
from .engine import JsonEngine
from .exceptions import CodecConstructionException
from .shapes import Shape, type_name
from .type_resolution import TypeResolver

__all__ = ["JsonCodecFactory", "json_codec", "list_json_codec", "map_json_codec"]

logger = logging.getLogger(__name__)


class JsonCodecFactory:
    """
    Builds codecs that share one engine and one type resolver.

    :param engine: The JSON engine; a default engine is created if omitted.
    :type engine: Optional[JsonEngine]
    :param resolver: The type resolver; a default resolver is created if omitted.
    :type resolver: Optional[TypeResolver]
    :param pretty: Whether built codecs indent their output.
    :type pretty: bool
    """

    def __init__(
        self,
        engine: Optional[JsonEngine] = None,
        resolver: Optional[TypeResolver] = None,
        pretty: bool = True,
    ):
        self.engine = engine or JsonEngine()
        self.resolver = resolver or TypeResolver()
        self.pretty = pretty

    def json_codec(self, type_descriptor: Any) -> JsonCodec:
        """
        Build a codec for a class or a parameterized type.

        :param type_descriptor: e.g. ``Person``, ``list[Person]`` or ``dict[str, list[Person]]``.
        :type type_descriptor: Any
        :return: The codec.
        :rtype: JsonCodec
        :raises CodecConstructionException: If the type has no JSON shape.
        """
        return self._codec(self.resolver.resolve(type_descriptor))

    def list_json_codec(self, element: Any) -> JsonCodec[List[Any]]:
        """
        Build a codec for lists of a type.

        :param element: The element type, or a codec for the element type.
        :type element: Any
        :return: The list codec.
        :rtype: JsonCodec
        """
        return self._codec(self.resolver.sequence_of(self._element_shape(element)))

    def map_json_codec(self, key_type: type, value: Any) -> JsonCodec[Dict[str, Any]]:
        """
        Build a codec for string-keyed dicts of a type.

        :param key_type: The key type; only ``str`` is supported.
        :type key_type: type
        :param value: The value type, or a codec for the value type.
        :type value: Any
        :return: The dict codec.
        :rtype: JsonCodec
        """
        if key_type is not str:
            raise CodecConstructionException(f"Mapping keys must be str, got {type_name(key_type)}")
        return self._codec(self.resolver.mapping_of(self._element_shape(value)))

    def pretty_print(self) -> "JsonCodecFactory":
        """
        :return: A factory sharing this engine and resolver that builds pretty codecs.
        :rtype: JsonCodecFactory
        """
        return JsonCodecFactory(self.engine, self.resolver, pretty=True)

    def without_pretty(self) -> "JsonCodecFactory":
        """
        :return: A factory sharing this engine and resolver that builds compact codecs.
        :rtype: JsonCodecFactory
        """
        return JsonCodecFactory(self.engine, self.resolver, pretty=False)

    def _element_shape(self, element: Any) -> Shape:
        if isinstance(element, JsonCodec):
            return element.shape
        return self.resolver.resolve(element)

    def _codec(self, shape: Shape) -> JsonCodec:
        logger.debug("Created codec for %s", shape.describe())
        return JsonCodec(shape, self.engine, self.pretty)


_default_factory = JsonCodecFactory()


def json_codec(type_descriptor: Any) -> JsonCodec:
    """Build a pretty-printing codec for a class or parameterized type."""
    return _default_factory.json_codec(type_descriptor)


def list_json_codec(element: Any) -> JsonCodec[List[Any]]:
    """Build a pretty-printing codec for lists of a type or of another codec's type."""
    return _default_factory.list_json_codec(element)


def map_json_codec(key_type: type, value: Any) -> JsonCodec[Dict[str, Any]]:
    """Build a pretty-printing codec for str-keyed dicts of a type or of another codec's type."""
    return _default_factory.map_json_codec(key_type, value)
