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

from typing import Any, Generic, Optional, TypeVar, Union

from .engine import JsonEngine
from .length_limit import encode_with_length_limit
from .shapes import Shape

__all__ = ["JsonCodec"]

T = TypeVar("T")


class JsonCodec(Generic[T]):
    """
    Converts values of one type to JSON text and back.

    A codec is bound to a resolved shape and to the pretty or compact
    printer of its engine. It holds no mutable state and can be shared
    between threads; :meth:`without_pretty` and :meth:`with_pretty` return
    new codecs instead of changing this one.

    :param shape: The shape of the values this codec converts.
    :type shape: Shape
    :param engine: The JSON engine to encode and parse with.
    :type engine: JsonEngine
    :param pretty: Whether output is indented.
    :type pretty: bool
    """

    __slots__ = ("_shape", "_engine", "_pretty")

    def __init__(self, shape: Shape, engine: JsonEngine, pretty: bool = True):
        self._shape = shape
        self._engine = engine
        self._pretty = pretty

    @property
    def shape(self) -> Shape:
        """
        :return: The shape of the values this codec converts.
        :rtype: Shape
        """
        return self._shape

    @property
    def engine(self) -> JsonEngine:
        """
        :return: The engine this codec encodes and parses with.
        :rtype: JsonEngine
        """
        return self._engine

    @property
    def pretty(self) -> bool:
        """
        :return: True if output is indented.
        :rtype: bool
        """
        return self._pretty

    def encode(self, value: T) -> str:
        """
        Encode a value to JSON text.

        :param value: The value to encode.
        :type value: T
        :return: The JSON text.
        :rtype: str
        :raises SerializationException: If the value does not match the codec's shape.
        """
        return self.encode_bytes(value).decode("utf-8")

    def encode_bytes(self, value: T) -> bytes:
        """
        Encode a value to UTF-8 JSON bytes.

        :param value: The value to encode.
        :type value: T
        :return: The JSON bytes.
        :rtype: bytes
        :raises SerializationException: If the value does not match the codec's shape.
        """
        return self._engine.encode(self._shape, value, self._pretty)

    def decode(self, data: Union[str, bytes]) -> T:
        """
        Decode JSON text to a value.

        Fields missing from the JSON keep the default of the target class and
        unknown fields are ignored.

        :param data: JSON as str or UTF-8 bytes.
        :type data: Union[str, bytes]
        :return: The decoded value.
        :rtype: T
        :raises DeserializationException: If the JSON is malformed or a node has the wrong type.
        """
        return self._engine.decode(self._shape, data)

    def to_json_with_length_limit(self, value: T, limit: int) -> Optional[str]:
        """
        Encode a value only if its UTF-8 encoding is at most ``limit`` bytes.

        :param value: The value to encode.
        :type value: T
        :param limit: The byte budget.
        :type limit: int
        :return: The same text :meth:`encode` returns, or None if it does not fit.
        :rtype: Optional[str]
        """
        encoded = encode_with_length_limit(self._engine, self._shape, value, limit, self._pretty)
        if encoded is None:
            return None
        return encoded.decode("utf-8")

    def without_pretty(self) -> "JsonCodec[T]":
        """
        :return: An equivalent codec that writes compact output.
        :rtype: JsonCodec
        """
        return JsonCodec(self._shape, self._engine, pretty=False)

    def with_pretty(self) -> "JsonCodec[T]":
        """
        :return: An equivalent codec that writes indented output.
        :rtype: JsonCodec
        """
        return JsonCodec(self._shape, self._engine, pretty=True)

    def __repr__(self) -> str:
        mode = "pretty" if self._pretty else "compact"
        return f"JsonCodec({self._shape.describe()}, {mode})"
