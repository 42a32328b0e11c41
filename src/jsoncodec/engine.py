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

from typing import Any, Iterator

import orjson

from .context import DecodeContext, SerializationState
from .exceptions import DeserializationException, SerializationException
from .shapes import Member, Shape, decode_value

__all__ = ["JsonPrinter", "JsonEngine"]

_INDENT = b"  "
_BRACKETS = {
    "object": (b"{", b"}"),
    "mapping": (b"{", b"}"),
    "array": (b"[", b"]"),
}


class JsonPrinter:
    """
    An orjson writer configured for pretty or compact output.

    Besides whole documents, the printer writes the structural pieces of a
    document one at a time, laid out exactly as orjson lays out the
    equivalent document.
    """

    def __init__(self, pretty: bool):
        self.pretty = pretty
        self._option = orjson.OPT_INDENT_2 if pretty else 0
        self._key_separator = b": " if pretty else b":"

    def dumps(self, obj: Any) -> bytes:
        """
        Encode a JSON-native object.

        :param obj: The object to encode.
        :type obj: Any
        :return: The encoded JSON bytes.
        :rtype: bytes
        """
        try:
            return orjson.dumps(obj, option=self._option)
        except (orjson.JSONEncodeError, TypeError) as e:
            raise SerializationException(f"JSON encoding failed: {e}") from e

    def leaf(self, obj: Any, depth: int) -> bytes:
        chunk = self.dumps(obj)
        if self.pretty and depth and b"\n" in chunk:
            # encoded strings never hold a raw newline
            chunk = chunk.replace(b"\n", b"\n" + _INDENT * depth)
        return chunk

    def key(self, name: str) -> bytes:
        return self.dumps(name) + self._key_separator

    def begin(self, container: str, depth: int) -> bytes:
        opening = _BRACKETS[container][0]
        if self.pretty:
            return opening + b"\n" + _INDENT * (depth + 1)
        return opening

    def separator(self, depth: int) -> bytes:
        if self.pretty:
            return b",\n" + _INDENT * (depth + 1)
        return b","

    def end(self, container: str, depth: int) -> bytes:
        closing = _BRACKETS[container][1]
        if self.pretty:
            return b"\n" + _INDENT * depth + closing
        return closing

    def empty(self, container: str) -> bytes:
        opening, closing = _BRACKETS[container]
        return opening + closing


class JsonEngine:
    """
    The JSON engine shared by codecs: one pretty and one compact printer
    with the same null handling, depth limit and parsing policy.

    :param include_null_fields: Write object fields whose value is None as ``null``.
    :param maximum_depth: Maximum nesting depth on encode and decode.
    :param strict_validation: Reject scalars of the wrong JSON type on decode
        instead of coercing them.
    """

    def __init__(
        self,
        include_null_fields: bool = False,
        maximum_depth: int = 100,
        strict_validation: bool = True,
    ):
        self.include_null_fields = include_null_fields
        self.maximum_depth = maximum_depth
        self.strict_validation = strict_validation
        self._pretty_printer = JsonPrinter(pretty=True)
        self._compact_printer = JsonPrinter(pretty=False)

    def printer(self, pretty: bool) -> JsonPrinter:
        return self._pretty_printer if pretty else self._compact_printer

    # Encoding
    def encode(self, shape: Shape, value: Any, pretty: bool) -> bytes:
        return self.printer(pretty).dumps(self.build_tree(shape, value))

    def build_tree(self, shape: Shape, value: Any) -> Any:
        """
        Convert a value to JSON-native lists, dicts and scalars.

        :param shape: The shape of the value.
        :param value: The value to convert.
        :return: The JSON-native tree.
        """
        return self._build(shape, value, SerializationState(maximum_depth=self.maximum_depth))

    def _build(self, shape: Shape, value: Any, state: SerializationState) -> Any:
        if value is None:
            return None
        if shape.container is None:
            return shape.to_json_value(value)

        state.validate_circular_reference(value)
        child_state = state.create_child_state(value)
        if shape.container == "array":
            return [self._build(member_shape, item, child_state) for _, member_shape, item in shape.members(value)]
        return {
            key: self._build(member_shape, item, child_state)
            for key, member_shape, item in self._visible_members(shape, value)
        }

    def iter_json_chunks(self, shape: Shape, value: Any, pretty: bool) -> Iterator[bytes]:
        """
        Encode a value incrementally.

        The concatenated chunks equal :meth:`encode` for the same arguments.

        :param shape: The shape of the value.
        :param value: The value to encode.
        :param pretty: Whether to use the pretty printer.
        :return: An iterator of encoded byte chunks.
        """
        state = SerializationState(maximum_depth=self.maximum_depth)
        return self._iter_chunks(shape, value, self.printer(pretty), state, 0)

    def _iter_chunks(
        self, shape: Shape, value: Any, printer: JsonPrinter, state: SerializationState, depth: int
    ) -> Iterator[bytes]:
        if value is None:
            yield b"null"
            return
        if shape.container is None:
            yield printer.leaf(shape.to_json_value(value), depth)
            return

        state.validate_circular_reference(value)
        child_state = state.create_child_state(value)
        container = shape.container
        first = True
        for key, member_shape, item in self._visible_members(shape, value):
            yield printer.begin(container, depth) if first else printer.separator(depth)
            first = False
            if key is not None:
                yield printer.key(key)
            yield from self._iter_chunks(member_shape, item, printer, child_state, depth + 1)
        yield printer.empty(container) if first else printer.end(container, depth)

    def _visible_members(self, shape: Shape, value: Any) -> Iterator[Member]:
        members = shape.members(value)
        if shape.container == "object" and not self.include_null_fields:
            return (member for member in members if member[2] is not None)
        return members

    # Decoding
    def loads(self, data: Any) -> Any:
        """
        Parse JSON text.

        :param data: JSON as str or UTF-8 bytes.
        :return: The parsed JSON-native tree.
        """
        if not isinstance(data, (str, bytes, bytearray, memoryview)):
            raise DeserializationException(f"Expected JSON text, got {type(data).__name__}")
        try:
            return orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise DeserializationException(f"Malformed JSON: {e}") from e

    def decode(self, shape: Shape, data: Any) -> Any:
        context = DecodeContext(strict=self.strict_validation, maximum_depth=self.maximum_depth)
        return decode_value(shape, self.loads(data), context)
