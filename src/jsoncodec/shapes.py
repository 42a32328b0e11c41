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
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Tuple

from .context import DecodeContext
from .exceptions import CodecConstructionException, SerializationException

__all__ = [
    "Shape",
    "FieldBinding",
    "ObjectShape",
    "SequenceShape",
    "MappingShape",
    "PrimitiveShape",
    "StringConvertedShape",
    "EnumShape",
    "AnyShape",
    "decode_value",
    "type_name",
]

Member = Tuple[Optional[str], "Shape", Any]


def type_name(type_descriptor: Any) -> str:
    if isinstance(type_descriptor, type):
        return type_descriptor.__qualname__
    return repr(type_descriptor).replace("typing.", "")


def json_type_name(data: Any) -> str:
    if isinstance(data, dict):
        return "object"
    if isinstance(data, list):
        return "array"
    if isinstance(data, str):
        return "string"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    return type(data).__name__


class Shape(abc.ABC):
    """
    The resolved JSON shape of a Python type.

    Containers (``container`` is ``"object"``, ``"mapping"`` or ``"array"``)
    are written member by member through :meth:`members`; leaves are
    converted to a JSON-native value with :meth:`to_json_value`. Every shape
    accepts ``None``, which is written as ``null``.
    """

    container: Optional[str] = None

    def members(self, value: Any) -> Iterator[Member]:
        """
        Iterate over the members of a container value.

        :param value: The non-null value to walk.
        :return: ``(key, shape, member_value)`` triples; ``key`` is None for arrays.
        """
        raise SerializationException(f"{self.describe()} is not a container shape")

    def to_json_value(self, value: Any) -> Any:
        """
        Convert a non-null leaf value to its JSON-native form.

        :param value: The value to convert.
        :return: A str, int, float, bool or JSON-native collection.
        """
        raise SerializationException(f"{self.describe()} is not a leaf shape")

    @abc.abstractmethod
    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        """
        Bind a non-null parsed JSON node to this shape.

        :param data: The parsed JSON node.
        :param context: The position and parsing policy of the node.
        :raises DeserializationException: If the node has the wrong JSON type.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def describe(self) -> str:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


def decode_value(shape: Shape, data: Any, context: DecodeContext) -> Any:
    if data is None:
        return None
    return shape.from_json_value(data, context)


@dataclass(frozen=True)
class FieldBinding:
    """
    A readable attribute of a class and how it appears in JSON.

    Writable bindings are passed to the constructor when ``via_constructor``
    is set and assigned with ``setattr`` on the new instance otherwise.
    """

    attribute: str
    json_name: str
    shape: Shape
    writable: bool = True
    required: bool = False
    via_constructor: bool = True


class ObjectShape(Shape):
    """
    A class with named fields, written as a JSON object.

    The shape is created before its fields are resolved so that
    self-referencing classes can point back to it; :meth:`bind` is called
    exactly once by the resolver.
    """

    container = "object"

    def __init__(self, cls: type, factory: Optional[Callable[..., Any]] = None):
        self.cls = cls
        self._factory = factory or cls
        self._fields: Tuple[FieldBinding, ...] = ()
        self._bound = False

    @property
    def fields(self) -> Tuple[FieldBinding, ...]:
        return self._fields

    def bind(self, fields: Sequence[FieldBinding]) -> None:
        if self._bound:
            raise CodecConstructionException(f"Fields of {self.describe()} are already bound")
        seen: Dict[str, str] = {}
        for binding in fields:
            if binding.json_name in seen:
                raise CodecConstructionException(
                    f"{self.describe()}: attributes '{seen[binding.json_name]}' and '{binding.attribute}' "
                    f"both map to JSON field '{binding.json_name}'"
                )
            seen[binding.json_name] = binding.attribute
        self._fields = tuple(fields)
        self._bound = True

    def members(self, value: Any) -> Iterator[Member]:
        if not isinstance(value, self.cls):
            raise SerializationException(f"Expected {self.describe()}, got {type(value).__name__}")
        for binding in self._fields:
            try:
                field_value = getattr(value, binding.attribute)
            except AttributeError as e:
                raise SerializationException(
                    f"Field '{binding.attribute}' of {self.describe()} is not readable: {e}"
                ) from e
            yield binding.json_name, binding.shape, field_value

    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        if not isinstance(data, dict):
            raise context.error(f"Expected JSON object for {self.describe()}, got {json_type_name(data)}")
        kwargs = {}
        assignments = {}
        for binding in self._fields:
            if not binding.writable:
                continue
            if binding.json_name in data:
                child = context.child(binding.json_name)
                value = decode_value(binding.shape, data[binding.json_name], child)
                if binding.via_constructor:
                    kwargs[binding.attribute] = value
                else:
                    assignments[binding.attribute] = value
            elif binding.required and binding.via_constructor:
                kwargs[binding.attribute] = None
        try:
            instance = self._factory(**kwargs)
        except (TypeError, ValueError) as e:
            raise context.error(f"Cannot construct {self.describe()}: {e}") from e

        for attribute, value in assignments.items():
            try:
                setattr(instance, attribute, value)
            except (AttributeError, TypeError, ValueError) as e:
                raise context.child(attribute).error(f"Cannot set {self.describe()}.{attribute}: {e}") from e
        return instance

    def describe(self) -> str:
        return self.cls.__qualname__


class SequenceShape(Shape):
    """An ordered collection of one element shape, written as a JSON array."""

    container = "array"

    def __init__(self, element: Shape, container_type: type = list):
        self.element = element
        self.container_type = container_type

    def members(self, value: Any) -> Iterator[Member]:
        if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
            raise SerializationException(f"Expected {self.describe()}, got {type(value).__name__}")
        for item in value:
            yield None, self.element, item

    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        if not isinstance(data, list):
            raise context.error(f"Expected JSON array for {self.describe()}, got {json_type_name(data)}")
        items = [decode_value(self.element, item, context.child(index)) for index, item in enumerate(data)]
        if self.container_type is list:
            return items
        try:
            return self.container_type(items)
        except TypeError as e:
            raise context.error(f"Cannot construct {self.describe()}: {e}") from e

    def describe(self) -> str:
        return f"{self.container_type.__name__}[{self.element.describe()}]"


class MappingShape(Shape):
    """A string-keyed mapping of one value shape, written as a JSON object."""

    container = "mapping"

    def __init__(self, value: Shape):
        self.value = value

    def members(self, value: Any) -> Iterator[Member]:
        if not isinstance(value, Mapping):
            raise SerializationException(f"Expected {self.describe()}, got {type(value).__name__}")
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationException(f"Mapping key must be string, got {type(key).__name__}")
            yield key, self.value, item

    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        if not isinstance(data, dict):
            raise context.error(f"Expected JSON object for {self.describe()}, got {json_type_name(data)}")
        return {key: decode_value(self.value, item, context.child(key)) for key, item in data.items()}

    def describe(self) -> str:
        return f"dict[str, {self.value.describe()}]"


class PrimitiveShape(Shape):
    """str, int, float or bool, written as the matching JSON scalar."""

    _ACCEPTED = {
        str: (str,),
        int: (int,),
        float: (int, float),
        bool: (bool,),
    }

    def __init__(self, py_type: type):
        if py_type not in self._ACCEPTED:
            raise CodecConstructionException(f"{py_type.__qualname__} is not a JSON primitive")
        self.py_type = py_type

    def _accepts(self, value: Any) -> bool:
        if isinstance(value, bool) and self.py_type is not bool:
            return False
        return isinstance(value, self._ACCEPTED[self.py_type])

    def to_json_value(self, value: Any) -> Any:
        if not self._accepts(value):
            raise SerializationException(f"Expected {self.describe()}, got {type(value).__name__}")
        return value

    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        if self._accepts(data):
            return float(data) if self.py_type is float else data
        if context.strict or isinstance(data, (dict, list)):
            raise context.error(f"Expected {self.describe()}, got JSON {json_type_name(data)}")
        return self._coerce(data, context)

    def _coerce(self, data: Any, context: DecodeContext) -> Any:
        if self.py_type is bool:
            if isinstance(data, str) and data.lower() in ("true", "false"):
                return data.lower() == "true"
            if isinstance(data, (int, float)) and data in (0, 1):
                return bool(data)
            raise context.error(f"Cannot coerce {data!r} to bool")
        try:
            return self.py_type(data)
        except (TypeError, ValueError) as e:
            raise context.error(f"Cannot coerce {data!r} to {self.describe()}") from e

    def describe(self) -> str:
        return self.py_type.__name__


class StringConvertedShape(Shape):
    """A value type written as a JSON string, such as UUID, Decimal or datetime."""

    def __init__(
        self,
        py_type: type,
        to_string: Callable[[Any], str] = str,
        from_string: Optional[Callable[[str], Any]] = None,
    ):
        self.py_type = py_type
        self._to_string = to_string
        self._from_string = from_string or py_type

    def to_json_value(self, value: Any) -> Any:
        if not isinstance(value, self.py_type):
            raise SerializationException(f"Expected {self.describe()}, got {type(value).__name__}")
        return self._to_string(value)

    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        if not isinstance(data, str):
            raise context.error(f"Expected JSON string for {self.describe()}, got {json_type_name(data)}")
        try:
            return self._from_string(data)
        except (ArithmeticError, ValueError) as e:
            raise context.error(f"Invalid {self.describe()} {data!r}: {e}") from e

    def describe(self) -> str:
        return self.py_type.__qualname__


class EnumShape(Shape):
    """An Enum, written as the value of its member."""

    def __init__(self, enum_type: type):
        self.enum_type = enum_type

    def to_json_value(self, value: Any) -> Any:
        if not isinstance(value, self.enum_type):
            raise SerializationException(f"Expected {self.describe()}, got {type(value).__name__}")
        return value.value

    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        try:
            return self.enum_type(data)
        except (TypeError, ValueError) as e:
            raise context.error(f"{data!r} is not a valid {self.describe()}") from e

    def describe(self) -> str:
        return self.enum_type.__qualname__


class AnyShape(Shape):
    """Untyped JSON, passed through as parsed."""

    def to_json_value(self, value: Any) -> Any:
        return value

    def from_json_value(self, data: Any, context: DecodeContext) -> Any:
        return data

    def describe(self) -> str:
        return "Any"
