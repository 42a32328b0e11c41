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
from typing import Annotated, Any, Dict, List, Optional, Sequence, Tuple, Union

import pytest

from jsoncodec import (
    CodecConstructionException,
    JsonCodecFactory,
    SimpleTypesHandler,
    TypeResolver,
    json_codec,
    map_json_codec,
)
from jsoncodec.shapes import AnyShape, MappingShape, ObjectShape, PrimitiveShape, SequenceShape
from people import Account, BeanPerson, ImmutablePerson, Node, Person, SetterPerson, Vehicle


@dataclass
class Unresolvable:
    value: "MissingType"  # noqa: F821


@dataclass
class DuplicateNames:
    first: str = field(default="", metadata={"json_name": "name"})
    name: str = ""


class Unannotated:
    def __init__(self, value):
        self.value = value


class Empty:
    pass


@dataclass
class Hidden:
    visible: str = "yes"
    _secret: str = "no"


@pytest.mark.parametrize(
    "type_descriptor",
    [
        list,
        dict,
        List,
        Dict[int, Person],
        Union[int, str],
        Tuple[int, str],
        object,
        Unresolvable,
        DuplicateNames,
        Unannotated,
        Empty,
        "Person",
    ],
)
def test_unresolvable_types_fail_at_construction(type_descriptor):
    with pytest.raises(CodecConstructionException):
        json_codec(type_descriptor)


def test_map_codec_requires_string_keys():
    with pytest.raises(CodecConstructionException):
        map_json_codec(int, Person)


def test_resolved_shapes_are_cached():
    resolver = TypeResolver()
    assert resolver.resolve(Person) is resolver.resolve(Person)
    assert resolver.resolve(Optional[Person]) is resolver.resolve(Person)
    assert resolver.resolve(Annotated[Person, "doc"]) is resolver.resolve(Person)


def test_object_shape_fields():
    shape = TypeResolver().resolve(ImmutablePerson)

    assert isinstance(shape, ObjectShape)
    assert [(f.json_name, f.writable, f.required) for f in shape.fields] == [
        ("name", True, True),
        ("rocks", True, True),
        ("not_writable", False, False),
    ]
    assert isinstance(shape.fields[0].shape, PrimitiveShape)


def test_private_fields_are_not_visible():
    codec = json_codec(Hidden).without_pretty()
    assert codec.encode(Hidden()) == '{"visible":"yes"}'


def test_pydantic_and_plain_class_shapes():
    resolver = TypeResolver()
    assert [f.json_name for f in resolver.resolve(Account).fields] == ["accountId", "owner", "tags"]
    assert [(f.json_name, f.writable) for f in resolver.resolve(Vehicle).fields] == [
        ("make", True),
        ("year", True),
        ("label", False),
    ]


def test_settable_class_shapes():
    resolver = TypeResolver()
    assert [(f.json_name, f.writable, f.via_constructor) for f in resolver.resolve(BeanPerson).fields] == [
        ("name", True, False),
        ("rocks", True, False),
    ]
    assert [(f.json_name, f.writable, f.via_constructor) for f in resolver.resolve(SetterPerson).fields] == [
        ("greeting", False, False),
        ("name", True, False),
        ("rocks", True, False),
    ]


def test_composite_shapes():
    resolver = TypeResolver()

    shape = resolver.resolve(Dict[str, List[Person]])
    assert isinstance(shape, MappingShape)
    assert isinstance(shape.value, SequenceShape)
    assert shape.value.element is resolver.resolve(Person)
    assert shape.describe() == "dict[str, list[Person]]"

    assert resolver.resolve(Sequence[int]).container_type is list
    assert resolver.resolve(Tuple[int, ...]).container_type is tuple
    assert isinstance(resolver.resolve(Dict[str, Any]).value, AnyShape)


def test_self_referencing_class():
    codec = json_codec(Node)
    shape = codec.shape
    assert shape.fields[1].shape.element is shape

    tree = Node("root", [Node("left"), Node("right", [Node("leaf")])])
    assert codec.decode(codec.encode(tree)) == tree


def test_custom_handlers():
    resolver = TypeResolver(handlers=[SimpleTypesHandler()])
    factory = JsonCodecFactory(resolver=resolver, pretty=False)

    assert factory.json_codec(int).encode(5) == "5"
    with pytest.raises(CodecConstructionException):
        factory.json_codec(Person)


def test_factory_pretty_setting():
    factory = JsonCodecFactory(pretty=False)
    assert not factory.json_codec(Person).pretty
    assert factory.pretty_print().list_json_codec(Person).pretty
    assert not factory.pretty_print().without_pretty().map_json_codec(str, Person).pretty
