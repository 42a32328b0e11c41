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

import pytest

from jsoncodec import BoundedSink, JsonEngine, TypeResolver, encode_with_length_limit, json_codec, list_json_codec
from jsoncodec.length_limit import LengthLimitExceeded
from people import ImmutablePerson, Node, Person


def test_to_json_with_length_limit_simple():
    codec = json_codec(ImmutablePerson)
    person = ImmutablePerson("a" * 1000, False)

    # orjson separates keys with ": " rather than " : ", two bytes less than 1036 over the two fields
    assert codec.to_json_with_length_limit(person, 0) is None
    assert codec.to_json_with_length_limit(person, 1000) is None
    assert codec.to_json_with_length_limit(person, 1033) is None
    assert codec.to_json_with_length_limit(person, 1034) == codec.encode(person)


def test_to_json_with_length_limit_non_ascii():
    codec = json_codec(ImmutablePerson)
    person = ImmutablePerson("Ř" * 1000, False)

    # 1000 characters, two UTF-8 bytes each
    assert len(codec.encode(person)) == 1034
    assert codec.to_json_with_length_limit(person, 0) is None
    assert codec.to_json_with_length_limit(person, 1034) is None
    assert codec.to_json_with_length_limit(person, 2033) is None
    assert codec.to_json_with_length_limit(person, 2034) == codec.encode(person)


def test_to_json_with_length_limit_complex():
    codec = list_json_codec(json_codec(ImmutablePerson))
    people = [ImmutablePerson("a" * 1000, False)] * 10

    assert codec.to_json_with_length_limit(people, 0) is None
    assert codec.to_json_with_length_limit(people, 5000) is None
    assert codec.to_json_with_length_limit(people, 10441) is None
    assert codec.to_json_with_length_limit(people, 10442) == codec.encode(people)


limit_cases = [
    ImmutablePerson("a" * 1000, False),
    ImmutablePerson("Ř" * 1000, True),
    ImmutablePerson("\U0001f600" * 10, True),
    [ImmutablePerson("x\ny\"z", False), None, ImmutablePerson("", True)],
    {"first": ImmutablePerson("dain", True), "second": None, "Ř": ImmutablePerson("Ř", False)},
    [],
    {},
]


@pytest.mark.parametrize("pretty", [True, False])
@pytest.mark.parametrize("value", limit_cases)
def test_length_limit_boundary_is_exact(value, pretty):
    if isinstance(value, list):
        codec = list_json_codec(ImmutablePerson)
    elif isinstance(value, dict):
        codec = json_codec(dict[str, ImmutablePerson])
    else:
        codec = json_codec(ImmutablePerson)
    if not pretty:
        codec = codec.without_pretty()

    encoded = codec.encode(value)
    length = len(encoded.encode("utf-8"))

    assert codec.to_json_with_length_limit(value, length - 1) is None
    assert codec.to_json_with_length_limit(value, length) == encoded
    assert codec.to_json_with_length_limit(value, length + 100) == encoded


def test_length_limit_stops_encoding_early():
    consumed = []

    def people():
        for i in range(1000):
            consumed.append(i)
            yield ImmutablePerson("a" * 1000, False)

    codec = list_json_codec(ImmutablePerson)
    assert codec.to_json_with_length_limit(people(), 5000) is None
    assert len(consumed) < 10


def test_length_limit_rejects_negative_limit():
    with pytest.raises(ValueError):
        json_codec(Person).to_json_with_length_limit(Person(), -1)


def test_encode_with_length_limit_uses_engine_printers():
    engine = JsonEngine()
    shape = TypeResolver().resolve(Node)
    tree = Node("root", [Node("leaf")])

    compact = encode_with_length_limit(engine, shape, tree, 1000, pretty=False)
    assert compact == b'{"name":"root","children":[{"name":"leaf","children":[]}]}'
    assert encode_with_length_limit(engine, shape, tree, len(compact) - 1, pretty=False) is None


def test_bounded_sink():
    sink = BoundedSink(5)
    sink.write(b"abc")
    sink.write(b"de")
    assert sink.size == 5
    assert sink.getvalue() == b"abcde"

    with pytest.raises(LengthLimitExceeded):
        sink.write(b"f")
    assert sink.getvalue() == b"abcde"


def test_bounded_sink_with_zero_limit():
    sink = BoundedSink(0)
    sink.write(b"")
    with pytest.raises(LengthLimitExceeded):
        sink.write(b"{")
