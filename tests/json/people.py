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
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field


@dataclass
class Person:
    name: Optional[str] = None
    rocks: bool = False
    last_name: Optional[str] = None


@dataclass(frozen=True)
class ImmutablePerson:
    name: str
    rocks: bool
    not_writable: Optional[str] = field(default=None, init=False)


@dataclass
class Node:
    name: str
    children: List["Node"] = field(default_factory=list)


class Color(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Event:
    id: UUID
    at: datetime
    day: date
    amount: Decimal
    color: Color
    path: Path
    labels: FrozenSet[str]
    scores: Tuple[int, ...]
    attributes: Dict[str, Any]


class Account(BaseModel):
    account_id: int = Field(alias="accountId")
    owner: Optional[str] = None
    tags: List[str] = []


class Vehicle:
    def __init__(self, make: str, year: int = 2000):
        self.make = make
        self.year = year

    @property
    def label(self) -> str:
        return f"{self.make} {self.year}"

    def __eq__(self, other):
        return isinstance(other, Vehicle) and (self.make, self.year) == (other.make, other.year)


class BeanPerson:
    name: Optional[str] = None
    rocks: bool = False

    def __eq__(self, other):
        return isinstance(other, BeanPerson) and (self.name, self.rocks) == (other.name, other.rocks)


class SetterPerson:
    def __init__(self):
        self._name = None
        self._rocks = False

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value):
        self._name = value

    @property
    def rocks(self) -> bool:
        return self._rocks

    @rocks.setter
    def rocks(self, value):
        self._rocks = value

    @property
    def greeting(self) -> str:
        return f"hello {self._name}"

    def __eq__(self, other):
        return isinstance(other, SetterPerson) and (self.name, self.rocks) == (other.name, other.rocks)


def validate_person_json_codec(codec):
    expected = Person(name="dain", rocks=True)
    assert codec.decode(codec.encode(expected)) == expected

    expected = Person(name="dain", rocks=True, last_name="sundstrom")
    assert codec.decode(codec.encode(expected)) == expected

    # unknown fields are ignored, missing fields keep their defaults
    assert codec.decode('{"name": "dain", "unknown": [1, 2]}') == Person(name="dain")


def validate_person_list_json_codec(codec):
    expected = [
        Person(name="dain", rocks=True),
        Person(name="martin", rocks=True),
        Person(name="mark", rocks=True, last_name="twain"),
    ]
    assert codec.decode(codec.encode(expected)) == expected


def validate_person_map_json_codec(codec):
    expected = {
        "dain": Person(name="dain", rocks=True),
        "martin": Person(name="martin", rocks=True),
        "mark": Person(name="mark", rocks=True, last_name="twain"),
    }
    assert codec.decode(codec.encode(expected)) == expected


def validate_immutable_person_json_codec(codec):
    expected = ImmutablePerson("dain", True)
    assert codec.decode(codec.encode(expected)) == expected


def validate_immutable_person_list_json_codec(codec):
    expected = [ImmutablePerson("dain", True), ImmutablePerson("martin", False)]
    assert codec.decode(codec.encode(expected)) == expected


def validate_immutable_person_map_json_codec(codec):
    expected = {"dain": ImmutablePerson("dain", True), "martin": ImmutablePerson("martin", False)}
    assert codec.decode(codec.encode(expected)) == expected
