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

from ._interfaces import TypeHandler
from .class_handler import ClassHandler
from .codec import JsonCodec
from .collections_handler import CollectionHandler
from .dataclass_handler import DataclassHandler
from .datetime_handler import DateTimeHandler
from .decimal_handler import DecimalHandler
from .engine import JsonEngine, JsonPrinter
from .enum_handler import EnumHandler
from .exceptions import (
    CircularReferenceException,
    CodecConstructionException,
    DeserializationException,
    JsonCodecException,
    SerializationException,
)
from .factory import JsonCodecFactory, json_codec, list_json_codec, map_json_codec
from .length_limit import BoundedSink, encode_with_length_limit
from .pydantic_handler import PydanticHandler
from .simple_types_handler import SimpleTypesHandler
from .type_resolution import TypeResolver

__all__ = [
    "JsonCodec",
    "JsonCodecFactory",
    "json_codec",
    "list_json_codec",
    "map_json_codec",
    "JsonEngine",
    "JsonPrinter",
    "TypeResolver",
    "TypeHandler",
    "SimpleTypesHandler",
    "DateTimeHandler",
    "DecimalHandler",
    "EnumHandler",
    "CollectionHandler",
    "PydanticHandler",
    "DataclassHandler",
    "ClassHandler",
    "BoundedSink",
    "encode_with_length_limit",
    "JsonCodecException",
    "CodecConstructionException",
    "SerializationException",
    "CircularReferenceException",
    "DeserializationException",
]
