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

from typing import Optional

__all__ = [
    "JsonCodecException",
    "CodecConstructionException",
    "SerializationException",
    "CircularReferenceException",
    "DeserializationException",
]


class JsonCodecException(Exception):
    """Base class of all errors raised by json codecs"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CodecConstructionException(JsonCodecException):
    """Exception raised when a type cannot be resolved to a JSON shape"""

    pass


class SerializationException(JsonCodecException):
    """Exception raised during serialization"""

    pass


class CircularReferenceException(SerializationException):
    """Exception raised when circular references are detected"""

    pass


class DeserializationException(JsonCodecException):
    """
    Exception raised during deserialization.

    :param message: The error message.
    :type message: str
    :param path: The JSON path of the offending node, e.g. ``$.people[0].name``.
    :type path: Optional[str]
    """

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path
