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

from datetime import date, datetime, time
from typing import Any

from ._interfaces import TypeHandler
from .shapes import Shape, StringConvertedShape

__all__ = ["DateTimeHandler"]


def format_datetime(value: datetime) -> str:
    iso_string = value.isoformat()
    if value.tzinfo is not None and value.utcoffset().total_seconds() == 0:
        # Replace +00:00 with Z for UTC
        iso_string = iso_string.replace("+00:00", "Z")
    return iso_string


def parse_datetime(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


class DateTimeHandler(TypeHandler):
    """
    Type handler for datetime, date, and time types.

    Values are written as ISO 8601 strings; aware UTC datetimes use the Z suffix.
    """

    def can_handle_type(self, type_descriptor: Any) -> bool:
        """
        Check if this handler can resolve datetime-related types.

        :param type_descriptor: The type descriptor to check.
        :type type_descriptor: Any
        :return: True if the descriptor is datetime, date, or time.
        :rtype: bool
        """
        return type_descriptor in (datetime, date, time)

    def resolve_shape(self, type_descriptor: Any, resolver) -> Shape:
        if type_descriptor is datetime:
            return StringConvertedShape(datetime, format_datetime, parse_datetime)
        return StringConvertedShape(type_descriptor, type_descriptor.isoformat, type_descriptor.fromisoformat)
