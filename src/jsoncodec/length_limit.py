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
from typing import Any, List, Optional

from .engine import JsonEngine
from .shapes import Shape

__all__ = ["LengthLimitExceeded", "BoundedSink", "encode_with_length_limit"]

logger = logging.getLogger(__name__)


class LengthLimitExceeded(Exception):
    """Raised by a BoundedSink when a write passes its limit"""

    def __init__(self, limit: int):
        super().__init__(f"Output exceeds {limit} bytes")
        self.limit = limit


class BoundedSink:
    """
    Collects encoded chunks while counting bytes.

    :param limit: The maximum number of bytes the sink accepts.
    :type limit: int
    """

    def __init__(self, limit: int):
        self.limit = limit
        self.size = 0
        self._chunks: List[bytes] = []

    def write(self, chunk: bytes) -> None:
        self.size += len(chunk)
        if self.size > self.limit:
            raise LengthLimitExceeded(self.limit)
        self._chunks.append(chunk)

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


def encode_with_length_limit(
    engine: JsonEngine, shape: Shape, value: Any, limit: int, pretty: bool = True
) -> Optional[bytes]:
    """
    Encode a value only if its UTF-8 JSON encoding is at most ``limit`` bytes.

    Encoding stops at the first chunk that crosses the limit, so values far
    over the limit are never fully written.

    :param engine: The engine to encode with.
    :type engine: JsonEngine
    :param shape: The shape of the value.
    :type shape: Shape
    :param value: The value to encode.
    :type value: Any
    :param limit: The byte budget.
    :type limit: int
    :param pretty: Whether to use the pretty printer.
    :type pretty: bool
    :return: The encoded JSON bytes, or None if they do not fit.
    :rtype: Optional[bytes]
    """
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")

    sink = BoundedSink(limit)
    try:
        for chunk in engine.iter_json_chunks(shape, value, pretty):
            sink.write(chunk)
    except LengthLimitExceeded:
        logger.debug("Encoding of %s stopped after %d bytes, limit is %d", shape.describe(), sink.size, limit)
        return None
    return sink.getvalue()
