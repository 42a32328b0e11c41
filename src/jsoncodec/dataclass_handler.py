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

from dataclasses import MISSING, fields, is_dataclass
from typing import Any, List

from ._interfaces import TypeHandler
from .shapes import FieldBinding, Shape

__all__ = ["DataclassHandler"]


class DataclassHandler(TypeHandler):
    """
    Type handler for dataclass types.

    Every public field is written. Fields declared with ``init=False`` are
    written but never read back, since the constructor cannot set them. The
    JSON name of a field can be overridden with ``metadata={"json_name": ...}``.
    """

    def can_handle_type(self, type_descriptor: Any) -> bool:
        """
        Check if this handler can resolve dataclass types.

        :param type_descriptor: The type descriptor to check.
        :type type_descriptor: Any
        :return: True if the descriptor is a dataclass type.
        :rtype: bool
        """
        return isinstance(type_descriptor, type) and is_dataclass(type_descriptor)

    def resolve_shape(self, type_descriptor: Any, resolver) -> Shape:
        hints = resolver.type_hints(type_descriptor)

        def build_fields() -> List[FieldBinding]:
            bindings = []
            for field in fields(type_descriptor):
                if field.name.startswith("_"):
                    continue
                required = field.init and field.default is MISSING and field.default_factory is MISSING
                bindings.append(
                    FieldBinding(
                        attribute=field.name,
                        json_name=field.metadata.get("json_name", field.name),
                        shape=resolver.resolve(hints[field.name]),
                        writable=field.init,
                        required=required,
                    )
                )
            return bindings

        return resolver.resolve_object(type_descriptor, build_fields)
