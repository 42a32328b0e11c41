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

from typing import Any, List

from pydantic import BaseModel

from ._interfaces import TypeHandler
from .exceptions import CodecConstructionException
from .shapes import FieldBinding, Shape

__all__ = ["PydanticHandler"]


class PydanticHandler(TypeHandler):
    """
    Type handler for Pydantic models.

    Fields are written under their alias when one is declared. Decoded values
    are already converted by their own shapes, so models are built with
    ``model_construct`` rather than validated a second time.
    """

    def can_handle_type(self, type_descriptor: Any) -> bool:
        """
        Check if this handler can resolve Pydantic models.

        :param type_descriptor: The type descriptor to check.
        :type type_descriptor: Any
        :return: True if the descriptor is a BaseModel subclass.
        :rtype: bool
        """
        return isinstance(type_descriptor, type) and issubclass(type_descriptor, BaseModel)

    def resolve_shape(self, type_descriptor: Any, resolver) -> Shape:
        if not getattr(type_descriptor, "__pydantic_complete__", True):
            try:
                type_descriptor.model_rebuild()
            except NameError as e:
                raise CodecConstructionException(
                    f"Cannot resolve fields of {type_descriptor.__qualname__}: {e}"
                ) from e

        def build_fields() -> List[FieldBinding]:
            bindings = []
            for name, info in type_descriptor.model_fields.items():
                if name.startswith("_"):
                    continue
                bindings.append(
                    FieldBinding(
                        attribute=name,
                        json_name=info.alias or name,
                        shape=resolver.resolve(info.annotation),
                        required=info.is_required(),
                    )
                )
            return bindings

        return resolver.resolve_object(type_descriptor, build_fields, factory=type_descriptor.model_construct)
