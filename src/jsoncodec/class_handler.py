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

import inspect
from typing import Any, ClassVar, List, get_origin

from ._interfaces import TypeHandler
from .exceptions import CodecConstructionException
from .shapes import FieldBinding, Shape

__all__ = ["ClassHandler"]


class ClassHandler(TypeHandler):
    """
    Type handler for plain classes.

    Annotated ``__init__`` parameters are passed to the constructor and are
    read back from attributes of the same name. Class-level annotations and
    properties with a setter are assigned on the new instance. Read-only
    properties with a return annotation are written but never read back.
    """

    def can_handle_type(self, type_descriptor: Any) -> bool:
        """
        Check if this handler can resolve plain classes.

        :param type_descriptor: The type descriptor to check.
        :type type_descriptor: Any
        :return: True if the descriptor is a user-defined class.
        :rtype: bool
        """
        return inspect.isclass(type_descriptor) and type_descriptor.__module__ != "builtins"

    def resolve_shape(self, type_descriptor: Any, resolver) -> Shape:
        cls = type_descriptor
        parameters = self._init_parameters(cls)
        init_hints = resolver.type_hints(cls.__init__) if parameters else {}
        class_hints = resolver.type_hints(cls)

        def build_fields() -> List[FieldBinding]:
            bindings = []
            for parameter in parameters:
                if parameter.name not in init_hints:
                    raise CodecConstructionException(
                        f"Parameter '{parameter.name}' of {cls.__qualname__}.__init__ has no type annotation"
                    )
                bindings.append(
                    FieldBinding(
                        attribute=parameter.name,
                        json_name=parameter.name,
                        shape=resolver.resolve(init_hints[parameter.name]),
                        required=parameter.default is inspect.Parameter.empty,
                    )
                )

            known = {parameter.name for parameter in parameters}
            for name, hint in class_hints.items():
                if name in known or name.startswith("_") or get_origin(hint) is ClassVar or hint is ClassVar:
                    continue
                if isinstance(inspect.getattr_static(cls, name, None), property):
                    continue
                known.add(name)
                bindings.append(FieldBinding(name, name, resolver.resolve(hint), via_constructor=False))

            for name, member in inspect.getmembers(cls, lambda obj: isinstance(obj, property)):
                if name in known or name.startswith("_"):
                    continue
                return_hint = resolver.type_hints(member.fget).get("return")
                if return_hint is None:
                    continue
                bindings.append(
                    FieldBinding(
                        attribute=name,
                        json_name=name,
                        shape=resolver.resolve(return_hint),
                        writable=member.fset is not None,
                        via_constructor=False,
                    )
                )

            if not bindings:
                raise CodecConstructionException(f"{cls.__qualname__} exposes no fields to serialize")
            return bindings

        return resolver.resolve_object(cls, build_fields)

    def _init_parameters(self, cls: type) -> List[inspect.Parameter]:
        if cls.__init__ is object.__init__:
            return []
        try:
            signature = inspect.signature(cls.__init__)
        except (TypeError, ValueError) as e:
            raise CodecConstructionException(f"Cannot inspect constructor of {cls.__qualname__}: {e}") from e

        parameters = []
        for parameter in list(signature.parameters.values())[1:]:
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                raise CodecConstructionException(
                    f"Parameter '{parameter.name}' of {cls.__qualname__}.__init__ is positional-only"
                )
            parameters.append(parameter)
        return parameters
