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
import threading
import types
from typing import (
    Annotated,
    Any,
    Callable,
    Dict,
    ForwardRef,
    List,
    Optional,
    Sequence,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ._interfaces import TypeHandler
from .class_handler import ClassHandler
from .collections_handler import CollectionHandler
from .dataclass_handler import DataclassHandler
from .datetime_handler import DateTimeHandler
from .decimal_handler import DecimalHandler
from .enum_handler import EnumHandler
from .exceptions import CodecConstructionException
from .pydantic_handler import PydanticHandler
from .shapes import FieldBinding, MappingShape, ObjectShape, SequenceShape, Shape, type_name
from .simple_types_handler import SimpleTypesHandler

__all__ = ["TypeResolver"]

logger = logging.getLogger(__name__)

_UNION_TYPES = (Union, getattr(types, "UnionType", Union))


class TypeResolver:
    """
    Resolves type descriptors to JSON shapes.

    Handlers are consulted in order and the first that accepts a descriptor
    resolves it. Resolved shapes are cached, so a type is introspected once
    no matter how many codecs use it.

    :param handlers: Type handlers in priority order; defaults to the built-in set.
    :type handlers: Optional[Sequence[TypeHandler]]
    """

    def __init__(self, handlers: Optional[Sequence[TypeHandler]] = None):
        self._handlers: List[TypeHandler] = list(handlers) if handlers is not None else self._setup_type_handlers()
        self._cache: Dict[Any, Shape] = {}
        self._in_progress: Dict[type, ObjectShape] = {}
        self._pending: List[Any] = []
        self._depth = 0
        self._lock = threading.RLock()

    def _setup_type_handlers(self) -> List[TypeHandler]:
        """
        Setup type handlers in priority order.
        """
        return [
            SimpleTypesHandler(),
            DateTimeHandler(),
            DecimalHandler(),
            EnumHandler(),
            CollectionHandler(),
            PydanticHandler(),
            DataclassHandler(),
            ClassHandler(),
        ]

    def resolve(self, type_descriptor: Any) -> Shape:
        """
        Resolve a type descriptor to its JSON shape.

        :param type_descriptor: A class, or a parameterized form such as
            ``list[Person]`` or ``dict[str, list[Person]]``.
        :type type_descriptor: Any
        :return: The resolved shape.
        :rtype: Shape
        :raises CodecConstructionException: If the type has no JSON shape.
        """
        type_descriptor = self._normalize(type_descriptor)
        with self._lock:
            shape = self._lookup(type_descriptor)
            if shape is not None:
                return shape

            outermost = self._depth == 0
            self._depth += 1
            try:
                shape = self._resolve_uncached(type_descriptor)
            except Exception:
                if outermost:
                    # nested shapes may point at an object shape that was never bound
                    for pending in self._pending:
                        self._cache.pop(pending, None)
                    self._pending.clear()
                raise
            finally:
                self._depth -= 1

            try:
                self._cache[type_descriptor] = shape
                self._pending.append(type_descriptor)
            except TypeError:
                pass
            if outermost:
                self._pending.clear()
            logger.debug("Resolved %s to %r", type_name(type_descriptor), shape)
            return shape

    def sequence_of(self, element: Shape, container_type: type = list) -> SequenceShape:
        """
        Build the array shape of an already resolved element shape.

        :param element: The element shape.
        :type element: Shape
        :param container_type: The collection type produced on decode.
        :type container_type: type
        :return: The sequence shape.
        :rtype: SequenceShape
        """
        return SequenceShape(element, container_type)

    def mapping_of(self, value: Shape) -> MappingShape:
        """
        Build the string-keyed object shape of an already resolved value shape.

        :param value: The value shape.
        :type value: Shape
        :return: The mapping shape.
        :rtype: MappingShape
        """
        return MappingShape(value)

    def resolve_object(
        self,
        cls: type,
        build_fields: Callable[[], List[FieldBinding]],
        factory: Optional[Callable[..., Any]] = None,
    ) -> ObjectShape:
        """
        Create the object shape of a class and bind its fields.

        The shape is visible to nested resolutions while its fields are
        built, which lets a class refer to itself.
        """
        shape = ObjectShape(cls, factory)
        self._in_progress[cls] = shape
        try:
            shape.bind(build_fields())
        finally:
            del self._in_progress[cls]
        return shape

    def type_hints(self, owner: Any) -> Dict[str, Any]:
        """
        Evaluate the annotations of a class or function.

        :param owner: The class or function.
        :return: The annotations with forward references resolved.
        :raises CodecConstructionException: If an annotation cannot be evaluated.
        """
        try:
            return get_type_hints(owner)
        except (NameError, TypeError) as e:
            raise CodecConstructionException(f"Cannot resolve annotations of {type_name(owner)}: {e}") from e

    def _lookup(self, type_descriptor: Any) -> Optional[Shape]:
        try:
            return self._cache.get(type_descriptor) or self._in_progress.get(type_descriptor)
        except TypeError:
            return None

    def _resolve_uncached(self, type_descriptor: Any) -> Shape:
        if isinstance(type_descriptor, (str, ForwardRef)):
            raise CodecConstructionException(f"Unresolved forward reference {type_descriptor!r}")
        for handler in self._handlers:
            if handler.can_handle_type(type_descriptor):
                return handler.resolve_shape(type_descriptor, self)
        raise CodecConstructionException(f"No JSON shape for type {type_name(type_descriptor)}")

    def _normalize(self, type_descriptor: Any) -> Any:
        origin = get_origin(type_descriptor)
        if origin is Annotated:
            return self._normalize(get_args(type_descriptor)[0])
        if origin in _UNION_TYPES:
            # every shape is nullable, so Optional[T] resolves as T
            members = [arg for arg in get_args(type_descriptor) if arg is not type(None)]
            if len(members) != 1:
                raise CodecConstructionException(
                    f"Cannot resolve {type_name(type_descriptor)}: unions of several types are ambiguous"
                )
            return self._normalize(members[0])
        return type_descriptor
