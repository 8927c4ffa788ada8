# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Runtime matching of values against resolved annotations.

Used to pick the overload a call binds to and to check interceptor
results against a method's declared return type. Annotations that cannot
be checked at runtime match every value.
"""

from __future__ import annotations

import inspect
import types
import typing
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from dynaproxy.interception.types import MethodDescriptor

# PEP 484 numeric tower: an int is acceptable where a float is declared.
_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


def matches_type(value: Any, annotation: Any) -> bool:
    """Return True if *value* satisfies *annotation*."""
    if annotation is Any or annotation is object:
        return True
    if annotation is None or annotation is type(None):
        return value is None

    if isinstance(annotation, typing.TypeVar):
        if annotation.__constraints__:
            return any(matches_type(value, c) for c in annotation.__constraints__)
        if annotation.__bound__ is not None:
            return matches_type(value, annotation.__bound__)
        return True

    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return matches_type(value, supertype)

    origin = get_origin(annotation)
    if origin is Annotated:
        return matches_type(value, get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return any(matches_type(value, arg) for arg in get_args(annotation))
    if origin is Literal:
        return value in get_args(annotation)
    if origin is not None:
        annotation = origin

    if not isinstance(annotation, type):
        return True
    if isinstance(value, _PROMOTIONS.get(annotation, ())):
        return True
    try:
        return isinstance(value, annotation)
    except TypeError:
        # Protocols without @runtime_checkable.
        return True


def accepts(method: MethodDescriptor, bound: inspect.BoundArguments) -> bool:
    """Return True if every bound value matches its parameter's annotation.

    Values collected by ``*args`` and ``**kwargs`` are checked one by one
    against the collector's annotation.
    """
    for param, annotation in zip(method.signature.parameters.values(), method.parameter_types):
        value = bound.arguments[param.name]
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            ok = all(matches_type(v, annotation) for v in value)
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            ok = all(matches_type(v, annotation) for v in value.values())
        else:
            ok = matches_type(value, annotation)
        if not ok:
            return False
    return True
