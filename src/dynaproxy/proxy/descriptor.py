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
"""Interface description — reflects an interface class into method descriptors."""

from __future__ import annotations

import inspect
import typing
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from dynaproxy.interception.types import MethodDescriptor
from dynaproxy.kernel.exceptions import ConstructionError, ResolutionError

_DATA_FIELD = object()

# Dunders that construct the class or hook attribute access; never forwarded.
_CLASS_MACHINERY = frozenset(
    {
        "__init__",
        "__new__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__getattr__",
        "__getattribute__",
        "__setattr__",
        "__delattr__",
        "__del__",
    }
)

_MACHINERY_MODULES = frozenset({"abc", "typing", "typing_extensions", "_collections_abc"})


@dataclass(frozen=True)
class InterfaceDescriptor:
    """The forwardable method set of an interface.

    Attributes:
        identity: The interface class; proxy classes are cached under it.
        name: The interface's ``__name__``.
        methods: Method name to its descriptors, in declaration order.
            Overloaded methods carry one descriptor per ``@overload``.
    """

    identity: type
    name: str
    methods: dict[str, tuple[MethodDescriptor, ...]] = field(default_factory=dict, compare=False)

    @property
    def method_names(self) -> tuple[str, ...]:
        return tuple(self.methods)

    def descriptors(self) -> Iterator[MethodDescriptor]:
        for variants in self.methods.values():
            yield from variants


def describe_interface(interface: Any) -> InterfaceDescriptor:
    """Build the :class:`InterfaceDescriptor` of *interface*.

    Plain functions declared on the interface or its bases are forwarded
    when they are public, abstract, or dunder methods such as ``__call__``
    and ``__len__``. Constructors and attribute hooks stay as inherited,
    as do static and class methods.

    Raises:
        ConstructionError: *interface* is not a subclassable class or
            declares public members that are not methods.
        ResolutionError: An annotation of a method cannot be resolved.
    """
    if not isinstance(interface, type):
        raise ConstructionError(
            f"Cannot build a proxy for {interface!r}: interfaces must be classes",
            context={"interface": repr(interface)},
        )
    if getattr(interface, "__final__", False):
        raise ConstructionError(
            f"Cannot build a proxy for '{interface.__qualname__}': the class is final",
            context={"interface": interface.__qualname__},
        )

    methods: dict[str, tuple[MethodDescriptor, ...]] = {}
    abstract = frozenset(getattr(interface, "__abstractmethods__", ()))
    for name, member in _forwardable_members(interface, abstract).items():
        if isinstance(member, (staticmethod, classmethod)):
            continue
        if not inspect.isfunction(member):
            if _is_dunder(name) and name not in abstract:
                continue
            kind = "field" if member is _DATA_FIELD else type(member).__name__
            raise ConstructionError(
                f"Cannot build a proxy for '{interface.__qualname__}': "
                f"member '{name}' is a {kind}, interfaces may only declare methods",
                context={"interface": interface.__qualname__, "member": name},
            )
        variants = typing.get_overloads(member) or [member]
        is_async = inspect.iscoroutinefunction(member)
        methods[name] = tuple(_describe_method(interface, name, v, is_async) for v in variants)

    return InterfaceDescriptor(identity=interface, name=interface.__name__, methods=methods)


def _forwardable_members(interface: type, abstract: frozenset[str]) -> dict[str, Any]:
    """Class members a proxy forwards, across the MRO, most derived winning.

    Public names, abstract names and dunders declared outside the standard
    ABC and typing bases qualify; class machinery never does.
    """
    members: dict[str, Any] = {}
    for klass in reversed(interface.__mro__):
        if klass is object:
            continue
        stdlib_base = klass.__module__ in _MACHINERY_MODULES
        for name, value in vars(klass).items():
            if name in _CLASS_MACHINERY:
                continue
            if name in abstract or not name.startswith("_"):
                members[name] = value
            elif _is_dunder(name) and not stdlib_base:
                members[name] = value
        for name in inspect.get_annotations(klass):
            if not name.startswith("_"):
                members.setdefault(name, _DATA_FIELD)
    return members


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _describe_method(interface: type, name: str, func: Any, is_async: bool) -> MethodDescriptor:
    qualified = f"{interface.__qualname__}.{name}"
    try:
        hints = typing.get_type_hints(func, localns={interface.__name__: interface})
    except Exception as exc:
        raise ResolutionError(
            f"Cannot resolve the annotations of {qualified}: {exc}",
            context={"interface": interface.__qualname__, "method": name},
        ) from exc

    params = list(inspect.signature(func).parameters.values())
    if not params or params[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        raise ConstructionError(
            f"Cannot build a proxy for '{interface.__qualname__}': "
            f"{name}() does not take the instance as its first parameter",
            context={"interface": interface.__qualname__, "member": name},
        )
    params = params[1:]

    names = tuple(p.name for p in params)
    return MethodDescriptor(
        interface=interface,
        name=name,
        parameter_names=names,
        parameter_types=tuple(hints.get(n, Any) for n in names),
        return_type=hints.get("return", Any),
        is_async=is_async,
        signature=inspect.Signature(params),
    )
