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
"""Interception core types — MethodDescriptor and CallContext dataclasses."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class MethodDescriptor:
    """Static metadata for one method of an interface.

    Derived once when the proxy class for the interface is synthesized and
    shared by every call of that method.

    Attributes:
        interface: The interface class declaring the method.
        name: Method name.
        parameter_names: Names of the parameters (``self`` excluded), in
            declaration order.
        parameter_types: Resolved annotations matching ``parameter_names``;
            ``typing.Any`` where a parameter is unannotated.
        return_type: Resolved return annotation. ``NoneType`` for ``-> None``,
            ``typing.Any`` when unannotated.
        is_async: Whether the interface declares the method ``async def``.
        signature: Signature used to bind call arguments (``self`` excluded).
    """

    interface: type
    name: str
    parameter_names: tuple[str, ...]
    parameter_types: tuple[Any, ...]
    return_type: Any
    is_async: bool = False
    signature: inspect.Signature = field(
        default_factory=inspect.Signature, compare=False, repr=False
    )

    @property
    def qualified_name(self) -> str:
        return f"{self.interface.__qualname__}.{self.name}"

    @property
    def returns_value(self) -> bool:
        """False when the method is declared ``-> None``."""
        return self.return_type is not type(None)

    @property
    def named_parameters(self) -> tuple[str, ...]:
        """Parameter names excluding ``*args`` and ``**kwargs`` collectors."""
        return tuple(
            p.name for p in self.signature.parameters.values() if p.kind not in _VARIADIC
        )

    def bind(self, args: tuple, kwargs: dict[str, Any]) -> inspect.BoundArguments:
        """Bind call arguments to the signature, with defaults applied.

        Raises:
            TypeError: The arguments do not fit the signature.
        """
        bound = self.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return bound

    def flatten(self, bound: inspect.BoundArguments) -> tuple[tuple, dict[str, Any]]:
        """Split bound arguments into the ordered value list and keyword extras.

        Named parameters come first in declaration order, followed by the
        values collected by ``*args``. Only the ``**kwargs`` extras are
        returned as a mapping.
        """
        values: list[Any] = []
        extra_positional: tuple = ()
        extra_keyword: dict[str, Any] = {}
        for param in self.signature.parameters.values():
            value = bound.arguments[param.name]
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                extra_positional = tuple(value)
            elif param.kind is inspect.Parameter.VAR_KEYWORD:
                extra_keyword = dict(value)
            else:
                values.append(value)
        return (*values, *extra_positional), extra_keyword


@dataclass
class CallContext:
    """Everything an interceptor learns about one proxy method call.

    Created fresh for every call and discarded once the interceptor returns.

    Attributes:
        instance: The proxy the method was called on.
        method: Descriptor of the invoked method (the matching overload for
            overloaded methods).
        args: Argument values in declaration order with defaults applied;
            values collected by ``*args`` follow the named parameters.
        kwargs: Extras collected by a ``**kwargs`` parameter.
    """

    instance: Any
    method: MethodDescriptor
    args: tuple
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def method_name(self) -> str:
        return self.method.name

    @property
    def arguments(self) -> dict[str, Any]:
        """Values of the named parameters keyed by parameter name."""
        return dict(zip(self.method.named_parameters, self.args))

    def apply(self, func: Callable[..., Any]) -> Any:
        """Call *func* with the same arguments, in the shape of the original call.

        Positional parameters are passed positionally, keyword-only
        parameters and ``**kwargs`` extras by keyword.
        """
        named = self.arguments
        extra = self.args[len(named):]
        positional: list[Any] = []
        keyword: dict[str, Any] = {}
        for param in self.method.signature.parameters.values():
            if param.kind in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
            ):
                positional.append(named[param.name])
            elif param.kind is inspect.Parameter.VAR_POSITIONAL:
                positional.extend(extra)
            elif param.kind is inspect.Parameter.KEYWORD_ONLY:
                keyword[param.name] = named[param.name]
        keyword.update(self.kwargs)
        return func(*positional, **keyword)
