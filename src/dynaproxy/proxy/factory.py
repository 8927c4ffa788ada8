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
"""ProxyFactory — synthesizes interface implementations that forward to one interceptor."""

from __future__ import annotations

import inspect
from typing import Any, TypeVar, cast

import structlog

from dynaproxy.core.config import Config
from dynaproxy.interception.port import Interceptor
from dynaproxy.interception.types import CallContext, MethodDescriptor
from dynaproxy.kernel.exceptions import (
    ConfigurationError,
    ConstructionError,
    ResolutionError,
    ReturnTypeError,
)
from dynaproxy.logging import configure_logging
from dynaproxy.proxy.cache import ProxyTypeCache
from dynaproxy.proxy.descriptor import InterfaceDescriptor, describe_interface
from dynaproxy.proxy.properties import ProxyProperties
from dynaproxy.proxy.typecheck import accepts, matches_type

T = TypeVar("T")

logger = structlog.get_logger("dynaproxy.proxy")

SYNTHESIZED_MODULE = "dynaproxy.synthesized"

_INTERCEPTOR_ATTR = "_dynaproxy_interceptor"
_INTERFACE_ATTR = "__dynaproxy_interface__"


class ProxyFactory:
    """Builds objects implementing arbitrary interfaces by forwarding every call.

    Each public method of a requested interface is implemented by a
    forwarder that packs the call into a :class:`CallContext`, hands it to
    the factory's interceptor and returns the interceptor's result. The
    proxy class of an interface is synthesized once per factory and reused.

    Usage::

        factory = ProxyFactory(EchoInterceptor())
        echo = factory.create_proxy(ITestInterface)
        echo.echo("Hello")  # -> "Hello"

    Args:
        interceptor: Handler for every proxy call. A class is instantiated
            without arguments.
        naming_hint: Label of the synthesis unit, used as the qualname
            prefix of synthesized classes. No behavioural effect.
        properties: Naming and return-conversion settings.

    Raises:
        ConfigurationError: *interceptor* is missing or has no callable
            ``intercept``.
    """

    def __init__(
        self,
        interceptor: Interceptor | type[Interceptor] | None,
        *,
        naming_hint: str | None = None,
        properties: ProxyProperties | None = None,
    ) -> None:
        if interceptor is None:
            raise ConfigurationError("ProxyFactory requires an interceptor")
        if isinstance(interceptor, type):
            try:
                interceptor = interceptor()
            except TypeError as exc:
                raise ConfigurationError(
                    f"Interceptor class '{interceptor.__qualname__}' cannot be instantiated without arguments",
                    context={"interceptor": interceptor.__qualname__},
                ) from exc
        if not isinstance(interceptor, Interceptor) or not callable(interceptor.intercept):
            raise ConfigurationError(
                f"{type(interceptor).__qualname__} does not implement intercept(context)",
                context={"interceptor": type(interceptor).__qualname__},
            )

        self._interceptor: Interceptor = interceptor
        self._properties = properties or ProxyProperties()
        self._naming_hint = naming_hint or self._properties.naming_hint or type(interceptor).__name__
        self._cache = ProxyTypeCache()

    @classmethod
    def from_config(
        cls,
        interceptor: Interceptor | type[Interceptor] | None,
        config: Config,
    ) -> ProxyFactory:
        """Create a factory with settings bound from the ``dynaproxy.proxy`` section.

        When *config* carries a ``dynaproxy.logging`` section, the library's
        loggers are configured from it first.
        """
        if config.get_section("dynaproxy.logging"):
            configure_logging(config)
        return cls(interceptor, properties=config.bind(ProxyProperties))

    @property
    def interceptor(self) -> Interceptor:
        return self._interceptor

    @property
    def naming_hint(self) -> str:
        return self._naming_hint

    @property
    def properties(self) -> ProxyProperties:
        return self._properties

    @property
    def cached_interfaces(self) -> list[type]:
        """Interfaces with a synthesized proxy class, in synthesis order."""
        return self._cache.interfaces()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_proxy(self, interface: type[T]) -> T:
        """Return a new proxy implementing *interface*.

        Raises:
            ConstructionError: *interface* is malformed or cannot be
                subclassed.
            ResolutionError: A method annotation cannot be resolved.
        """
        proxy_type = self.proxy_type(interface)
        try:
            instance = proxy_type(self._interceptor)
        except TypeError as exc:
            raise ConstructionError(
                f"Cannot instantiate proxy class '{proxy_type.__qualname__}': {exc}",
                context={"interface": interface.__qualname__},
            ) from exc
        logger.debug("proxy_created", interface=interface.__qualname__, proxy_type=proxy_type.__qualname__)
        return cast(T, instance)

    def proxy_type(self, interface: type) -> type:
        """Return the proxy class for *interface*, synthesizing it on first use."""
        if not isinstance(interface, type):
            raise ConstructionError(
                f"Cannot build a proxy for {interface!r}: interfaces must be classes",
                context={"interface": repr(interface)},
            )
        return self._cache.get_or_synthesize(interface, self._synthesize)

    def describe(self, interface: type) -> InterfaceDescriptor:
        """Return the method descriptors a proxy of *interface* forwards."""
        cached = self._cache.get(interface) if isinstance(interface, type) else None
        if cached is not None:
            return getattr(cached, _INTERFACE_ATTR)
        return describe_interface(interface)

    def proxy_type_name(self, interface: type) -> str:
        """Deterministic class name for the proxy of *interface*.

        ``ITestInterface`` -> ``TestInterfaceProxy``, ``Greeter`` -> ``GreeterProxy``
        with the default marker and suffix.
        """
        name = interface.__name__
        marker = self._properties.interface_marker
        if marker and name.startswith(marker) and name[len(marker):][:1].isupper():
            name = name[len(marker):]
        return f"{name}{self._properties.type_suffix}"

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def _synthesize(self, interface: type) -> type:
        descriptor = describe_interface(interface)
        name = self.proxy_type_name(interface)
        qualname = f"{self._naming_hint}.{name}"

        namespace: dict[str, Any] = {
            "__module__": SYNTHESIZED_MODULE,
            "__qualname__": qualname,
            "__doc__": f"Proxy of {interface.__qualname__} forwarding to {type(self._interceptor).__name__}.",
            "__init__": _proxy_init,
            "__repr__": _proxy_repr,
            _INTERFACE_ATTR: descriptor,
        }
        for method_name, variants in descriptor.methods.items():
            namespace[method_name] = self._make_forwarder(variants, qualname)

        try:
            proxy_type = type(interface)(name, (interface,), namespace)
        except TypeError as exc:
            raise ConstructionError(
                f"Cannot subclass '{interface.__qualname__}': {exc}",
                context={"interface": interface.__qualname__},
            ) from exc

        if inspect.isabstract(proxy_type):
            missing = sorted(getattr(proxy_type, "__abstractmethods__", ()))
            raise ConstructionError(
                f"Proxy of '{interface.__qualname__}' leaves abstract members unimplemented: {missing}",
                context={"interface": interface.__qualname__, "members": missing},
            )

        logger.info(
            "proxy_type_synthesized",
            interface=interface.__qualname__,
            proxy_type=qualname,
            methods=len(descriptor.methods),
        )
        return proxy_type

    def _make_forwarder(self, variants: tuple[MethodDescriptor, ...], owner: str) -> Any:
        first = variants[0]
        strict = self._properties.strict_returns

        def dispatch(proxy: Any, args: tuple, kwargs: dict[str, Any]) -> tuple[MethodDescriptor, Any]:
            method, bound = _select_variant(variants, args, kwargs)
            values, extras = method.flatten(bound)
            context = CallContext(instance=proxy, method=method, args=values, kwargs=extras)
            return method, getattr(proxy, _INTERCEPTOR_ATTR).intercept(context)

        if first.is_async:

            async def forwarder(self: Any, *args: Any, **kwargs: Any) -> Any:
                method, result = dispatch(self, args, kwargs)
                if inspect.isawaitable(result):
                    result = await result
                return _convert_result(method, result, strict)

        else:

            def forwarder(self: Any, *args: Any, **kwargs: Any) -> Any:  # type: ignore[misc]
                method, result = dispatch(self, args, kwargs)
                return _convert_result(method, result, strict)

        forwarder.__name__ = first.name
        forwarder.__qualname__ = f"{owner}.{first.name}"
        declared = inspect.getattr_static(first.interface, first.name, None)
        forwarder.__doc__ = getattr(declared, "__doc__", None)
        if len(variants) > 1 and inspect.isfunction(declared):
            # Overloads: report the implementation, which accepts every variant.
            forwarder.__signature__ = inspect.signature(declared)  # type: ignore[attr-defined]
        else:
            forwarder.__signature__ = _public_signature(first)  # type: ignore[attr-defined]
        return forwarder


def is_proxy(obj: Any) -> bool:
    """Return True if *obj* was created by a :class:`ProxyFactory`."""
    return isinstance(getattr(type(obj), _INTERFACE_ATTR, None), InterfaceDescriptor)


# ----------------------------------------------------------------------
# Members of synthesized classes
# ----------------------------------------------------------------------


def _proxy_init(self: Any, interceptor: Interceptor) -> None:
    object.__setattr__(self, _INTERCEPTOR_ATTR, interceptor)


def _proxy_repr(self: Any) -> str:
    descriptor: InterfaceDescriptor = getattr(type(self), _INTERFACE_ATTR)
    return f"<{type(self).__qualname__} proxy of {descriptor.identity.__qualname__}>"


def _select_variant(
    variants: tuple[MethodDescriptor, ...],
    args: tuple,
    kwargs: dict[str, Any],
) -> tuple[MethodDescriptor, inspect.BoundArguments]:
    """Pick the descriptor a call binds to.

    A single declaration binds directly; a bad call raises ``TypeError`` as
    for any Python method. Overloads are tried in declaration order and the
    first whose full parameter-type list accepts the arguments wins.
    """
    if len(variants) == 1:
        return variants[0], variants[0].bind(args, kwargs)

    for method in variants:
        try:
            bound = method.bind(args, kwargs)
        except TypeError:
            continue
        if accepts(method, bound):
            return method, bound

    first = variants[0]
    received = ", ".join(type(a).__name__ for a in (*args, *kwargs.values()))
    raise ResolutionError(
        f"No overload of {first.qualified_name} accepts ({received})",
        context={"method": first.qualified_name, "overloads": len(variants)},
    )


def _convert_result(method: MethodDescriptor, result: Any, strict: bool) -> Any:
    if not method.returns_value:
        return None
    if matches_type(result, method.return_type):
        return result
    if strict:
        raise ReturnTypeError(method.qualified_name, method.return_type, result)
    logger.warning(
        "proxy_return_type_mismatch",
        method=method.qualified_name,
        expected=repr(method.return_type),
        actual=type(result).__name__,
    )
    return result


def _public_signature(method: MethodDescriptor) -> inspect.Signature:
    self_param = inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return method.signature.replace(
        parameters=[self_param, *method.signature.parameters.values()],
        return_annotation=method.return_type,
    )
