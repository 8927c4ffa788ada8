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
"""Unified exception hierarchy for dynaproxy.

All library exceptions inherit from DynaproxyException, enabling unified
error handling: catch DynaproxyException to handle every proxy failure, or
catch a specific subclass for targeted handling.

Failures raised by an interceptor are never wrapped in any of these types;
they reach the caller of the proxy method unchanged.
"""

from __future__ import annotations

from typing import get_origin


# =============================================================================
# Base Exception
# =============================================================================


class DynaproxyException(Exception):
    """Base exception for all dynaproxy errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "PROXY_RESOLUTION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Factory Exceptions
# =============================================================================


class ConfigurationError(DynaproxyException):
    """The factory was built without a usable interceptor or with bad settings."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_CONFIGURATION", context=context)


class ResolutionError(DynaproxyException, LookupError):
    """Method or type metadata of an interface could not be resolved.

    Raised while describing an interface (an annotation names something
    that does not exist) and when no overload of a method accepts the
    arguments of a call.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_RESOLUTION", context=context)


class ConstructionError(DynaproxyException):
    """No proxy class can be built for the interface.

    The interface is not a class, cannot be subclassed, or declares
    non-method public members.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_CONSTRUCTION", context=context)


# =============================================================================
# Dispatch Exceptions
# =============================================================================


class ReturnTypeError(DynaproxyException, TypeError):
    """An interceptor result does not match the method's declared return type."""

    def __init__(self, method: str, expected: object, value: object) -> None:
        self.method = method
        self.expected = expected
        self.value = value
        super().__init__(
            f"{method} must return {_type_name(expected)}, "
            f"interceptor returned {type(value).__name__}: {value!r}",
            code="PROXY_RETURN_TYPE",
            context={"method": method},
        )


def _type_name(tp: object) -> str:
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp)
