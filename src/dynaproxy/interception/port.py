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
"""Interceptor — the single seam through which all proxy behaviour flows."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from dynaproxy.interception.types import CallContext


@runtime_checkable
class Interceptor(Protocol):
    """Handler receiving every call made on the proxies of a factory.

    Whatever ``intercept`` returns becomes the proxy method's return value
    (discarded for methods declared ``-> None``). Whatever it raises reaches
    the caller of the proxy method unchanged.
    """

    def intercept(self, context: CallContext) -> Any: ...
