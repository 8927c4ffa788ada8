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
"""Configuration properties of the proxy factory."""

from __future__ import annotations

from dataclasses import dataclass

from dynaproxy.core.config import config_properties


@config_properties(prefix="dynaproxy.proxy")
@dataclass(frozen=True)
class ProxyProperties:
    """Settings bound from the ``dynaproxy.proxy`` configuration section.

    Attributes:
        naming_hint: Label of the synthesis unit; defaults to the
            interceptor's class name.
        interface_marker: Leading marker stripped from interface names
            (``ITestInterface`` -> ``TestInterface``).
        type_suffix: Suffix appended to synthesized class names.
        strict_returns: Raise ``ReturnTypeError`` when an interceptor result
            does not match the declared return type; when off the value is
            returned as-is and a warning is logged.
    """

    naming_hint: str | None = None
    interface_marker: str = "I"
    type_suffix: str = "Proxy"
    strict_returns: bool = True
