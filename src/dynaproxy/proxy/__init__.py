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
"""dynaproxy proxy — interface description, type caching, and the proxy factory."""

from dynaproxy.proxy.cache import ProxyTypeCache
from dynaproxy.proxy.descriptor import InterfaceDescriptor, describe_interface
from dynaproxy.proxy.factory import ProxyFactory, is_proxy
from dynaproxy.proxy.properties import ProxyProperties
from dynaproxy.proxy.typecheck import matches_type

__all__ = [
    "InterfaceDescriptor",
    "ProxyFactory",
    "ProxyProperties",
    "ProxyTypeCache",
    "describe_interface",
    "is_proxy",
    "matches_type",
]
