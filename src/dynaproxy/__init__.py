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
"""dynaproxy — runtime proxies that route every interface call through one interceptor."""

from dynaproxy.core.config import Config
from dynaproxy.interception import (
    CallContext,
    DelegatingInterceptor,
    Interceptor,
    LazyInterceptor,
    LoggingInterceptor,
    MethodDescriptor,
)
from dynaproxy.kernel.exceptions import (
    ConfigurationError,
    ConstructionError,
    DynaproxyException,
    ResolutionError,
    ReturnTypeError,
)
from dynaproxy.logging import LoggingProperties, configure_logging
from dynaproxy.proxy import InterfaceDescriptor, ProxyFactory, ProxyProperties, is_proxy

__version__ = "0.1.0"

__all__ = [
    # Factory
    "ProxyFactory",
    "ProxyProperties",
    "InterfaceDescriptor",
    "is_proxy",
    # Interception
    "CallContext",
    "Interceptor",
    "MethodDescriptor",
    "DelegatingInterceptor",
    "LazyInterceptor",
    "LoggingInterceptor",
    # Configuration
    "Config",
    "LoggingProperties",
    "configure_logging",
    # Exceptions
    "DynaproxyException",
    "ConfigurationError",
    "ConstructionError",
    "ResolutionError",
    "ReturnTypeError",
]
