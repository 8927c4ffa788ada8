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
"""Stock interceptors for delegation, lazy loading, and call auditing."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any

import structlog

from dynaproxy.interception.port import Interceptor
from dynaproxy.interception.types import CallContext
from dynaproxy.logging import AUDIT_LOGGER


class DelegatingInterceptor:
    """Forwards every call to the method of the same name on *target*.

    Usage::

        factory = ProxyFactory(DelegatingInterceptor(SqlOrderRepository()))
        repo = factory.create_proxy(OrderRepository)
    """

    def __init__(self, target: Any) -> None:
        self._target = target

    @property
    def target(self) -> Any:
        return self._target

    def intercept(self, context: CallContext) -> Any:
        return context.apply(getattr(self.target, context.method_name))


class LazyInterceptor(DelegatingInterceptor):
    """Delegates to a target built by *supplier* on the first intercepted call.

    The supplier runs at most once, even when the first calls race.
    """

    def __init__(self, supplier: Callable[[], Any]) -> None:
        super().__init__(None)
        self._supplier = supplier
        self._lock = threading.Lock()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def target(self) -> Any:
        if not self._loaded:
            with self._lock:
                if not self._loaded:
                    self._target = self._supplier()
                    self._loaded = True
        return self._target


class LoggingInterceptor:
    """Audit wrapper: logs each call and its outcome, then defers to *delegate*.

    Failures of the delegate are logged and re-raised unchanged.
    """

    def __init__(self, delegate: Interceptor, logger: Any = None) -> None:
        self._delegate = delegate
        self._logger = logger if logger is not None else structlog.get_logger(AUDIT_LOGGER)

    def intercept(self, context: CallContext) -> Any:
        method = context.method.qualified_name
        self._logger.info("proxy_call", method=method, args=context.args)
        start = time.perf_counter()
        try:
            result = self._delegate.intercept(context)
        except Exception as exc:
            self._logger.warning(
                "proxy_call_failed",
                method=method,
                error=type(exc).__name__,
                duration_ms=_elapsed_ms(start),
            )
            raise
        self._logger.info("proxy_call_returned", method=method, duration_ms=_elapsed_ms(start))
        return result


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)
