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
"""Tests for ProxyTypeCache — insert-if-absent caching of proxy classes."""

from __future__ import annotations

import threading

import pytest

from dynaproxy.proxy.cache import ProxyTypeCache


class IService:
    pass


class ServiceProxy(IService):
    pass


class OtherProxy(IService):
    pass


class IAudit:
    pass


class AuditProxy(IAudit):
    pass


class TestProxyTypeCache:
    def test_empty(self) -> None:
        cache = ProxyTypeCache()
        assert len(cache) == 0
        assert cache.get(IService) is None
        assert IService not in cache

    def test_get_or_synthesize_miss_then_hit(self) -> None:
        cache = ProxyTypeCache()
        calls: list[type] = []

        def synthesize(interface: type) -> type:
            calls.append(interface)
            return ServiceProxy

        assert cache.get_or_synthesize(IService, synthesize) is ServiceProxy
        assert cache.get_or_synthesize(IService, synthesize) is ServiceProxy
        assert calls == [IService]
        assert cache.interfaces() == [IService]

    def test_failed_synthesis_leaves_cache_untouched(self) -> None:
        cache = ProxyTypeCache()

        def synthesize(interface: type) -> type:
            raise RuntimeError("cannot build")

        with pytest.raises(RuntimeError, match="cannot build"):
            cache.get_or_synthesize(IService, synthesize)
        assert IService not in cache

    def test_register_same_type_twice_is_no_op(self) -> None:
        cache = ProxyTypeCache()
        assert cache.register(IService, ServiceProxy) is ServiceProxy
        assert cache.register(IService, ServiceProxy) is ServiceProxy
        assert len(cache) == 1

    def test_second_registration_is_a_no_op(self) -> None:
        cache = ProxyTypeCache()
        cache.register(IService, ServiceProxy)
        assert cache.register(IService, OtherProxy) is ServiceProxy
        assert cache.get(IService) is ServiceProxy
        assert len(cache) == 1

    def test_distinct_interfaces_synthesize_independently(self) -> None:
        cache = ProxyTypeCache()
        started = threading.Event()
        release = threading.Event()

        def slow_synthesize(interface: type) -> type:
            started.set()
            release.wait(timeout=5)
            return ServiceProxy

        worker = threading.Thread(target=cache.get_or_synthesize, args=(IService, slow_synthesize))
        worker.start()
        try:
            assert started.wait(timeout=5)
            # IAudit must not wait for the IService synthesis still in progress.
            assert cache.get_or_synthesize(IAudit, lambda interface: AuditProxy) is AuditProxy
            assert IService not in cache
        finally:
            release.set()
            worker.join()
        assert cache.get(IService) is ServiceProxy

    def test_concurrent_misses_synthesize_once(self) -> None:
        cache = ProxyTypeCache()
        barrier = threading.Barrier(6)
        calls: list[type] = []
        results: list[type] = []

        def synthesize(interface: type) -> type:
            calls.append(interface)
            return type("Synthesized", (interface,), {})

        def worker() -> None:
            barrier.wait()
            results.append(cache.get_or_synthesize(IService, synthesize))

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(set(results)) == 1
