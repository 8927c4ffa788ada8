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
"""ProxyTypeCache — thread-safe interface to proxy class mapping."""

from __future__ import annotations

import threading
from collections.abc import Callable


class ProxyTypeCache:
    """Append-only mapping from interface class to its synthesized proxy class.

    Lookups of cached interfaces are lock-free. The miss path
    (check, synthesize, insert) runs under a lock owned by the requested
    interface, so concurrent first requests for the same interface
    synthesize exactly once while different interfaces never wait on each
    other. Entries are never removed or replaced.
    """

    def __init__(self) -> None:
        self._types: dict[type, type] = {}
        self._locks: dict[type, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, interface: type) -> type | None:
        return self._types.get(interface)

    def get_or_synthesize(self, interface: type, synthesize: Callable[[type], type]) -> type:
        """Return the cached class for *interface*, synthesizing it on a miss."""
        cached = self._types.get(interface)
        if cached is not None:
            return cached
        with self._lock_for(interface):
            cached = self._types.get(interface)
            if cached is None:
                cached = self.register(interface, synthesize(interface))
                with self._guard:
                    self._locks.pop(interface, None)
            return cached

    def register(self, interface: type, proxy_type: type) -> type:
        """Insert *proxy_type* unless *interface* is already cached.

        A second registration for a cached interface is a no-op; the class
        cached first stays bound and is returned.
        """
        with self._guard:
            return self._types.setdefault(interface, proxy_type)

    def interfaces(self) -> list[type]:
        return list(self._types)

    def _lock_for(self, interface: type) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(interface, threading.Lock())

    def __contains__(self, interface: object) -> bool:
        return interface in self._types

    def __len__(self) -> int:
        return len(self._types)
