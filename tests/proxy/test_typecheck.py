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
"""Tests for runtime annotation matching."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Annotated, Any, Literal, NewType, Optional, Protocol, TypeVar

import pytest

from dynaproxy.proxy.typecheck import matches_type

UserId = NewType("UserId", int)
Number = TypeVar("Number", int, float)
Bounded = TypeVar("Bounded", bound=str)
Free = TypeVar("Free")


class Closeable(Protocol):
    def close(self) -> None: ...


class TestMatchesType:
    @pytest.mark.parametrize("value", [1, "s", None, object()])
    def test_any_and_object_match_everything(self, value: Any) -> None:
        assert matches_type(value, Any)
        assert matches_type(value, object)

    def test_none(self) -> None:
        assert matches_type(None, None)
        assert matches_type(None, type(None))
        assert not matches_type(0, type(None))

    def test_plain_classes(self) -> None:
        assert matches_type("s", str)
        assert not matches_type(b"s", str)

    def test_numeric_tower(self) -> None:
        assert matches_type(1, float)
        assert matches_type(1, complex)
        assert matches_type(1.5, complex)
        assert not matches_type(1.5, int)

    def test_unions(self) -> None:
        assert matches_type(None, Optional[int])
        assert matches_type(3, int | str)
        assert not matches_type(3.5, int | str)

    def test_generic_aliases_check_origin(self) -> None:
        assert matches_type([1, 2], list[int])
        assert matches_type((1,), Sequence[int])
        assert not matches_type({1}, list[int])
        assert matches_type(len, Callable[[Any], int])

    def test_literal(self) -> None:
        assert matches_type("a", Literal["a", "b"])
        assert not matches_type("c", Literal["a", "b"])

    def test_annotated_uses_base_type(self) -> None:
        assert matches_type(3, Annotated[int, "meta"])
        assert not matches_type("3", Annotated[int, "meta"])

    def test_new_type_uses_supertype(self) -> None:
        assert matches_type(7, UserId)
        assert not matches_type("7", UserId)

    def test_type_vars(self) -> None:
        assert matches_type(1.0, Number)
        assert not matches_type("1", Number)
        assert matches_type("x", Bounded)
        assert not matches_type(1, Bounded)
        assert matches_type(object(), Free)

    def test_non_runtime_protocol_matches(self) -> None:
        assert matches_type(object(), Closeable)
