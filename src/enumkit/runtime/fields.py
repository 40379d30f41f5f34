# Copyright (c) 2026 Centillion System, Inc.
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

import types
import weakref
from pathlib import PurePath
from typing import Any, Optional, Union, get_args, get_origin

from enumkit.types import FieldDescriptor

# インスタンスなしには値を作れない非所有参照型
BORROWED_TYPES = (memoryview, weakref.ReferenceType)

# 任意の文字列から失敗せずに構築できる型
STRING_TYPES = (str, PurePath)


def describe(field_type: Any, name: Optional[str] = None) -> FieldDescriptor:
    """Python の型からコンパイラ向けのフィールド記述を作る"""
    return FieldDescriptor(
        name=name,
        type_hint=type_hint(field_type),
        borrowed=is_borrowed(field_type),
        neutral=has_neutral_value(field_type),
        from_str=accepts_str(field_type),
    )


def type_hint(field_type: Any) -> str:
    if isinstance(field_type, type) and get_origin(field_type) is None:
        return field_type.__qualname__
    return repr(field_type)


def is_borrowed(field_type: Any) -> bool:
    origin = _factory_of(field_type)
    return isinstance(origin, type) and issubclass(origin, BORROWED_TYPES)


def is_hashable(field_type: Any) -> bool:
    if _is_optional(field_type):
        return all(is_hashable(arg) for arg in get_args(field_type))
    origin = _factory_of(field_type)
    return not isinstance(origin, type) or origin.__hash__ is not None


def accepts_str(field_type: Any) -> bool:
    return isinstance(field_type, type) and issubclass(field_type, STRING_TYPES)


def neutral_value(field_type: Any) -> Any:
    """
    型の中立値（引数なしコンストラクタの値）を返す。
      int -> 0, str -> "", list[int] -> [], Optional[X] -> None
    """
    if _is_optional(field_type):
        return None
    return _factory_of(field_type)()


def has_neutral_value(field_type: Any) -> bool:
    try:
        neutral_value(field_type)
    except (TypeError, ValueError):
        return False
    return True


def from_text(field_type: Any, text: str) -> Any:
    return _factory_of(field_type)(text)


def _factory_of(field_type: Any) -> Any:
    origin = get_origin(field_type)
    return origin if origin is not None else field_type


def _is_optional(field_type: Any) -> bool:
    origin = get_origin(field_type)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(field_type)
    return False
