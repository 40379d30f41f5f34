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

from typing import Final, FrozenSet

# Flag Literals
# default / disabled アノテーションが受理する真偽値リテラル（大文字小文字は区別する）
TRUE_LITERAL: Final[str] = "true"
FALSE_LITERAL: Final[str] = "false"

# Debug Switch
# 生成物ダンプの対象を指定する環境変数。"1" は全列挙型、それ以外は型名との完全一致
DEBUG_ENV_VAR: Final[str] = "ENUMKIT_DEBUG"
DEBUG_ALL_TARGETS: Final[str] = "1"

# Iterator Naming
# Format: {EnumName}Iter
ITERATOR_TYPE_SUFFIX: Final[str] = "Iter"

# 文字列から無条件に構築できる（失敗しない）フィールド型ヒント
# default バリアントの単一フィールドはこのいずれかである必要がある
STRING_CONSTRUCTIBLE_HINTS: Final[FrozenSet[str]] = frozenset({
    "str",
    "Path",
    "pathlib.Path",
    "PurePath",
    "pathlib.PurePath",
})

# get_int が受理する最大値 (符号なし 64bit)
UNSIGNED_INT_MAX: Final[int] = 2**64 - 1

# Host Reserved Names
# Python ホストが派生メソッドとして注入する名前。バリアント名として使用できない
RESERVED_MEMBER_NAMES: Final[FrozenSet[str]] = frozenset({
    "from_str",
    "to_string",
    "as_ref",
    "iter",
    "get_message",
    "get_detailed_message",
    "get_serializations",
    "get_str",
    "get_int",
    "get_bool",
    "variant_name",
    "payload",
})
