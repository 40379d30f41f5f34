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

from typing import Optional

from enumkit.types import ParseErrorKind

VARIANT_NOT_FOUND_MESSAGE = "Matching variant not found"
VARIANT_NOT_FOUND_DESCRIPTION = (
    "Unable to find a variant of the given enum matching the string given. Matching "
    "can be extended with the Serialize attribute and is case sensitive."
)


class ParseError(ValueError):
    """
    生成された from_str が、どのバリアントにもマッチしなかった場合に送出する実行時エラー。
    致命的な中断ではなく、呼び出し側が捕捉して扱う明示的な結果である。
    """

    kind: ParseErrorKind = ParseErrorKind.VARIANT_NOT_FOUND

    def __init__(self, enum_name: Optional[str] = None, text: Optional[str] = None):
        self.enum_name = enum_name
        self.text = text
        super().__init__(VARIANT_NOT_FOUND_MESSAGE)

    @property
    def description(self) -> str:
        return VARIANT_NOT_FOUND_DESCRIPTION
