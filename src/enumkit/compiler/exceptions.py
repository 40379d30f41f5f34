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

from enumkit.types import ErrorKind, SourceLocation


class EnumCompilationError(Exception):
    """
    列挙型の生成処理で検出されたエラー。
    どの工程 (stage) で何 (kind) が起きたかを保持し、当該列挙型の生成全体を中断させる。
    """

    def __init__(
        self,
        message: str,
        stage: str = "Unknown",
        kind: ErrorKind = ErrorKind.INTERNAL_ERROR,
        location: Optional[SourceLocation] = None,
        enum_name: Optional[str] = None,
    ):
        self.message = message
        self.stage = stage
        self.kind = kind
        self.location = location
        self.enum_name = enum_name
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"[{self.stage}] {self.kind}: {self.message}"
        if self.location is not None:
            text = f"{text} (at {self.location})"
        return text
