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

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from enumkit.types import DEBUG_ENV_VAR, DEBUG_ALL_TARGETS


class Settings(BaseSettings):
    """
    環境変数から読み込む設定。
    生成結果には影響しない診断用のサイドチャネルのみを扱う。
    """

    # "1" -> 全列挙型の生成物をダンプ / それ以外 -> 名前が一致する列挙型のみ
    debug: Optional[str] = Field(None, alias=DEBUG_ENV_VAR)

    def should_dump(self, enum_name: str) -> bool:
        if not self.debug:
            return False
        return self.debug == DEBUG_ALL_TARGETS or self.debug == enum_name


@lru_cache
def get_settings() -> Settings:
    return Settings()
