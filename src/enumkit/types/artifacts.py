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

from __future__ import annotations
import re
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, PrivateAttr
from .enums import VariantShape, Capability, SerializeForm
from .ir import FieldDescriptor
from .constants import TRUE_LITERAL, FALSE_LITERAL, UNSIGNED_INT_MAX

# 符号なし整数リテラル（先頭の '+' のみ許容、空白や '_' 区切りは不可）
UNSIGNED_INT_PATTERN = re.compile(r"\+?[0-9]+")


class VariantTemplate(BaseModel):
    """
    バリアントインスタンスの生成テンプレート
    全フィールドは中立値 (neutral value) で埋められる。capture が指定された位置のみ入力文字列を受け取る。
    """
    variant: str = Field(..., description="バリアント名（タグ）")
    shape: VariantShape = VariantShape.UNIT
    fields: List[FieldDescriptor] = Field(default_factory=list)
    capture: Optional[int] = Field(None, description="入力文字列を格納するフィールド位置")


class ParseArm(BaseModel):
    patterns: List[str] = Field(..., description="完全一致で比較される文字列群")
    template: VariantTemplate


class ParseMatch(BaseModel):
    template: VariantTemplate
    captured: Optional[str] = None


class ParseArtifact(BaseModel):
    """
    parse-from-string の生成物
    arms は宣言順。default はマッチ失敗時に入力を捕捉するバリアント。
    """
    enum_name: str
    arms: List[ParseArm] = Field(default_factory=list)
    default: Optional[VariantTemplate] = None

    _lookup: Dict[str, VariantTemplate] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        for arm in self.arms:
            for pattern in arm.patterns:
                self._lookup.setdefault(pattern, arm.template)

    def resolve(self, text: str) -> Optional[ParseMatch]:
        """
        入力文字列を完全一致（大文字小文字区別、トリムなし）で解決する。
        マッチせず default も無い場合は None（ホスト側で VariantNotFound とする）。
        """
        template = self._lookup.get(text)
        if template is not None:
            return ParseMatch(template=template)
        if self.default is not None:
            return ParseMatch(template=self.default, captured=text)
        return None


class SerializeArtifact(BaseModel):
    """
    serialize-to-string の生成物 (variant -> canonical string)
    """
    enum_name: str
    table: Dict[str, str] = Field(default_factory=dict)
    forms: List[SerializeForm] = Field(default_factory=list)

    def render(self, variant: str) -> str:
        return self.table[variant]


class IterArtifact(BaseModel):
    """
    iterate-all-variants の生成物
    """
    enum_name: str
    iterator_name: str
    items: List[VariantTemplate] = Field(default_factory=list)


class MessageArtifact(BaseModel):
    """
    message / detailed_message / serializations の参照テーブル
    メッセージを持たないバリアントはテーブルに現れない（= None を返す）。
    """
    enum_name: str
    messages: Dict[str, str] = Field(default_factory=dict)
    detailed_messages: Dict[str, str] = Field(default_factory=dict)
    serializations: Dict[str, List[str]] = Field(default_factory=dict)

    def get_message(self, variant: str) -> Optional[str]:
        return self.messages.get(variant)

    def get_detailed_message(self, variant: str) -> Optional[str]:
        return self.detailed_messages.get(variant)

    def get_serializations(self, variant: str) -> List[str]:
        return list(self.serializations.get(variant, []))


class PropertyArtifact(BaseModel):
    """
    プロパティの2段参照テーブル (variant -> key -> value)
    """
    enum_name: str
    table: Dict[str, Dict[str, str]] = Field(default_factory=dict)

    def get_str(self, variant: str, key: str) -> Optional[str]:
        props = self.table.get(variant)
        if props is None:
            return None
        return props.get(key)

    def get_int(self, variant: str, key: str) -> Optional[int]:
        raw = self.get_str(variant, key)
        if raw is None or not UNSIGNED_INT_PATTERN.fullmatch(raw):
            return None
        value = int(raw)
        if value > UNSIGNED_INT_MAX:
            return None
        return value

    def get_bool(self, variant: str, key: str) -> Optional[bool]:
        raw = self.get_str(variant, key)
        if raw == TRUE_LITERAL:
            return True
        if raw == FALSE_LITERAL:
            return False
        return None


class ArtifactBundle(BaseModel):
    """
    1つの列挙型に対する生成物一式。各生成物は要求された Capability に応じて独立に存在する。
    """
    enum_name: str
    capabilities: List[Capability] = Field(default_factory=list)
    variants: List[str] = Field(default_factory=list, description="宣言順のバリアント名")

    parse: Optional[ParseArtifact] = None
    serialize: Optional[SerializeArtifact] = None
    iterate: Optional[IterArtifact] = None
    messages: Optional[MessageArtifact] = None
    properties: Optional[PropertyArtifact] = None
