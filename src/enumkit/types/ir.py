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
from typing import List, Optional, Dict, Tuple
from pydantic import BaseModel, Field, model_validator
from .enums import VariantShape, Capability
from .constants import STRING_CONSTRUCTIBLE_HINTS


class SourceLocation(BaseModel):
    """
    診断用のソース位置 (Value Object)
    ホスト側のフロントエンドが分かる範囲で埋める。
    """
    file: Optional[str] = Field(None, description="宣言元のファイル名またはソース名")
    line: Optional[int] = Field(None, description="1始まりの行番号")

    def __str__(self) -> str:
        if self.file and self.line is not None:
            return f"{self.file}:{self.line}"
        if self.file:
            return self.file
        if self.line is not None:
            return f"line {self.line}"
        return "<unknown>"


class FieldDescriptor(BaseModel):
    """
    バリアントが保持するフィールドの静的な記述。
    値は一切持たず、名前と型ヒントのみを扱う。
    """
    name: Optional[str] = Field(None, description="struct形式の場合のフィールド名 (tuple形式では None)")
    type_hint: str = Field(..., description="フィールド型のヒント文字列 (e.g. 'int', 'str')")
    borrowed: bool = Field(
        False,
        description="インスタンスから独立して生成できない非所有参照を保持するか"
    )
    neutral: bool = Field(
        True,
        description="引数なしで中立値を構築できるか (parse / iteration の穴埋めに必要)"
    )
    from_str: Optional[bool] = Field(
        None,
        description="文字列からの構築可否の明示指定。None の場合は型ヒントから判定する"
    )

    @property
    def accepts_str(self) -> bool:
        if self.from_str is not None:
            return self.from_str
        return self.type_hint in STRING_CONSTRUCTIBLE_HINTS


class AnnotationEntry(BaseModel):
    """
    記述されたままの生アノテーション1件
    key/value 形式 (values) か key/ネストブロック形式 (block) のいずれか。
    """
    key: str = Field(..., description="アノテーションキー（未知のキーもそのまま保持する）")
    values: List[str] = Field(
        default_factory=list,
        description="key=value 形式の値リスト (e.g. serialize=['blue', 'b'])"
    )
    block: Optional[List[Tuple[str, str]]] = Field(
        None,
        description="ネストブロックの key/value ペア。重複検出のため順序付きリストで保持する"
    )


class RawVariant(BaseModel):
    """
    ホストから受け取るバリアント1件 (Boundary Object)
    """
    name: str
    shape: VariantShape = VariantShape.UNIT
    fields: List[FieldDescriptor] = Field(default_factory=list)
    annotations: List[AnnotationEntry] = Field(default_factory=list)
    location: Optional[SourceLocation] = None

    @model_validator(mode="after")
    def _check_shape(self) -> RawVariant:
        if self.shape == VariantShape.UNIT and self.fields:
            raise ValueError(f"Unit variant '{self.name}' cannot declare fields")

        if self.shape == VariantShape.TUPLE:
            if any(f.name is not None for f in self.fields):
                raise ValueError(f"Tuple variant '{self.name}' cannot declare named fields")

        if self.shape == VariantShape.STRUCT:
            names = [f.name for f in self.fields]
            if any(n is None for n in names):
                raise ValueError(f"Struct variant '{self.name}' requires named fields")
            if len(names) != len(set(names)):
                raise ValueError(f"Struct variant '{self.name}' declares duplicate field names: {names}")
        return self


class RawEnum(BaseModel):
    """
    ホストから受け取る列挙型の宣言 (Boundary Object)
    variants の順序は宣言順であり、iteration の順序として意味を持つ。
    """
    name: str
    variants: List[RawVariant] = Field(default_factory=list)
    capabilities: List[Capability] = Field(
        default_factory=lambda: list(Capability),
        description="生成を要求する派生機能"
    )
    location: Optional[SourceLocation] = None


class VariantDescriptor(BaseModel):
    """
    パース・検証済みのバリアントメタデータ
    """
    name: str
    shape: VariantShape = VariantShape.UNIT
    fields: List[FieldDescriptor] = Field(default_factory=list)

    serializations: List[str] = Field(..., description="parse時にマッチする文字列（順序付き集合）")
    to_string: Optional[str] = Field(None, description="明示された to_string の値")

    is_disabled: bool = False
    is_default: bool = False

    message: Optional[str] = None
    detailed_message: Optional[str] = Field(
        None,
        description="解決済みの詳細メッセージ (未指定時は message にフォールバック済み)"
    )

    properties: Dict[str, str] = Field(default_factory=dict)
    location: Optional[SourceLocation] = None

    @property
    def canonical_string(self) -> str:
        """
        serialize 時に出力する唯一の文字列。
          1. to_string の値
          2. serializations のうち最長のもの（UTF-8 バイト長、同長なら先に宣言された方）
          3. バリアント名
        """
        if self.to_string is not None:
            return self.to_string
        if self.serializations:
            return max(self.serializations, key=_encoded_length)
        return self.name


class EnumDescriptor(BaseModel):
    """
    1つの列挙型に対するメタデータモデル。生成時にのみ存在し、実行時表現は持たない。
    """
    name: str
    variants: List[VariantDescriptor] = Field(..., min_length=1)
    location: Optional[SourceLocation] = None

    @property
    def default_variant(self) -> Optional[VariantDescriptor]:
        for variant in self.variants:
            if variant.is_default:
                return variant
        return None

    @property
    def variant_names(self) -> List[str]:
        return [v.name for v in self.variants]


def _encoded_length(value: str) -> int:
    return len(value.encode("utf-8"))
