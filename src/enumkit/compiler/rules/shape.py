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

from enumkit.types import EnumDescriptor, ErrorKind, VariantShape
from ..exceptions import EnumCompilationError

STAGE = "ShapeRule"

def validate(descriptor: EnumDescriptor) -> None:
    """
    default バリアントの形状制約を検証する。
    default は「文字列から構築可能な単一フィールドを持つ tuple 形式」のみ許可される。
    """
    for variant in descriptor.variants:
        if not variant.is_default:
            continue

        if variant.shape != VariantShape.TUPLE or len(variant.fields) != 1:
            raise EnumCompilationError(
                f"Default variant '{variant.name}' must be a tuple-like variant with exactly one field, "
                f"got {variant.shape} with {len(variant.fields)} field(s)",
                stage=STAGE,
                kind=ErrorKind.INVALID_DEFAULT_VARIANT_SHAPE,
                location=variant.location,
                enum_name=descriptor.name,
            )

        field = variant.fields[0]
        if not field.accepts_str:
            raise EnumCompilationError(
                f"Default variant '{variant.name}' holds '{field.type_hint}', "
                "which cannot be constructed from a string",
                stage=STAGE,
                kind=ErrorKind.INVALID_DEFAULT_VARIANT_SHAPE,
                location=variant.location,
                enum_name=descriptor.name,
            )


def require_fabricable(descriptor: EnumDescriptor, stage: str = STAGE) -> None:
    """
    全フィールドが中立値で生成可能であることを要求する。
    非所有参照 (borrowed) を持つフィールドは、参照元なしに値を作れないため拒否する。
    """
    for variant in descriptor.variants:
        for index, field in enumerate(variant.fields):
            if field.borrowed:
                label = field.name if field.name is not None else str(index)
                raise EnumCompilationError(
                    f"Cannot derive iteration for '{descriptor.name}': "
                    f"field '{label}' of variant '{variant.name}' holds a borrowed '{field.type_hint}' "
                    "whose lifetime cannot be fabricated",
                    stage=stage,
                    kind=ErrorKind.UNBOUNDED_LIFETIME_NOT_SUPPORTED,
                    location=variant.location,
                    enum_name=descriptor.name,
                )


def require_neutral(descriptor: EnumDescriptor, stage: str = STAGE, for_parse: bool = False) -> None:
    """
    中立値で埋めるフィールドが引数なしで構築可能であることを要求する。
    for_parse の場合、マッチしない無効化バリアントと default の捕捉フィールドは対象外。
    """
    for variant in descriptor.variants:
        if for_parse and variant.is_disabled:
            continue
        for index, field in enumerate(variant.fields):
            if for_parse and variant.is_default and index == 0:
                continue
            if not field.neutral:
                label = field.name if field.name is not None else str(index)
                raise EnumCompilationError(
                    f"Field '{label}' of variant '{variant.name}' holds '{field.type_hint}', "
                    "which has no zero-argument neutral value",
                    stage=stage,
                    kind=ErrorKind.MISSING_NEUTRAL_VALUE,
                    location=variant.location,
                    enum_name=descriptor.name,
                )
