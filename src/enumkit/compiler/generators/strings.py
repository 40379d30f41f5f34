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

import logging
from typing import Iterable, List, Optional

from enumkit.types import (
    EnumDescriptor,
    ParseArm,
    ParseArtifact,
    SerializeArtifact,
    SerializeForm,
    VariantTemplate,
)
from ..rules import shape
from .common import make_template

logger = logging.getLogger(__name__)

STAGE = "StringGenerator"

# default バリアントが入力文字列を受け取るフィールド位置（単一フィールドのみ許可されている）
DEFAULT_CAPTURE_INDEX = 0

def generate_parse(descriptor: EnumDescriptor) -> ParseArtifact:
    """
    parse-from-string の生成物を作る。

    Rules:
      - 無効化 (disabled) されたバリアントはマッチ対象から除外する
      - default バリアントは自身の serializations ではマッチせず、マッチ失敗時の受け皿になる
      - 無効化された default バリアントは受け皿にもならない
      - 一意性は検証済みのため、1つの入力にマッチするアームは高々1つ

    Args:
        descriptor: 検証済みメタデータモデル

    Returns:
        ParseArtifact: 宣言順のアームと default テンプレート
    """
    shape.require_neutral(descriptor, stage=STAGE, for_parse=True)

    arms: List[ParseArm] = []
    default: Optional[VariantTemplate] = None

    for variant in descriptor.variants:
        if variant.is_disabled:
            continue

        if variant.is_default:
            default = make_template(variant, capture=DEFAULT_CAPTURE_INDEX)
            continue

        arms.append(ParseArm(patterns=list(variant.serializations), template=make_template(variant)))

    logger.debug(
        f"Generated parse artifact for '{descriptor.name}': "
        f"{len(arms)} arm(s), default={default.variant if default else None}"
    )
    return ParseArtifact(enum_name=descriptor.name, arms=arms, default=default)


def generate_serialize(
    descriptor: EnumDescriptor,
    forms: Iterable[SerializeForm] = (SerializeForm.OWNED, SerializeForm.BORROWED),
) -> SerializeArtifact:
    """
    serialize-to-string の生成物を作る。全バリアント（無効化されたものを含む）の正準文字列を事前計算する。
    """
    table = {variant.name: variant.canonical_string for variant in descriptor.variants}
    return SerializeArtifact(enum_name=descriptor.name, table=table, forms=list(forms))
