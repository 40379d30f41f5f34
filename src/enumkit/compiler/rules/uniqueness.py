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

from typing import Dict, List

from enumkit.types import EnumDescriptor, ErrorKind
from ..exceptions import EnumCompilationError

STAGE = "UniquenessRule"

def validate(descriptor: EnumDescriptor) -> None:
    """
    列挙型全体にまたがる一意性制約を検証する（全バリアントのパース後に実行する大域検証パス）。

    Raises:
        EnumCompilationError: 制約違反が見つかった場合
    """
    _check_variant_names(descriptor)
    _check_serializations(descriptor)
    _check_default_count(descriptor)


def _check_variant_names(descriptor: EnumDescriptor) -> None:
    seen = set()
    for variant in descriptor.variants:
        if variant.name in seen:
            raise EnumCompilationError(
                f"Duplicate variant name '{variant.name}' in '{descriptor.name}'",
                stage=STAGE,
                kind=ErrorKind.DUPLICATE_VARIANT_NAME,
                location=variant.location,
                enum_name=descriptor.name,
            )
        seen.add(variant.name)


def _check_serializations(descriptor: EnumDescriptor) -> None:
    # 無効化されたバリアントはparseに参加しないため対象外
    owners: Dict[str, str] = {}
    for variant in descriptor.variants:
        if variant.is_disabled:
            continue
        for text in variant.serializations:
            owner = owners.get(text)
            if owner is not None:
                raise EnumCompilationError(
                    f"Serialization '{text}' is shared by variants '{owner}' and '{variant.name}' "
                    f"in '{descriptor.name}' (ambiguous parse)",
                    stage=STAGE,
                    kind=ErrorKind.DUPLICATE_SERIALIZATION,
                    location=variant.location,
                    enum_name=descriptor.name,
                )
            owners[text] = variant.name


def _check_default_count(descriptor: EnumDescriptor) -> None:
    defaults: List[str] = [v.name for v in descriptor.variants if v.is_default]
    if len(defaults) > 1:
        second = next(v for v in descriptor.variants if v.name == defaults[1])
        raise EnumCompilationError(
            f"Can't have multiple default variants in '{descriptor.name}': {defaults}",
            stage=STAGE,
            kind=ErrorKind.MULTIPLE_DEFAULT_VARIANTS,
            location=second.location,
            enum_name=descriptor.name,
        )
