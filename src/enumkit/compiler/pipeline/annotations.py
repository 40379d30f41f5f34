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
from typing import Any, Dict, List, Mapping, NoReturn
from pydantic import ValidationError

from enumkit.types import (
    AttrArity,
    AttrKey,
    AnnotationEntry,
    ErrorKind,
    RawEnum,
    RawVariant,
    VariantDescriptor,
    EnumDescriptor,
    TRUE_LITERAL,
    FALSE_LITERAL,
)
from ..exceptions import EnumCompilationError

logger = logging.getLogger(__name__)

STAGE = "AnnotationParser"


def build(raw_enum: RawEnum) -> EnumDescriptor:
    """
    生アノテーション付きの列挙型宣言を、バリアント単位でパースしてメタデータモデルに変換する。
    列挙型全体にまたがる制約（一意性・default数）は rules 側の検証パスで扱う。

    Args:
        raw_enum: ホストから受け取った列挙型宣言

    Returns:
        EnumDescriptor: パース済みメタデータモデル

    Raises:
        EnumCompilationError: 最初に検出したアノテーション違反
    """
    variants = [parse_variant(raw) for raw in raw_enum.variants]
    logger.debug(f"Parsed annotations of {len(variants)} variant(s) for '{raw_enum.name}'")

    try:
        return EnumDescriptor(name=raw_enum.name, variants=variants, location=raw_enum.location)
    except ValidationError as e:
        raise EnumCompilationError(
            f"Enumeration '{raw_enum.name}' must declare at least one variant",
            stage=STAGE,
            kind=ErrorKind.EMPTY_ENUMERATION,
            location=raw_enum.location,
            enum_name=raw_enum.name,
        ) from e


def parse_variant(raw: RawVariant) -> VariantDescriptor:
    """
    1バリアント分のアノテーション（順不同・重複可）を集約する。

    - serialize は値を蓄積する（集合和）
    - to_string / message / detailed_message は1回のみ
    - default / disabled は "true" / "false" のフラグで1回のみ
    - props はブロック間でマージし、キーの再定義はエラー
    """
    serialize_values: List[str] = []
    singles: Dict[AttrKey, str] = {}
    flags: Dict[AttrKey, bool] = {}
    properties: Dict[str, str] = {}

    for entry in raw.annotations:
        key = _resolve_key(raw, entry)

        if key.arity == AttrArity.BLOCK:
            _merge_block(raw, entry, properties)
            continue

        if entry.block is not None:
            _fail(raw, ErrorKind.MALFORMED_ATTRIBUTE, f"'{key}' expects a value, not a nested block")
        if not entry.values:
            _fail(raw, ErrorKind.MALFORMED_ATTRIBUTE, f"'{key}' requires a value")

        if key.arity == AttrArity.MULTI:
            serialize_values.extend(entry.values)
        elif key.arity == AttrArity.SINGLE:
            for value in entry.values:
                _set_once(raw, singles, key, value)
        elif key.arity == AttrArity.FLAG:
            for value in entry.values:
                _set_once(raw, flags, key, _parse_flag(raw, key, value))

    to_string = singles.get(AttrKey.TO_STRING)
    message = singles.get(AttrKey.MESSAGE)
    detailed_message = singles.get(AttrKey.DETAILED_MESSAGE)

    # to_string もパース対象のパターンに含める
    patterns = list(serialize_values)
    if to_string is not None:
        patterns.append(to_string)
    serializations = _ordered_unique(patterns) or [raw.name]

    return VariantDescriptor(
        name=raw.name,
        shape=raw.shape,
        fields=raw.fields,
        serializations=serializations,
        to_string=to_string,
        is_disabled=flags.get(AttrKey.DISABLED, False),
        is_default=flags.get(AttrKey.DEFAULT, False),
        message=message,
        detailed_message=detailed_message if detailed_message is not None else message,
        properties=properties,
        location=raw.location,
    )


def entries_from_mapping(mapping: Mapping[str, Any]) -> List[AnnotationEntry]:
    """
    {key: value} 形式のアノテーションブロックを AnnotationEntry のリストへ正規化する。
    YAMLフロントエンドと Python ホストの双方から利用される。

    例: {"serialize": ["blue", "b"], "props": {"Red": 255}}
        -> [AnnotationEntry(key="serialize", values=["blue", "b"]),
            AnnotationEntry(key="props", block=[("Red", "255")])]
    """
    entries: List[AnnotationEntry] = []
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            pairs = [(str(k), _to_literal(v)) for k, v in value.items()]
            entries.append(AnnotationEntry(key=str(key), block=pairs))
        elif isinstance(value, (list, tuple)):
            entries.append(AnnotationEntry(key=str(key), values=[_to_literal(v) for v in value]))
        elif value is None:
            entries.append(AnnotationEntry(key=str(key)))
        else:
            entries.append(AnnotationEntry(key=str(key), values=[_to_literal(value)]))
    return entries


# --- Internal Helpers ---

def _resolve_key(raw: RawVariant, entry: AnnotationEntry) -> AttrKey:
    try:
        return AttrKey(entry.key)
    except ValueError:
        _fail(raw, ErrorKind.UNKNOWN_ATTRIBUTE, f"Unknown attribute '{entry.key}'")


def _merge_block(raw: RawVariant, entry: AnnotationEntry, properties: Dict[str, str]) -> None:
    if entry.block is None:
        _fail(raw, ErrorKind.MALFORMED_ATTRIBUTE, f"'{AttrKey.PROPS}' expects a nested key/value block")

    for prop_key, prop_value in entry.block:
        if prop_key in properties:
            _fail(raw, ErrorKind.DUPLICATE_PROPERTY_KEY, f"Property '{prop_key}' is already defined")
        properties[prop_key] = prop_value


def _set_once(raw: RawVariant, bucket: Dict[AttrKey, Any], key: AttrKey, value: Any) -> None:
    if key in bucket:
        _fail(raw, ErrorKind.DUPLICATE_ATTRIBUTE, f"'{key}' can only be specified once per variant")
    bucket[key] = value


def _parse_flag(raw: RawVariant, key: AttrKey, value: str) -> bool:
    if value == TRUE_LITERAL:
        return True
    if value == FALSE_LITERAL:
        return False
    _fail(
        raw,
        ErrorKind.INVALID_FLAG_VALUE,
        f"'{key}' must be \"{TRUE_LITERAL}\" or \"{FALSE_LITERAL}\", got \"{value}\"",
    )


def _ordered_unique(values: List[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _to_literal(value: Any) -> str:
    # YAML / Python の真偽値はアノテーション上のリテラル表記に揃える
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    return str(value)


def _fail(raw: RawVariant, kind: ErrorKind, message: str) -> NoReturn:
    raise EnumCompilationError(
        f"Variant '{raw.name}': {message}",
        stage=STAGE,
        kind=kind,
        location=raw.location,
    )
