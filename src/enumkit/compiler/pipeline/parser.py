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

import yaml
from typing import Any, Dict, List, NoReturn, Optional
from pydantic import ValidationError

from enumkit.types import (
    AnnotationEntry,
    Capability,
    DeclField,
    ErrorKind,
    FieldDescriptor,
    RawEnum,
    RawVariant,
    SourceLocation,
    VariantShape,
)
from ..exceptions import EnumCompilationError
from .annotations import entries_from_mapping

STAGE = "Parser"

def parse(source: str, source_name: Optional[str] = None) -> List[RawEnum]:
    """
    YAML形式の列挙型宣言をパースし、ホスト境界オブジェクト (RawEnum) のリストに正規化する。

    Root Syntax:
      - {enum: Name, variants: [...]}   単一の列挙型
      - {enums: [...]} / [...]          複数の列挙型

    Variant Syntax:
      - "Red"                                      unit
      - {Green: {fields: {range: int}}}            struct (mapping)
      - {Blue: {fields: [int], strum: [{serialize: blue}]}}  tuple (list)
    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        _fail(f"YAML syntax error: {str(e)}", source_name)

    if data is None:
        _fail("Empty enum declaration source", source_name)

    if isinstance(data, dict) and DeclField.ENUMS in data:
        data = data[DeclField.ENUMS]

    if isinstance(data, dict):
        declarations = [data]
    elif isinstance(data, list):
        declarations = data
    else:
        _fail(
            f"Invalid declaration structure: Root must be a dictionary or list, got {type(data).__name__}",
            source_name,
        )

    return [_parse_enum(decl, source_name) for decl in declarations]


def _parse_enum(decl: Any, source_name: Optional[str]) -> RawEnum:
    if not isinstance(decl, dict) or DeclField.ENUM not in decl:
        keys = list(decl.keys()) if isinstance(decl, dict) else type(decl).__name__
        _fail(f"Invalid enum declaration: Missing '{DeclField.ENUM}' field. Found: {keys}", source_name)

    name = str(decl[DeclField.ENUM])
    raw_variants = decl.get(DeclField.VARIANTS) or []
    if not isinstance(raw_variants, list):
        _fail(f"'{DeclField.VARIANTS}' of '{name}' must be a list", source_name)

    location = SourceLocation(file=source_name) if source_name else None
    variants = [_parse_variant(item, name, location) for item in raw_variants]

    spec: Dict[str, Any] = {"name": name, "variants": variants, "location": location}
    if DeclField.DERIVE in decl:
        spec["capabilities"] = _parse_capabilities(decl[DeclField.DERIVE], name, source_name)

    try:
        return RawEnum(**spec)
    except ValidationError as e:
        _fail(f"Invalid enum declaration '{name}': {str(e)}", source_name)


def _parse_variant(item: Any, enum_name: str, location: Optional[SourceLocation]) -> RawVariant:
    # Case A: 名前のみ -> unit
    if isinstance(item, str):
        return RawVariant(name=item, location=location)

    # Case B: 単一キー辞書 -> {Name: body}
    if not isinstance(item, dict) or len(item) != 1:
        _fail(f"Invalid variant declaration in '{enum_name}': {item!r}", location and location.file)

    name, body = next(iter(item.items()))
    name = str(name)
    body = body or {}
    if not isinstance(body, dict):
        _fail(f"Variant '{enum_name}.{name}' body must be a dictionary", location and location.file)

    fields_spec = body.get(DeclField.FIELDS)
    shape = body.get(DeclField.SHAPE)
    if shape is None:
        if isinstance(fields_spec, dict):
            shape = VariantShape.STRUCT
        elif isinstance(fields_spec, list):
            shape = VariantShape.TUPLE
        else:
            shape = VariantShape.UNIT

    try:
        return RawVariant(
            name=name,
            shape=shape,
            fields=_parse_fields(fields_spec),
            annotations=_parse_annotations(body.get(DeclField.ANNOTATIONS)),
            location=location,
        )
    except ValueError as e:
        _fail(f"Invalid variant declaration '{enum_name}.{name}': {str(e)}", location and location.file)


def _parse_fields(spec: Any) -> List[FieldDescriptor]:
    if spec is None:
        return []
    if isinstance(spec, dict):
        return [_parse_field(value, name=str(key)) for key, value in spec.items()]
    if isinstance(spec, list):
        return [_parse_field(value) for value in spec]
    raise ValueError(f"'{DeclField.FIELDS}' must be a list or a mapping, got {type(spec).__name__}")


def _parse_field(spec: Any, name: Optional[str] = None) -> FieldDescriptor:
    # 簡易記法: 型ヒント文字列のみ
    if not isinstance(spec, dict):
        return FieldDescriptor(name=name, type_hint=str(spec))

    return FieldDescriptor(
        name=spec.get(DeclField.NAME, name),
        type_hint=str(spec.get(DeclField.TYPE, "")),
        borrowed=bool(spec.get(DeclField.BORROWED, False)),
        from_str=spec.get(DeclField.FROM_STR),
        neutral=bool(spec.get(DeclField.NEUTRAL, True)),
    )


def _parse_annotations(spec: Any) -> List[AnnotationEntry]:
    """
    アノテーションブロック群を出現順に平坦化する。
    単一ブロック（辞書）も、ブロックのリストも受け付ける。
    """
    if spec is None:
        return []
    blocks = [spec] if isinstance(spec, dict) else spec
    if not isinstance(blocks, list):
        raise ValueError(f"'{DeclField.ANNOTATIONS}' must be a mapping or a list of mappings")

    entries: List[AnnotationEntry] = []
    for block in blocks:
        if not isinstance(block, dict):
            raise ValueError(f"Annotation block must be a mapping, got {type(block).__name__}")
        entries.extend(entries_from_mapping(block))
    return entries


def _parse_capabilities(spec: Any, enum_name: str, source_name: Optional[str]) -> List[Capability]:
    items = [spec] if isinstance(spec, str) else spec
    if not isinstance(items, list):
        _fail(f"'{DeclField.DERIVE}' of '{enum_name}' must be a list", source_name)

    capabilities: List[Capability] = []
    for item in items:
        try:
            capabilities.append(Capability(item))
        except ValueError:
            _fail(
                f"Unknown capability '{item}' for '{enum_name}'. "
                f"Allowed: {[c.value for c in Capability]}",
                source_name,
            )
    return capabilities


def _fail(message: str, source_name: Optional[str] = None) -> NoReturn:
    raise EnumCompilationError(
        message,
        stage=STAGE,
        kind=ErrorKind.INVALID_DECLARATION,
        location=SourceLocation(file=source_name) if source_name else None,
    )
