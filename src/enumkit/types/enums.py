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

from enum import StrEnum

class AttrArity(StrEnum):
    """
    アノテーションキーごとの値の受け取り方
    """
    FLAG = "FLAG"       # "true" / "false" を1回だけ
    SINGLE = "SINGLE"   # 文字列値を1回だけ
    MULTI = "MULTI"     # 文字列値を何度でも（集合として蓄積）
    BLOCK = "BLOCK"     # ネストした key/value ブロック（マージ）

class AttrKey(StrEnum):
    """
    バリアントに付与できるアノテーションキーの語彙
    """
    # --- String Conversion ---
    SERIALIZE = "serialize"
    TO_STRING = "to_string"

    # --- Flags ---
    DEFAULT = "default"
    DISABLED = "disabled"

    # --- Messages ---
    MESSAGE = "message"
    DETAILED_MESSAGE = "detailed_message"

    # --- Properties ---
    PROPS = "props"

    @property
    def arity(self) -> AttrArity:
        if self in (AttrKey.DEFAULT, AttrKey.DISABLED):
            return AttrArity.FLAG
        elif self in (AttrKey.TO_STRING, AttrKey.MESSAGE, AttrKey.DETAILED_MESSAGE):
            return AttrArity.SINGLE
        elif self == AttrKey.SERIALIZE:
            return AttrArity.MULTI
        elif self == AttrKey.PROPS:
            return AttrArity.BLOCK
        raise ValueError(f"Unknown arity for AttrKey: {self}")

class VariantShape(StrEnum):
    """
    バリアントの形状。フィールドの値ではなく、数と型ヒントのみが意味を持つ
    """
    UNIT = "unit"       # Red
    STRUCT = "struct"   # Green { range: int }
    TUPLE = "tuple"     # Blue(int)

class Capability(StrEnum):
    """
    列挙型に対して要求できる派生機能
    """
    ENUM_STRING = "EnumString"      # parse-from-string
    TO_STRING = "ToString"          # serialize (owned)
    AS_REF_STR = "AsRefStr"         # serialize (borrowed)
    ENUM_ITER = "EnumIter"          # iterate-all-variants
    ENUM_MESSAGE = "EnumMessage"    # message lookup
    ENUM_PROPERTY = "EnumProperty"  # property lookup

class DeclField(StrEnum):
    """
    YAML 宣言（列挙型/バリアント/フィールド）を構成する予約済みキー
    """
    # Enumeration
    ENUM = "enum"
    ENUMS = "enums"
    DERIVE = "derive"
    VARIANTS = "variants"

    # Variant
    SHAPE = "shape"
    FIELDS = "fields"
    ANNOTATIONS = "strum"

    # Field
    TYPE = "type"
    NAME = "name"
    BORROWED = "borrowed"
    FROM_STR = "from_str"
    NEUTRAL = "neutral"

class SerializeForm(StrEnum):
    OWNED = "owned"
    BORROWED = "borrowed"

class ErrorKind(StrEnum):
    """
    生成時に検出されるエラーの種別
    """
    # --- Annotation Parser ---
    UNKNOWN_ATTRIBUTE = "UnknownAttribute"
    INVALID_FLAG_VALUE = "InvalidFlagValue"
    DUPLICATE_ATTRIBUTE = "DuplicateAttribute"
    MALFORMED_ATTRIBUTE = "MalformedAttribute"
    DUPLICATE_PROPERTY_KEY = "DuplicatePropertyKey"

    # --- Whole Enumeration ---
    EMPTY_ENUMERATION = "EmptyEnumeration"
    DUPLICATE_VARIANT_NAME = "DuplicateVariantName"
    DUPLICATE_SERIALIZATION = "DuplicateSerialization"
    MULTIPLE_DEFAULT_VARIANTS = "MultipleDefaultVariants"
    INVALID_DEFAULT_VARIANT_SHAPE = "InvalidDefaultVariantShape"

    # --- Generators ---
    UNBOUNDED_LIFETIME_NOT_SUPPORTED = "UnboundedLifetimeNotSupported"
    MISSING_NEUTRAL_VALUE = "MissingNeutralValue"

    # --- Front End / Internal ---
    INVALID_DECLARATION = "InvalidDeclaration"
    INTERNAL_ERROR = "InternalError"

class ParseErrorKind(StrEnum):
    """
    生成された parse 関数が実行時に返す唯一のエラー
    """
    VARIANT_NOT_FOUND = "VariantNotFound"
