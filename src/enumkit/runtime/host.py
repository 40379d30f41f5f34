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

import inspect
import logging
import sys
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

from enumkit.types import (
    AnnotationEntry,
    ArtifactBundle,
    Capability,
    RawEnum,
    RawVariant,
    RESERVED_MEMBER_NAMES,
    SourceLocation,
    VariantShape,
)
from enumkit.compiler.core import compile_enum
from enumkit.compiler.pipeline.annotations import entries_from_mapping

from . import fields, splice

logger = logging.getLogger(__name__)


class VariantDeclaration:
    """
    クラス本体に書かれたバリアント宣言。
    SumType のサブクラス定義時に RawVariant へ変換され、バリアント型に置き換えられる。
    """

    def __init__(
        self,
        shape: VariantShape,
        field_types: List[Tuple[Optional[str], Any]],
        location: Optional[SourceLocation] = None,
    ):
        self.shape = shape
        self.field_types = field_types
        self.location = location
        self.annotations: List[AnnotationEntry] = []

    def annotate(self, **entries: Any) -> "VariantDeclaration":
        """
        アノテーションを追加する。複数回呼ぶと宣言順に連結される。
          variant().annotate(serialize=["red", "r"], message="Red")
          variant().annotate(props={"Weight": 10})
        """
        self.annotations.extend(entries_from_mapping(entries))
        return self

    def to_raw(self, name: str) -> RawVariant:
        return RawVariant(
            name=name,
            shape=self.shape,
            fields=[fields.describe(tp, name=field_name) for field_name, tp in self.field_types],
            annotations=list(self.annotations),
            location=self.location,
        )


def variant(*field_types: Any, **named_field_types: Any) -> VariantDeclaration:
    """
    バリアントを宣言する。
      variant()                -> unit
      variant(int, str)        -> tuple
      variant(range=int)       -> struct
    """
    if field_types and named_field_types:
        raise TypeError("A variant cannot mix positional (tuple) and named (struct) fields")

    if named_field_types:
        shape = VariantShape.STRUCT
        declared = list(named_field_types.items())
    elif field_types:
        shape = VariantShape.TUPLE
        declared = [(None, tp) for tp in field_types]
    else:
        shape = VariantShape.UNIT
        declared = []

    return VariantDeclaration(shape, declared, location=_caller_location())


class SumType:
    """
    タグ付き和型の基底クラス。
    サブクラス定義時に宣言をコンパイルし、要求された派生機能をメソッドとして差し込む。

    Example:
        class Color(SumType, derive=[Capability.ENUM_STRING, Capability.TO_STRING]):
            Red = variant().annotate(serialize=["red", "r"])
            Blue = variant(int)
    """

    __variants__: ClassVar[Dict[str, type]] = {}
    __bundle__: ClassVar[Optional[ArtifactBundle]] = None

    _variant_name: ClassVar[Optional[str]] = None
    _shape: ClassVar[VariantShape] = VariantShape.UNIT
    _field_names: ClassVar[Tuple[Optional[str], ...]] = ()
    _field_types: ClassVar[Tuple[Any, ...]] = ()

    def __init_subclass__(cls, derive: Iterable[Any] = (), **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("_is_variant", False):
            return

        declarations = [
            (name, decl) for name, decl in cls.__dict__.items()
            if isinstance(decl, VariantDeclaration)
        ]
        for name, decl in declarations:
            if _is_reserved(name):
                raise TypeError(f"'{name}' cannot be used as a variant name of {cls.__name__}")
            for field_name, _ in decl.field_types:
                if field_name is not None and _is_reserved(field_name):
                    raise TypeError(
                        f"'{field_name}' cannot be used as a field name of {cls.__name__}.{name}"
                    )

        raw_enum = RawEnum(
            name=cls.__name__,
            variants=[decl.to_raw(name) for name, decl in declarations],
            capabilities=[Capability(c) for c in derive],
            location=_class_location(cls),
        )
        bundle = compile_enum(raw_enum)

        variant_types: Dict[str, type] = {}
        for name, decl in declarations:
            variant_type = _make_variant_type(cls, name, decl)
            variant_types[name] = variant_type
            if decl.shape == VariantShape.UNIT:
                setattr(cls, name, variant_type._fabricate())
            else:
                setattr(cls, name, variant_type)

        cls.__variants__ = variant_types
        cls.__bundle__ = bundle
        splice.attach(cls, bundle)

    def __init__(self, *args: Any, **kwargs: Any):
        cls = type(self)
        if cls._variant_name is None:
            raise TypeError(f"{cls.__name__} is a sum type; construct one of its variants instead")
        if cls._shape == VariantShape.UNIT:
            raise TypeError(f"Unit variant {self._qualified_name()} is a singleton and cannot be called")
        object.__setattr__(self, "_values", cls._bind(args, kwargs))

    @classmethod
    def _bind(cls, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Tuple[Any, ...]:
        if cls._shape == VariantShape.STRUCT:
            if args:
                raise TypeError(f"Struct variant {cls.__qualname__} takes keyword arguments only")
            missing = [n for n in cls._field_names if n not in kwargs]
            unknown = [k for k in kwargs if k not in cls._field_names]
            if missing or unknown:
                raise TypeError(
                    f"{cls.__qualname__}() field mismatch: missing={missing}, unknown={unknown}"
                )
            return tuple(kwargs[n] for n in cls._field_names)

        if kwargs:
            raise TypeError(f"Tuple variant {cls.__qualname__} takes positional arguments only")
        if len(args) != len(cls._field_types):
            raise TypeError(
                f"{cls.__qualname__}() takes {len(cls._field_types)} positional arguments "
                f"but {len(args)} were given"
            )
        return tuple(args)

    @classmethod
    def _fabricate(cls, capture: Optional[int] = None, text: Optional[str] = None) -> Any:
        """
        中立値で埋めたインスタンスを作る。capture 位置のフィールドのみ text から構築する。
        unit バリアントは常に同一のインスタンスを返す。
        """
        existing = cls.__dict__.get("_singleton")
        if existing is not None:
            return existing

        values = tuple(
            fields.from_text(tp, text) if index == capture else fields.neutral_value(tp)
            for index, tp in enumerate(cls._field_types)
        )
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_values", values)
        if cls._shape == VariantShape.UNIT:
            cls._singleton = instance
        return instance

    @property
    def variant_name(self) -> str:
        return type(self)._variant_name

    @property
    def payload(self) -> Tuple[Any, ...]:
        return self._values

    def __getitem__(self, index: int) -> Any:
        if type(self)._shape != VariantShape.TUPLE:
            raise TypeError(f"{self._qualified_name()} is not a tuple variant")
        return self._values[index]

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("_"):
            field_names = type(self)._field_names
            if name in field_names:
                return self._values[field_names.index(name)]
        raise AttributeError(f"{type(self).__qualname__!s} has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self._qualified_name()} is immutable")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SumType):
            return NotImplemented
        return type(self) is type(other) and self._values == other._values

    def __hash__(self) -> int:
        return hash((type(self), self._values))

    def __repr__(self) -> str:
        cls = type(self)
        if cls._shape == VariantShape.UNIT:
            return self._qualified_name()
        if cls._shape == VariantShape.STRUCT:
            inner = ", ".join(f"{n}={v!r}" for n, v in zip(cls._field_names, self._values))
        else:
            inner = ", ".join(repr(v) for v in self._values)
        return f"{self._qualified_name()}({inner})"

    def _qualified_name(self) -> str:
        cls = type(self)
        return f"{cls._enum_type.__name__}.{cls._variant_name}"


def _make_variant_type(enum_type: type, name: str, decl: VariantDeclaration) -> type:
    namespace = {
        "_is_variant": True,
        "_enum_type": enum_type,
        "_variant_name": name,
        "_shape": decl.shape,
        "_field_names": tuple(n for n, _ in decl.field_types),
        "_field_types": tuple(tp for _, tp in decl.field_types),
        "__module__": enum_type.__module__,
        "__qualname__": f"{enum_type.__qualname__}.{name}",
    }
    # 変更可能な値 (list, dict など) を保持するバリアントはハッシュ不可
    if not all(fields.is_hashable(tp) for _, tp in decl.field_types):
        namespace["__hash__"] = None
    return type(name, (enum_type,), namespace)


def _is_reserved(name: str) -> bool:
    return name in RESERVED_MEMBER_NAMES or name.startswith("_")


def _caller_location() -> Optional[SourceLocation]:
    # variant() の呼び出し元 (クラス本体)
    frame = inspect.currentframe()
    caller = frame.f_back.f_back if frame is not None and frame.f_back is not None else None
    if caller is None:
        return None
    return SourceLocation(file=caller.f_code.co_filename, line=caller.f_lineno)


def _class_location(cls: type) -> SourceLocation:
    module = sys.modules.get(cls.__module__)
    return SourceLocation(file=getattr(module, "__file__", None) or cls.__module__)
