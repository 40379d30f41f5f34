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
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from enumkit.types import (
    ArtifactBundle,
    Capability,
    EnumDescriptor,
    ErrorKind,
    RawEnum,
    SerializeForm,
)
from enumkit.config import get_settings
from enumkit import utils

from .exceptions import EnumCompilationError
from .pipeline import parser, annotations, assembler
from .rules import uniqueness, shape
from .generators import strings, iteration, messages, properties

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """
    複数の列挙型をまとめて処理した結果。
    ある列挙型の失敗は他の列挙型の生成に影響しない。

    Attributes:
        bundles: 生成に成功した列挙型名 -> 生成物一式
        errors: 生成に失敗した列挙型名 -> エラー
    """

    bundles: Dict[str, ArtifactBundle] = field(default_factory=dict)
    errors: Dict[str, EnumCompilationError] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        """Whether every enumeration compiled."""
        return len(self.errors) == 0

    def raise_for_errors(self) -> None:
        """最初に記録されたエラーを送出する（全件成功なら何もしない）。"""
        for error in self.errors.values():
            raise error


def compile_enum(raw_enum: RawEnum) -> ArtifactBundle:
    """
    列挙型宣言をコンパイルし、要求された派生機能の生成物一式を作る。

    Pipeline Sequence:
      1. Annotation Parsing: RawEnum -> EnumDescriptor
      2. Enumeration Validation: 一意性 / default 形状の大域検証
      3. Generation: Capability ごとのジェネレータ実行
      4. Assemble: artifacts -> ArtifactBundle (Pydantic Model)

    いずれかの工程で失敗した場合、その列挙型の生成物は一切出力しない。

    Args:
        raw_enum (RawEnum): ホストから受け取った列挙型宣言

    Returns:
        ArtifactBundle: 生成物一式

    Raises:
        EnumCompilationError: コンパイル失敗時に送出
    """
    # 0. Input Guard
    if not raw_enum.variants:
        raise EnumCompilationError(
            f"Enumeration '{raw_enum.name}' must declare at least one variant",
            stage="InputGuard",
            kind=ErrorKind.EMPTY_ENUMERATION,
            location=raw_enum.location,
            enum_name=raw_enum.name,
        )

    try:
        # Step 1: Annotation Parsing
        # バリアント単位のアノテーション集約 (Fail Fast)
        logger.debug(f"[{raw_enum.name}] Starting Phase 1: Annotation Parsing")
        descriptor = annotations.build(raw_enum)

        # Step 2: Enumeration Validation
        # 全バリアントを見てはじめて判定できる制約
        logger.debug(f"[{raw_enum.name}] Starting Phase 2: Enumeration Validation")
        uniqueness.validate(descriptor)
        shape.validate(descriptor)

        # Step 3: Generation
        logger.debug(f"[{raw_enum.name}] Starting Phase 3: Generation")
        artifacts = _generate(descriptor, raw_enum.capabilities)

        # Step 4: Assembly
        logger.debug(f"[{raw_enum.name}] Starting Phase 4: Assembly")
        bundle = assembler.assemble(descriptor, raw_enum.capabilities, artifacts)

        _debug_dump(bundle)

        logger.info(
            f"Enum compilation completed successfully. Enum: {bundle.enum_name}, "
            f"Capabilities: {[c.value for c in bundle.capabilities]}"
        )
        return bundle

    except EnumCompilationError as e:
        # 既知のコンパイルエラーはそのまま通過させる
        if e.enum_name is None:
            e.enum_name = raw_enum.name
        raise
    except Exception as e:
        # 予期せぬ内部エラー（実装バグやライブラリエラー）をラップする
        logger.error(f"Unexpected compilation error: {str(e)}", exc_info=True)
        raise EnumCompilationError(
            message=f"Internal compilation error: {str(e)}",
            stage="Unknown",
            kind=ErrorKind.INTERNAL_ERROR,
            location=raw_enum.location,
            enum_name=raw_enum.name,
        ) from e


def compile_batch(raw_enums: Iterable[RawEnum]) -> BatchResult:
    """
    複数の列挙型を独立にコンパイルする。失敗は列挙型単位で記録し、処理は継続する。
    """
    result = BatchResult()
    for raw_enum in raw_enums:
        if raw_enum.name in result.bundles or raw_enum.name in result.errors:
            result.errors[raw_enum.name] = EnumCompilationError(
                f"Enumeration '{raw_enum.name}' is declared more than once",
                stage="InputGuard",
                kind=ErrorKind.INVALID_DECLARATION,
                location=raw_enum.location,
                enum_name=raw_enum.name,
            )
            result.bundles.pop(raw_enum.name, None)
            continue

        try:
            result.bundles[raw_enum.name] = compile_enum(raw_enum)
        except EnumCompilationError as e:
            logger.warning(f"Skipped '{raw_enum.name}': {e}")
            result.errors[raw_enum.name] = e
    return result


def compile_source(source: str, source_name: Optional[str] = None) -> BatchResult:
    """
    YAML形式の宣言ソースをパースし、含まれる全列挙型をコンパイルする。

    Raises:
        EnumCompilationError: ソース自体が不正な場合（個々の列挙型のエラーは BatchResult に記録）
    """
    if not source or not source.strip():
        raise EnumCompilationError(
            "Empty enum declaration source",
            stage="InputGuard",
            kind=ErrorKind.INVALID_DECLARATION,
        )

    logger.debug("Parsing enum declaration source")
    raw_enums = parser.parse(source, source_name=source_name)
    return compile_batch(raw_enums)


def _generate(descriptor: EnumDescriptor, capabilities: Iterable[Capability]) -> Dict[str, Any]:
    requested = set(capabilities)
    artifacts: Dict[str, Any] = {}

    if Capability.ENUM_STRING in requested:
        artifacts["parse"] = strings.generate_parse(descriptor)

    forms = []
    if Capability.TO_STRING in requested:
        forms.append(SerializeForm.OWNED)
    if Capability.AS_REF_STR in requested:
        forms.append(SerializeForm.BORROWED)
    if forms:
        artifacts["serialize"] = strings.generate_serialize(descriptor, forms)

    if Capability.ENUM_ITER in requested:
        artifacts["iterate"] = iteration.generate(descriptor)

    if Capability.ENUM_MESSAGE in requested:
        artifacts["messages"] = messages.generate(descriptor)

    if Capability.ENUM_PROPERTY in requested:
        artifacts["properties"] = properties.generate(descriptor)

    return artifacts


def _debug_dump(bundle: ArtifactBundle) -> None:
    """
    ENUMKIT_DEBUG が対象とする列挙型の生成物を YAML でログに出す。
    診断用のサイドチャネルであり、失敗しても生成結果には影響させない。
    """
    if not get_settings().should_dump(bundle.enum_name):
        return

    try:
        dump_str = utils.dump_bundle_to_spec(bundle)
        logger.info(f"Generated artifacts for '{bundle.enum_name}':\n{dump_str}")
    except Exception as e:
        logger.warning(f"Failed to dump artifacts for '{bundle.enum_name}': {e}")
