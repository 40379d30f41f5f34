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

from typing import Any, Dict, Iterable
from pydantic import ValidationError

from enumkit.types import ArtifactBundle, Capability, EnumDescriptor, ErrorKind
from ..exceptions import EnumCompilationError

STAGE = "Assembler"

def assemble(
    descriptor: EnumDescriptor,
    capabilities: Iterable[Capability],
    artifacts: Dict[str, Any],
) -> ArtifactBundle:
    """
    各ジェネレータの生成物を ArtifactBundle (Pydantic Model) にまとめて確定する。
    最終的な型チェックを行い、ホストへ引き渡せる形にする。

    Args:
        descriptor: 検証済みメタデータモデル
        capabilities: 要求された派生機能
        artifacts: スロット名 (parse/serialize/iterate/messages/properties) -> 生成物

    Returns:
        ArtifactBundle: 生成物一式

    Raises:
        EnumCompilationError: バリデーション失敗時
    """
    try:
        return ArtifactBundle(
            enum_name=descriptor.name,
            capabilities=list(dict.fromkeys(capabilities)),
            variants=descriptor.variant_names,
            **artifacts,
        )
    except ValidationError as e:
        raise EnumCompilationError(
            f"Assembly failed: {str(e)}",
            stage=STAGE,
            kind=ErrorKind.INTERNAL_ERROR,
            location=descriptor.location,
            enum_name=descriptor.name,
        ) from e
