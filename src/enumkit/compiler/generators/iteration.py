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

from enumkit.types import EnumDescriptor, IterArtifact, ITERATOR_TYPE_SUFFIX
from ..rules import shape
from .common import make_template

STAGE = "IterationGenerator"

def generate(descriptor: EnumDescriptor) -> IterArtifact:
    """
    全バリアントを宣言順に1つずつ列挙する生成物を作る。
    各要素の全フィールドは中立値で埋められるため、非所有参照を持つ列挙型は拒否する。

    Raises:
        EnumCompilationError: UnboundedLifetimeNotSupported
        EnumCompilationError: MissingNeutralValue
    """
    shape.require_fabricable(descriptor, stage=STAGE)
    shape.require_neutral(descriptor, stage=STAGE)

    return IterArtifact(
        enum_name=descriptor.name,
        iterator_name=f"{descriptor.name}{ITERATOR_TYPE_SUFFIX}",
        items=[make_template(variant) for variant in descriptor.variants],
    )
