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

from typing import Optional

from enumkit.types import VariantDescriptor, VariantTemplate

def make_template(variant: VariantDescriptor, capture: Optional[int] = None) -> VariantTemplate:
    """バリアントのタグと形状のみを写したテンプレートを作る（フィールド値は持たない）"""
    return VariantTemplate(
        variant=variant.name,
        shape=variant.shape,
        fields=[f.model_copy() for f in variant.fields],
        capture=capture,
    )
