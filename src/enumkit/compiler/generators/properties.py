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

from enumkit.types import EnumDescriptor, PropertyArtifact

def generate(descriptor: EnumDescriptor) -> PropertyArtifact:
    """プロパティを持つバリアントのみを載せた2段テーブル (variant -> key -> value) を作る"""
    table = {
        variant.name: dict(variant.properties)
        for variant in descriptor.variants
        if variant.properties
    }
    return PropertyArtifact(enum_name=descriptor.name, table=table)
