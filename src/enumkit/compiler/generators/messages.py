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

from enumkit.types import EnumDescriptor, MessageArtifact

def generate(descriptor: EnumDescriptor) -> MessageArtifact:
    """
    message / detailed_message / serializations の参照テーブルを作る。
    参照はタグのみで行い、フィールド値は見ない。
    """
    messages: Dict[str, str] = {}
    detailed: Dict[str, str] = {}
    serializations: Dict[str, List[str]] = {}

    for variant in descriptor.variants:
        if variant.message is not None:
            messages[variant.name] = variant.message
        # detailed_message は parse 時点で message へのフォールバックが解決済み
        if variant.detailed_message is not None:
            detailed[variant.name] = variant.detailed_message
        serializations[variant.name] = list(variant.serializations)

    return MessageArtifact(
        enum_name=descriptor.name,
        messages=messages,
        detailed_messages=detailed,
        serializations=serializations,
    )
