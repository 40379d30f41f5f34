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

from enumkit.types import ArtifactBundle


def dump_bundle_to_spec(bundle: ArtifactBundle) -> str:
    """
    ArtifactBundle を、デバッグダンプやテスト仕様書で使う YAML 文字列に変換します。

    Args:
        bundle (ArtifactBundle): 変換元の生成物一式

    Returns:
        str: 生成物の YAML 表現（未生成のスロットは出力しない）
    """
    data = bundle.model_dump(mode="json", exclude_none=True)

    # allow_unicode=True: メッセージ中の日本語をそのまま出力
    # sort_keys=False: 宣言順（バリアント順）を維持
    return yaml.dump(data, allow_unicode=True, sort_keys=False, default_flow_style=False)


def load_bundle_from_spec(yaml_str: str) -> ArtifactBundle:
    """
    dump_bundle_to_spec で出力した YAML 文字列から ArtifactBundle を復元します。
    """
    data = yaml.safe_load(yaml_str)
    if not data:
        raise ValueError("Empty YAML string provided")
    if not isinstance(data, dict):
        raise ValueError(f"Bundle YAML root must be a dictionary, got {type(data).__name__}")

    return ArtifactBundle.model_validate(data)
