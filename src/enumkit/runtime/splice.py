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
from typing import Any, Iterable, Optional, Tuple

from enumkit.types import (
    ArtifactBundle,
    IterArtifact,
    MessageArtifact,
    ParseArtifact,
    PropertyArtifact,
    SerializeArtifact,
    SerializeForm,
    VariantTemplate,
)

from .errors import ParseError

logger = logging.getLogger(__name__)


class VariantIterator:
    """
    全バリアントを宣言順に1度ずつ返すイテレータ。
    列挙型ごとに `<Enum>Iter` という名前のサブクラスが作られる。
    """

    def __init__(self, enum_type: type, items: Iterable[VariantTemplate]):
        self._enum_type = enum_type
        self._items: Tuple[VariantTemplate, ...] = tuple(items)
        self._index = 0

    def __iter__(self) -> "VariantIterator":
        return self

    def __next__(self) -> Any:
        if self._index >= len(self._items):
            raise StopIteration
        template = self._items[self._index]
        self._index += 1
        return instantiate(self._enum_type, template)

    def __len__(self) -> int:
        return len(self._items) - self._index


def instantiate(enum_type: type, template: VariantTemplate, captured: Optional[str] = None) -> Any:
    """テンプレートからバリアントのインスタンスを作る"""
    variant_type = enum_type.__variants__[template.variant]
    return variant_type._fabricate(capture=template.capture, text=captured)


def attach(enum_type: type, bundle: ArtifactBundle) -> None:
    """
    生成物を列挙型のメソッドとして差し込む。
    要求されなかった Capability のメソッドは追加しない。
    """
    if bundle.parse is not None:
        _attach_parse(enum_type, bundle.parse)
    if bundle.serialize is not None:
        _attach_serialize(enum_type, bundle.serialize)
    if bundle.iterate is not None:
        _attach_iterate(enum_type, bundle.iterate)
    if bundle.messages is not None:
        _attach_messages(enum_type, bundle.messages)
    if bundle.properties is not None:
        _attach_properties(enum_type, bundle.properties)

    logger.debug(f"Attached capabilities to '{enum_type.__name__}': {[c.value for c in bundle.capabilities]}")


def _attach_parse(enum_type: type, artifact: ParseArtifact) -> None:
    def from_str(cls, text: str):
        if not isinstance(text, str):
            raise TypeError(f"{enum_type.__name__}.from_str() expects str, got {type(text).__name__}")
        match = artifact.resolve(text)
        if match is None:
            raise ParseError(enum_name=enum_type.__name__, text=text)
        return instantiate(enum_type, match.template, match.captured)

    enum_type.from_str = classmethod(from_str)


def _attach_serialize(enum_type: type, artifact: SerializeArtifact) -> None:
    def render(self) -> str:
        return artifact.render(self.variant_name)

    if SerializeForm.OWNED in artifact.forms:
        enum_type.to_string = render
        enum_type.__str__ = render
    if SerializeForm.BORROWED in artifact.forms:
        enum_type.as_ref = render


def _attach_iterate(enum_type: type, artifact: IterArtifact) -> None:
    iterator_type = type(
        artifact.iterator_name,
        (VariantIterator,),
        {"__module__": enum_type.__module__, "__qualname__": artifact.iterator_name},
    )

    def iter_(cls) -> VariantIterator:
        return iterator_type(enum_type, artifact.items)

    enum_type.iter = classmethod(iter_)
    enum_type.__iterator_type__ = iterator_type


def _attach_messages(enum_type: type, artifact: MessageArtifact) -> None:
    def get_message(self) -> Optional[str]:
        return artifact.get_message(self.variant_name)

    def get_detailed_message(self) -> Optional[str]:
        return artifact.get_detailed_message(self.variant_name)

    def get_serializations(self) -> Tuple[str, ...]:
        return tuple(artifact.get_serializations(self.variant_name))

    enum_type.get_message = get_message
    enum_type.get_detailed_message = get_detailed_message
    enum_type.get_serializations = get_serializations


def _attach_properties(enum_type: type, artifact: PropertyArtifact) -> None:
    def get_str(self, key: str) -> Optional[str]:
        return artifact.get_str(self.variant_name, key)

    def get_int(self, key: str) -> Optional[int]:
        return artifact.get_int(self.variant_name, key)

    def get_bool(self, key: str) -> Optional[bool]:
        return artifact.get_bool(self.variant_name, key)

    enum_type.get_str = get_str
    enum_type.get_int = get_int
    enum_type.get_bool = get_bool
