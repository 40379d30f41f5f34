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

from .constants import (
    TRUE_LITERAL,
    FALSE_LITERAL,
    DEBUG_ENV_VAR,
    DEBUG_ALL_TARGETS,
    ITERATOR_TYPE_SUFFIX,
    STRING_CONSTRUCTIBLE_HINTS,
    UNSIGNED_INT_MAX,
    RESERVED_MEMBER_NAMES,
)
from .enums import (
    AttrArity,
    AttrKey,
    DeclField,
    VariantShape,
    Capability,
    SerializeForm,
    ErrorKind,
    ParseErrorKind,
)
from .ir import (
    SourceLocation,
    FieldDescriptor,
    AnnotationEntry,
    RawVariant,
    RawEnum,
    VariantDescriptor,
    EnumDescriptor,
)
from .artifacts import (
    VariantTemplate,
    ParseArm,
    ParseMatch,
    ParseArtifact,
    SerializeArtifact,
    IterArtifact,
    MessageArtifact,
    PropertyArtifact,
    ArtifactBundle,
)
