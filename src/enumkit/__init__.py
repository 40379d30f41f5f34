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

from enumkit.types import Capability, ErrorKind, RawEnum, ArtifactBundle
from enumkit.compiler import (
    BatchResult,
    EnumCompilationError,
    compile_batch,
    compile_enum,
    compile_source,
)
from enumkit.runtime import ParseError, SumType, VariantIterator, variant

# YAML ソースからのコンパイル
compile = compile_source
