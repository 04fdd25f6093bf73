# Copyright DataStax, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Statement:
    """
    A query as submitted to the engine: its text and its parameters.

    Attributes:
        text: the query text.
        parameters: a mapping of parameter names to values. Defaults to empty.
    """

    text: str
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        if self.parameters:
            return f'{self.__class__.__name__}("{self.text}", {dict(self.parameters)})'
        return f'{self.__class__.__name__}("{self.text}")'
