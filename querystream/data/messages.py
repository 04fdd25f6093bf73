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
from typing import Any, Union


@dataclass(frozen=True)
class RecordMessage:
    """
    A message carrying the values of one record of the streaming phase.

    Attributes:
        fields: the record values, in the same order as the result keys.
    """

    fields: tuple[Any, ...]

    def __init__(self, fields: Any) -> None:
        object.__setattr__(self, "fields", tuple(fields))


@dataclass(frozen=True)
class SuccessMessage:
    """
    A message closing one response successfully. Its metadata carries the
    field names (for the metadata phase) or the summary fragments (for the
    streaming phase).

    Attributes:
        metadata: the decoded metadata dictionary.
    """

    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FailureMessage:
    """
    A message reporting that the engine could not fulfill a request.

    Attributes:
        metadata: the decoded metadata, usually with "code" and "message".
    """

    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class IgnoredMessage:
    """
    A message signaling that a request was skipped by the engine, typically
    because an earlier request of the same exchange failed.
    """

    pass


Message = Union[RecordMessage, SuccessMessage, FailureMessage, IgnoredMessage]
