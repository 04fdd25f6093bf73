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

from enum import Enum, EnumMeta
from typing import TypeVar

T = TypeVar("T", bound="StrEnum")


class StrEnumMeta(EnumMeta):
    def _name_lookup(cls, value: str) -> str | None:
        """
        Resolve `value` to a member name, matching names first and then the
        members' string values, both case-insensitively. None if no match.
        """
        if value in cls._member_map_:
            return value
        wanted = value.upper()
        for name in cls._member_map_:
            if name.upper() == wanted:
                return name
        for name, member in cls._member_map_.items():
            if str(member.value).upper() == wanted:
                return name
        return None

    def __contains__(cls, value: object) -> bool:
        if isinstance(value, str):
            return cls._name_lookup(value) is not None
        return isinstance(value, cls)


class StrEnum(Enum, metaclass=StrEnumMeta):
    """
    An Enum whose members can be looked up, case-insensitively, either by name
    or by their string value (typically the code used by the query engine).
    """

    @classmethod
    def coerce(cls: type[T], value: str | T) -> T:
        """
        Return the member matching `value`, which can be a member already,
        a member name or a member value (case-insensitive).

        Raises:
            ValueError: if nothing matches.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = cls._name_lookup(value)
            if name is not None:
                return cls[name]
        raise ValueError(
            f"Invalid value '{value}' for {cls.__name__}. "
            f"Allowed values are: {[e.value for e in cls]}"
        )
