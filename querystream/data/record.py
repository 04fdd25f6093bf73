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

from typing import Any, Iterator, Sequence


class Record:
    """
    One row of a result: an ordered, immutable pairing of field keys and values.

    All records of one result share the very same `keys` tuple. Values can be
    looked up by position or, as long as keys are unique, by key.

    Example:
        >>> record = Record(("n", "name"), (1, "Alice"))
        >>> record["name"]
        'Alice'
        >>> record[0]
        1
        >>> record.data()
        {'n': 1, 'name': 'Alice'}
    """

    __slots__ = ("_keys", "_values")

    _keys: tuple[str, ...]
    _values: tuple[Any, ...]

    def __init__(self, keys: Sequence[str], values: Sequence[Any]) -> None:
        if len(keys) != len(values):
            raise ValueError(
                f"A record needs as many values as keys (got {len(keys)} keys "
                f"and {len(values)} values)."
            )
        self._keys = keys if isinstance(keys, tuple) else tuple(keys)
        self._values = tuple(values)

    def __repr__(self) -> str:
        _fields = ", ".join(f"{k}={v!r}" for k, v in zip(self._keys, self._values))
        return f"{self.__class__.__name__}({_fields})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Record):
            return self._keys == other._keys and self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._keys, self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, int):
            return self._values[key]
        return self._values[self.index(key)]

    def keys(self) -> tuple[str, ...]:
        """The field keys, in order. Shared with all records of the result."""
        return self._keys

    def values(self) -> tuple[Any, ...]:
        return self._values

    def items(self) -> list[tuple[str, Any]]:
        return list(zip(self._keys, self._values))

    def index(self, key: str) -> int:
        """
        The position of a key in this record.

        Raises:
            KeyError: if the key is not one of the record keys.
        """
        try:
            return self._keys.index(key)
        except ValueError:
            raise KeyError(key) from None

    def contains_key(self, key: str) -> bool:
        return key in self._keys

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for a key, or `default` if the key is not found."""
        if key in self._keys:
            return self._values[self._keys.index(key)]
        return default

    def data(self) -> dict[str, Any]:
        """Return the record as a dictionary of keys to values."""
        return dict(zip(self._keys, self._values))
