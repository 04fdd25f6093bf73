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

from dataclasses import dataclass


class QueryStreamException(Exception):
    """
    Any exception specific to querystream, such as:
      - a result read after it was consumed,
      - the query engine reporting a failure for a statement,
    but not, for instance,
      - an I/O error raised by the underlying connection.
    """

    pass


@dataclass
class CursorException(QueryStreamException):
    """
    A cursor operation cannot be invoked given the current state of the cursor.

    Attributes:
        text: a text message about the exception.
        cursor_state: a string description of the current state
            of the cursor. See `querystream.cursors.CursorState`.
    """

    text: str
    cursor_state: str

    def __init__(
        self,
        text: str,
        *,
        cursor_state: str,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.cursor_state = cursor_state


class ResultConsumedException(CursorException):
    """
    A read was attempted on a result that has already been consumed (closed).
    The records are gone: the only way to read them again is to re-run the query.
    """

    pass


@dataclass
class ResultFailedException(CursorException):
    """
    A read was attempted on a result whose connection raised an error while
    the result was streaming. The cursor stays failed from then on.

    Attributes:
        text: a text message about the exception.
        cursor_state: a string description of the current state of the cursor.
        cause: the exception originally raised while pulling from the connection.
    """

    cause: BaseException

    def __init__(
        self,
        text: str,
        *,
        cursor_state: str,
        cause: BaseException,
    ) -> None:
        super().__init__(text, cursor_state=cursor_state)
        self.cause = cause


class InvalidCursorStateException(CursorException):
    """
    An operation requiring the cursor to sit at (or before) its first record
    was invoked after records had already been consumed individually.
    """

    pass


class NoSuchRecordException(CursorException):
    """
    The result does not contain the record(s) an operation expected to find.
    """

    pass


class NoRecordException(NoSuchRecordException):
    """A `single()` was invoked on a result with no records at all."""

    pass


class TooManyRecordsException(NoSuchRecordException):
    """A `single()` was invoked on a result with more than one record."""

    pass


@dataclass
class UnsupportedOperationException(QueryStreamException):
    """
    The requested operation is not supported by this object.

    Attributes:
        text: a text message about the exception.
    """

    text: str

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text
