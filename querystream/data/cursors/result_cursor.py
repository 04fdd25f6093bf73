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

import logging
from typing import Any, Callable, Iterator, List, TypeVar, overload

import deprecation

from querystream.data.connection import Connection
from querystream.data.cursors.collectors import (
    PullAllResponseCollector,
    RunResponseCollector,
    StreamCollector,
    _StreamState,
)
from querystream.data.record import Record
from querystream.data.statement import Statement
from querystream.data.summary import ResultSummary
from querystream.exceptions import (
    InvalidCursorStateException,
    NoRecordException,
    ResultConsumedException,
    ResultFailedException,
    TooManyRecordsException,
    UnsupportedOperationException,
)
from querystream.utils.logging_tools import log_pump
from querystream.utils.str_enum import StrEnum

T = TypeVar("T")

logger = logging.getLogger(__name__)

REMOVE_DEPRECATION_NOTICE = (
    "Records cannot be removed from a result: this method always raises "
    "and only exists for iterator-interface completeness."
)


class CursorState(StrEnum):
    """
    This enum expresses the possible states for a `StatementResult`.

    Values:
        FRESH: no record consumed yet (records may already be buffered).
        STREAMING: some records consumed, more *can* still be yielded.
        EXHAUSTED: the stream is complete and every record was consumed.
        CLOSED: consumed/discarded. No record will ever be returned again.
        FAILED: the connection raised while streaming. Reads raise from now on.
    """

    FRESH = "fresh"
    STREAMING = "streaming"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"
    FAILED = "failed"


class StatementResult:
    """
    A lazy, single-pass cursor over the records of one statement, as streamed
    back by the query engine over a connection.

    The result is made of two responses: the metadata phase (field names)
    and the streaming phase (records, then a summary). Both are received
    only on demand: whenever a read needs something not yet buffered, the
    cursor pulls one message at a time off the connection, until it has what
    it needs. Each record can be read at most once.

    The result does not submit the statement itself: the submission layer
    wires `run_response_collector` and `pull_all_response_collector` into
    message routing (see `ResponseDispatcher.register_result`) before the
    request goes out.

    A result is meant for a single consumer: using one instance from several
    threads at once is not supported, and no locking is done.

    Example:
        >>> result = StatementResult(connection, Statement("MATCH (n) RETURN n.x AS x"))
        >>> dispatcher.register_result(result)
        >>> for record in result:
        ...     print(record["x"])
        ...
        1
        2
        >>> result.consume().counters.contains_updates
        False
    """

    _connection: Connection
    _statement: Statement
    _stream_state: _StreamState
    _run_response_collector: RunResponseCollector
    _pull_all_response_collector: PullAllResponseCollector
    _position: int
    _open: bool
    _failure: BaseException | None

    def __init__(self, connection: Connection, statement: Statement) -> None:
        self._connection = connection
        self._statement = statement
        self._stream_state = _StreamState()
        self._run_response_collector = RunResponseCollector(self._stream_state)
        self._pull_all_response_collector = PullAllResponseCollector(
            self._stream_state, statement
        )
        self._position = -1
        self._open = True
        self._failure = None

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}("{self._statement.text}", '
            f"{self.state.value}, "
            f"position: {self._position})"
        )

    def __iter__(self) -> Iterator[Record]:
        self._ensure_readable()
        return self

    def __next__(self) -> Record:
        record = self.next()
        if record is None:
            raise StopIteration
        return record

    @property
    def run_response_collector(self) -> StreamCollector:
        """The collector for the metadata-phase response."""
        return self._run_response_collector

    @property
    def pull_all_response_collector(self) -> StreamCollector:
        """The collector for the streaming-phase response."""
        return self._pull_all_response_collector

    @property
    def statement(self) -> Statement:
        return self._statement

    @property
    def position(self) -> int:
        """
        The index of the last record consumed through `next()`: -1 before
        the first record, then 0, 1, ... Never decreases.
        """
        return self._position

    @property
    def is_open(self) -> bool:
        """False once the result has been consumed, or has failed."""
        return self._open and self._failure is None

    @property
    def buffered_count(self) -> int:
        """
        The number of records currently in the local buffer. Reading this
        property never pulls messages from the connection.
        """
        return len(self._stream_state.buffer)

    @property
    def state(self) -> CursorState:
        """
        The current state of this cursor.

        Returns:
            a value in `querystream.cursors.CursorState`.
        """
        if self._failure is not None:
            return CursorState.FAILED
        if not self._open:
            return CursorState.CLOSED
        if self._stream_state.done and not self._stream_state.buffer:
            return CursorState.EXHAUSTED
        if self._position >= 0:
            return CursorState.STREAMING
        return CursorState.FRESH

    def _ensure_not_failed(self) -> None:
        if self._failure is not None:
            raise ResultFailedException(
                text="Result has failed while streaming.",
                cursor_state=CursorState.FAILED.value,
                cause=self._failure,
            ) from self._failure

    def _ensure_readable(self) -> None:
        self._ensure_not_failed()
        if not self._open:
            raise ResultConsumedException(
                text="Result has been consumed.",
                cursor_state=CursorState.CLOSED.value,
            )

    def _pump(self) -> None:
        """Receive exactly one message from the connection."""
        log_pump(logger, id(self), len(self._stream_state.buffer))
        try:
            self._connection.receive_one()
        except Exception as exc:
            self._failure = exc
            self._stream_state.buffer.clear()
            raise

    def _try_fetching(self) -> None:
        while not self._stream_state.buffer and not self._stream_state.done:
            self._pump()

    def _completed_summary(self) -> ResultSummary:
        # the streaming collector sets the summary before flagging done
        if self._stream_state.summary is None:
            raise RuntimeError("Result is complete but has no summary.")
        return self._stream_state.summary

    def keys(self) -> List[str]:
        """
        The field names of the result, in order.

        This pulls messages only until the metadata phase is complete, and can
        be called in any state once the keys are known (even after consuming).

        Returns:
            a list of strings, possibly empty.
        """
        while self._stream_state.keys is None and not self._stream_state.done:
            self._ensure_not_failed()
            self._pump()
        return list(self._stream_state.keys or ())

    def has_next(self) -> bool:
        """
        Whether at least one more record can be read.

        This method can pull messages from the connection while the buffer
        is empty and the stream is not complete. On a consumed result it
        always returns False.

        Returns:
            a boolean value of True if there is at least one further record
                available to consume; False otherwise.
        """
        self._ensure_not_failed()
        if not self._open:
            return False
        self._try_fetching()
        return len(self._stream_state.buffer) > 0

    def next(self) -> Record | None:
        """
        Consume and return the next record, advancing the position.

        Returns:
            the next Record, or None if the stream is exhausted.

        Raises:
            ResultConsumedException: if the result has been consumed.
        """
        self._ensure_readable()
        self._try_fetching()
        if self._stream_state.buffer:
            self._position += 1
            return self._stream_state.buffer.popleft()
        return None

    def peek(self) -> Record | None:
        """
        Return the next record without consuming it: the position is unchanged
        and the same record is returned by a subsequent `next()`.

        Returns:
            the next Record, or None if the stream is exhausted.

        Raises:
            ResultConsumedException: if the result has been consumed.
        """
        self._ensure_readable()
        self._try_fetching()
        if self._stream_state.buffer:
            return self._stream_state.buffer[0]
        return None

    def single(self) -> Record:
        """
        Return the one and only record of the result.

        After taking the record, the stream is checked for a further one. If
        there is one, it is left in the buffer (still readable with `next()`)
        and an error is raised.

        Raises:
            InvalidCursorStateException: if records were already consumed.
            ResultConsumedException: if the result has been consumed.
            NoRecordException: if the result has no records.
            TooManyRecordsException: if the result has more than one record.
        """
        if self._position >= 0:
            raise InvalidCursorStateException(
                text=(
                    "Cannot retrieve the single record, because other operations "
                    "have already consumed records (currently at position "
                    f"{self._position}). Avoid mixing `single` with calls to "
                    "`next`, `single`, `list` or iteration on the same result."
                ),
                cursor_state=self.state.value,
            )
        self._ensure_readable()
        first = self.next()
        if first is None:
            raise NoRecordException(
                text="Cannot retrieve a single record, because this result is empty.",
                cursor_state=self.state.value,
            )
        if self.has_next():
            raise TooManyRecordsException(
                text=(
                    "Expected a result with a single record, but this result "
                    "contains at least one more. Ensure the query returns only "
                    "one record."
                ),
                cursor_state=self.state.value,
            )
        return first

    @overload
    def list(self) -> List[Record]: ...

    @overload
    def list(self, mapper: Callable[[Record], T]) -> List[T]: ...

    def list(self, mapper: Callable[[Record], Any] | None = None) -> List[Any]:
        """
        Materialize all records into a list, optionally transforming each,
        then consume the result.

        This is only possible on a result whose records were not consumed
        individually before. Afterwards the result is closed.

        Args:
            mapper: an optional function applied to each record, in order.

        Returns:
            a list of records (or of whatever `mapper` returns), in arrival
                order. Empty if the result has no records.

        Raises:
            ResultConsumedException: if the result has been consumed.
            InvalidCursorStateException: if records were already consumed.
        """
        self._ensure_readable()
        if self._position != -1:
            raise InvalidCursorStateException(
                text=(
                    "Cannot retain records when the cursor is not pointing at the "
                    f"first record (currently at position {self._position})."
                ),
                cursor_state=self.state.value,
            )
        items: List[Any] = []
        record = self.next()
        while record is not None:
            items.append(mapper(record) if mapper is not None else record)
            record = self.next()
        self.consume()
        return items

    def summary(self) -> ResultSummary:
        """
        Return the summary, pulling all remaining messages if needed.

        Unlike `consume()`, records not yet read are kept in the buffer and
        remain readable afterwards.

        Raises:
            ResultFailedException: if the result has failed.
        """
        self._ensure_not_failed()
        while not self._stream_state.done:
            self._pump()
        return self._completed_summary()

    def consume(self) -> ResultSummary:
        """
        Discard all remaining records, close the result and return its summary.

        Calling this method again on a consumed result simply returns the
        same summary, without touching the connection.

        Raises:
            ResultFailedException: if the result has failed.
        """
        self._ensure_not_failed()
        if not self._open:
            return self._completed_summary()

        discarded = 0
        while True:
            discarded += len(self._stream_state.buffer)
            self._stream_state.buffer.clear()
            if self._stream_state.done:
                break
            self._pump()
        self._open = False
        logger.debug(
            f"result consumed at position {self._position}, "
            f"{discarded} unread record(s) discarded"
        )
        return self._completed_summary()

    @deprecation.deprecated(  # type: ignore[misc]
        deprecated_in="0.1.0",
        details=REMOVE_DEPRECATION_NOTICE,
    )
    def remove(self) -> None:
        """
        Not supported: records cannot be removed from a result.

        Raises:
            UnsupportedOperationException: always.
        """
        raise UnsupportedOperationException(
            "Removing records from a result is not supported."
        )
