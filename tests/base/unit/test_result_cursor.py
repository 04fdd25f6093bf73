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

import deprecation
import pytest

from querystream import (
    FailureMessage,
    IgnoredMessage,
    Record,
    SuccessMessage,
)
from querystream.cursors import CursorState
from querystream.data.summary import StatementType
from querystream.exceptions import (
    ConnectionClosedException,
    InvalidCursorStateException,
    NoRecordException,
    QueryFailureException,
    ResultConsumedException,
    ResultFailedException,
    TooManyRecordsException,
    UnsupportedOperationException,
)


class TestStatementResultReading:
    @pytest.mark.describe("test of the has_next/next walk through a two-record result")
    def test_result_has_next_next_walk(self, two_record_result) -> None:
        result, connection = two_record_result

        assert result.position == -1
        assert result.has_next()
        rec1 = result.next()
        assert rec1 is not None
        assert rec1["n"] == 1
        assert result.position == 0
        assert result.has_next()
        rec2 = result.next()
        assert rec2 is not None
        assert rec2["n"] == 2
        assert result.position == 1
        assert not result.has_next()
        assert result.next() is None
        assert result.position == 1

        summary = result.consume()
        assert summary.counters.nodes_created == 0
        assert not summary.counters.contains_updates
        assert summary.statement_type == StatementType.READ_ONLY
        assert connection.received_count == 4

    @pytest.mark.describe("test of next yielding all delivered records, in order")
    def test_result_next_order_and_count(
        self, result_factory, make_messages
    ) -> None:
        rows = [[i, f"v{i}"] for i in range(7)]
        result, _ = result_factory(make_messages(["i", "v"], rows))

        yielded = []
        record = result.next()
        while record is not None:
            yielded.append(record)
            record = result.next()
        assert [list(rec.values()) for rec in yielded] == rows
        assert result.position == len(rows) - 1
        assert result.next() is None

    @pytest.mark.describe("test of records sharing one keys tuple")
    def test_result_records_share_keys(self, two_record_result) -> None:
        result, _ = two_record_result
        rec1 = result.next()
        rec2 = result.next()
        assert rec1 is not None and rec2 is not None
        assert rec1.keys() is rec2.keys()
        assert list(rec1.keys()) == result.keys()

    @pytest.mark.describe("test of pumping no more messages than a read needs")
    def test_result_no_read_ahead(self, two_record_result) -> None:
        result, connection = two_record_result
        assert connection.received_count == 0
        result.next()
        # the metadata SUCCESS plus the first RECORD
        assert connection.received_count == 2
        assert result.buffered_count == 0
        result.peek()
        assert connection.received_count == 3
        result.peek()
        assert connection.received_count == 3

    @pytest.mark.describe("test of plain python iteration over a result")
    def test_result_iteration(self, two_record_result) -> None:
        result, _ = two_record_result
        assert [record["n"] for record in result] == [1, 2]
        assert result.state == CursorState.EXHAUSTED
        assert [record for record in result] == []
        result.consume()
        with pytest.raises(ResultConsumedException):
            iter(result)


class TestStatementResultKeys:
    @pytest.mark.describe("test of keys pumping only the metadata phase")
    def test_result_keys_metadata_only(self, two_record_result) -> None:
        result, connection = two_record_result
        assert result.keys() == ["n"]
        assert connection.received_count == 1
        assert result.keys() == ["n"]
        assert connection.received_count == 1
        assert result.buffered_count == 0

    @pytest.mark.describe("test of keys defaulting to empty without field names")
    def test_result_keys_empty_metadata(self, result_factory) -> None:
        result, _ = result_factory([SuccessMessage({}), SuccessMessage({})])
        assert result.keys() == []
        assert result.list() == []
        assert result.keys() == []

    @pytest.mark.describe("test of keys staying available after consume")
    def test_result_keys_after_consume(self, two_record_result) -> None:
        result, _ = two_record_result
        result.consume()
        assert result.keys() == ["n"]


class TestStatementResultSingle:
    @pytest.mark.describe("test of single on an empty result")
    def test_result_single_empty(self, empty_result) -> None:
        result, _ = empty_result
        with pytest.raises(NoRecordException):
            result.single()

    @pytest.mark.describe("test of single on a one-record result")
    def test_result_single_one(self, result_factory, make_messages) -> None:
        result, _ = result_factory(make_messages(["n"], [[42]]))
        record = result.single()
        assert record["n"] == 42
        assert result.position == 0
        assert result.next() is None
        assert result.is_open

    @pytest.mark.describe("test of single on a result with more records")
    def test_result_single_too_many(self, result_factory, make_messages) -> None:
        result, connection = result_factory(make_messages(["n"], [[1], [2], [3]]))
        with pytest.raises(TooManyRecordsException):
            result.single()
        assert result.position == 0
        # the look-ahead record is still there
        assert connection.received_count == 3
        second = result.next()
        assert second is not None
        assert second["n"] == 2

    @pytest.mark.describe("test of single after the cursor moved")
    def test_result_single_after_next(self, result_factory, make_messages) -> None:
        result, _ = result_factory(make_messages(["n"], [[1], [2], [3]]))
        result.next()
        assert result.position == 0
        with pytest.raises(InvalidCursorStateException):
            result.single()

        result_b, _ = result_factory(make_messages(["n"], [[1]]))
        result_b.next()
        with pytest.raises(InvalidCursorStateException):
            result_b.single()

    @pytest.mark.describe("test of single on a consumed result")
    def test_result_single_consumed(self, two_record_result) -> None:
        result, _ = two_record_result
        result.consume()
        with pytest.raises(ResultConsumedException):
            result.single()


class TestStatementResultPeek:
    @pytest.mark.describe("test of peek never advancing the position")
    def test_result_peek_stable(self, two_record_result) -> None:
        result, _ = two_record_result
        peeked = [result.peek() for _ in range(4)]
        assert all(rec is peeked[0] for rec in peeked)
        assert result.position == -1
        nxt = result.next()
        assert nxt is peeked[0]
        assert result.position == 0

    @pytest.mark.describe("test of peek at the end of the stream")
    def test_result_peek_exhausted(self, empty_result) -> None:
        result, _ = empty_result
        assert result.peek() is None
        assert result.position == -1

    @pytest.mark.describe("test of peek on a consumed result")
    def test_result_peek_consumed(self, two_record_result) -> None:
        result, _ = two_record_result
        result.consume()
        with pytest.raises(ResultConsumedException):
            result.peek()


class TestStatementResultList:
    @pytest.mark.describe("test of list materializing and closing the result")
    def test_result_list(self, two_record_result) -> None:
        result, connection = two_record_result
        records = result.list()
        assert [rec["n"] for rec in records] == [1, 2]
        assert all(isinstance(rec, Record) for rec in records)
        assert not result.is_open
        assert result.state == CursorState.CLOSED
        assert connection.received_count == 4
        with pytest.raises(ResultConsumedException):
            result.list()

    @pytest.mark.describe("test of list with a mapping function")
    def test_result_list_mapper(self, two_record_result) -> None:
        result, _ = two_record_result
        assert result.list(lambda rec: rec["n"] * 10) == [10, 20]

    @pytest.mark.describe("test of list on an empty result")
    def test_result_list_empty(self, empty_result) -> None:
        result, _ = empty_result
        assert result.list() == []
        assert not result.is_open
        assert result.keys() == ["n"]
        with pytest.raises(ResultConsumedException):
            result.list()

    @pytest.mark.describe("test of list refusing after the cursor moved")
    def test_result_list_after_next(self, two_record_result) -> None:
        result, _ = two_record_result
        result.next()
        with pytest.raises(InvalidCursorStateException):
            result.list()
        # the refusal does not consume anything
        rec = result.next()
        assert rec is not None
        assert rec["n"] == 2

    @pytest.mark.describe("test of list after peek")
    def test_result_list_after_peek(self, two_record_result) -> None:
        result, _ = two_record_result
        result.peek()
        assert [rec["n"] for rec in result.list()] == [1, 2]


class TestStatementResultConsume:
    @pytest.mark.describe("test of consume being idempotent")
    def test_result_consume_idempotent(self, two_record_result) -> None:
        result, connection = two_record_result
        summary1 = result.consume()
        received = connection.received_count
        summary2 = result.consume()
        assert summary2 is summary1
        assert connection.received_count == received

    @pytest.mark.describe("test of consume after partial iteration")
    def test_result_consume_partial(self, result_factory, make_messages) -> None:
        result, connection = result_factory(
            make_messages(["n"], [[1], [2], [3], [4]], {"stats": {"nodes-created": 4}})
        )
        result.next()
        summary = result.consume()
        assert summary.counters.nodes_created == 4
        assert summary.counters.contains_updates
        assert connection.received_count == 6
        assert result.buffered_count == 0
        assert not result.has_next()
        with pytest.raises(ResultConsumedException):
            result.next()

    @pytest.mark.describe("test of consume logging the discarded records")
    def test_result_consume_logging(
        self,
        caplog: pytest.LogCaptureFixture,
        two_record_result,
    ) -> None:
        result, _ = two_record_result
        with caplog.at_level(10):
            result.consume()
        assert any("2 unread record(s) discarded" in rec.msg for rec in caplog.records)

    @pytest.mark.describe("test of summary keeping unread records")
    def test_result_summary_keeps_records(self, two_record_result) -> None:
        result, connection = two_record_result
        summary = result.summary()
        assert connection.received_count == 4
        assert result.buffered_count == 2
        assert result.is_open
        assert [rec["n"] for rec in result.list()] == [1, 2]
        assert result.consume() is summary

    @pytest.mark.describe("test of the summary statement")
    def test_result_summary_statement(self, two_record_result) -> None:
        result, _ = two_record_result
        summary = result.consume()
        assert summary.statement is result.statement
        assert summary.notifications == ()
        assert not summary.has_plan
        assert not summary.has_profile


class TestStatementResultStates:
    @pytest.mark.describe("test of the cursor state transitions")
    def test_result_states(self, two_record_result) -> None:
        result, _ = two_record_result
        assert result.state == CursorState.FRESH
        result.has_next()
        assert result.state == CursorState.FRESH
        result.next()
        assert result.state == CursorState.STREAMING
        result.next()
        result.has_next()
        assert result.state == CursorState.EXHAUSTED
        result.consume()
        assert result.state == CursorState.CLOSED

    @pytest.mark.describe("test of remove being unsupported")
    def test_result_remove(self, two_record_result) -> None:
        result, connection = two_record_result
        with pytest.warns(deprecation.DeprecatedWarning):
            with pytest.raises(UnsupportedOperationException):
                result.remove()
        assert connection.received_count == 0

    @pytest.mark.describe("test of pumping at TRACE logging level")
    def test_result_trace_logging(
        self,
        caplog: pytest.LogCaptureFixture,
        two_record_result,
    ) -> None:
        result, _ = two_record_result
        with caplog.at_level(10):
            result.keys()
        assert all(rec.levelname != "TRACE" for rec in caplog.records)
        caplog.clear()
        # TRACE is level 5:
        with caplog.at_level(5):
            result.next()
        trace_records = [rec for rec in caplog.records if rec.levelname == "TRACE"]
        assert any("pumping one message" in rec.msg for rec in trace_records)
        assert any("Received RECORD" in rec.msg for rec in trace_records)


class TestStatementResultFailures:
    @pytest.mark.describe("test of a connection error leaving the result failed")
    def test_result_connection_error(self, result_factory, make_messages) -> None:
        # the stream ends before the completion phase
        messages = make_messages(["n"], [[1]])[:-1]
        result, _ = result_factory(messages)
        assert result.next() is not None
        with pytest.raises(ConnectionClosedException):
            result.next()
        assert result.state == CursorState.FAILED
        assert not result.is_open

        for _ in range(2):
            with pytest.raises(ResultFailedException) as exc_info:
                result.next()
            assert isinstance(exc_info.value.cause, ConnectionClosedException)
        with pytest.raises(ResultFailedException):
            result.has_next()
        with pytest.raises(ResultFailedException):
            result.peek()
        with pytest.raises(ResultFailedException):
            result.list()
        with pytest.raises(ResultFailedException):
            result.consume()
        with pytest.raises(ResultFailedException):
            result.summary()
        assert result.keys() == ["n"]

    @pytest.mark.describe("test of an engine failure raised through the result")
    def test_result_engine_failure(self, result_factory) -> None:
        result, _ = result_factory(
            [
                FailureMessage(
                    {
                        "code": "Statement.SyntaxError",
                        "message": "Invalid input 'RETRUN'",
                    }
                ),
                IgnoredMessage(),
            ]
        )
        with pytest.raises(QueryFailureException) as exc_info:
            result.keys()
        assert exc_info.value.code == "Statement.SyntaxError"
        with pytest.raises(ResultFailedException):
            result.keys()
        with pytest.raises(ResultFailedException):
            result.single()
