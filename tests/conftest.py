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

"""
Main conftest for shared fixtures.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence, Tuple

import pytest

from querystream import (
    MessageStreamConnection,
    RecordMessage,
    ResponseDispatcher,
    ResultOptions,
    Statement,
    StatementResult,
    SuccessMessage,
)
from querystream.data.messages import Message

ResultAndConnection = Tuple[StatementResult, MessageStreamConnection]
ResultFactory = Callable[..., ResultAndConnection]

SAMPLE_STATEMENT = Statement("UNWIND $xs AS n RETURN n", {"xs": [1, 2]})


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "describe(text): a human-readable description of the test"
    )


def stream_messages(
    keys: Sequence[str],
    rows: Iterable[Sequence[Any]],
    summary_metadata: dict[str, Any] | None = None,
) -> list[Message]:
    """The full message sequence answering a RUN + PULL_ALL exchange."""
    return [
        SuccessMessage({"fields": list(keys)}),
        *[RecordMessage(row) for row in rows],
        SuccessMessage(summary_metadata or {}),
    ]


@pytest.fixture
def make_messages() -> Callable[..., list[Message]]:
    return stream_messages


@pytest.fixture
def result_factory() -> ResultFactory:
    """
    Build a registered StatementResult over a scripted connection.
    The connection counts the messages received (i.e. the pumps).
    """

    def _factory(
        messages: Iterable[Message],
        *,
        statement: Statement = SAMPLE_STATEMENT,
        options: ResultOptions | None = None,
    ) -> ResultAndConnection:
        dispatcher = ResponseDispatcher(options=options)
        connection = MessageStreamConnection(messages, dispatcher=dispatcher)
        result = StatementResult(connection, statement)
        dispatcher.register_result(result)
        return result, connection

    return _factory


@pytest.fixture
def two_record_result(result_factory: ResultFactory) -> ResultAndConnection:
    return result_factory(
        stream_messages(
            ["n"],
            [[1], [2]],
            {"type": "r", "stats": {"nodes-created": 0}},
        )
    )


@pytest.fixture
def empty_result(result_factory: ResultFactory) -> ResultAndConnection:
    return result_factory(stream_messages(["n"], []))
