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
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Sequence

from typing_extensions import override

from querystream.data.record import Record
from querystream.data.statement import Statement
from querystream.data.summary import (
    Notification,
    Plan,
    ProfiledPlan,
    ResultSummary,
    StatementType,
    SummaryBuilder,
    SummaryCounters,
)

logger = logging.getLogger(__name__)


@dataclass
class _StreamState:
    """
    The part of a result's state written by its collectors, shared between
    them and the owning cursor. Only the collectors (while the cursor pumps)
    and the cursor itself touch it, never concurrently.
    """

    keys: tuple[str, ...] | None = None
    buffer: Deque[Record] = field(default_factory=deque)
    summary: ResultSummary | None = None
    done: bool = False


class StreamCollector(ABC):
    """
    A target for the events decoded from one response of the engine.

    The dispatcher invokes these callbacks as messages arrive; every callback
    but `done` defaults to ignoring the event.
    """

    def keys(self, names: Sequence[str]) -> None:
        pass

    def record(self, fields: Sequence[Any]) -> None:
        pass

    def statement_type(self, statement_type: StatementType) -> None:
        pass

    def statement_statistics(self, counters: SummaryCounters) -> None:
        pass

    def plan(self, plan: Plan) -> None:
        pass

    def profile(self, profile: ProfiledPlan) -> None:
        pass

    def notifications(self, notifications: Sequence[Notification]) -> None:
        pass

    @abstractmethod
    def done(self) -> None:
        """The response is complete: no more events will follow."""
        ...


class RunResponseCollector(StreamCollector):
    """Collects the metadata phase of a result: the field names."""

    def __init__(self, state: _StreamState) -> None:
        self._state = state

    @override
    def keys(self, names: Sequence[str]) -> None:
        self._state.keys = tuple(names)

    @override
    def done(self) -> None:
        if self._state.keys is None:
            self._state.keys = ()
        logger.debug(f"metadata phase complete, keys: {list(self._state.keys)}")


class PullAllResponseCollector(StreamCollector):
    """
    Collects the streaming phase of a result: records go to the buffer,
    summary fragments to a SummaryBuilder that is frozen on completion.
    """

    def __init__(self, state: _StreamState, statement: Statement) -> None:
        self._state = state
        self._summary_builder = SummaryBuilder(statement)

    @override
    def record(self, fields: Sequence[Any]) -> None:
        # the metadata phase always completes first, so keys are known here
        self._state.buffer.append(Record(self._state.keys or (), fields))

    @override
    def statement_type(self, statement_type: StatementType) -> None:
        self._summary_builder.statement_type(statement_type)

    @override
    def statement_statistics(self, counters: SummaryCounters) -> None:
        self._summary_builder.statement_statistics(counters)

    @override
    def plan(self, plan: Plan) -> None:
        self._summary_builder.plan(plan)

    @override
    def profile(self, profile: ProfiledPlan) -> None:
        self._summary_builder.profile(profile)

    @override
    def notifications(self, notifications: Sequence[Notification]) -> None:
        self._summary_builder.notifications(notifications)

    @override
    def done(self) -> None:
        # summary before done: whoever sees done also sees the summary
        self._state.summary = self._summary_builder.build()
        self._state.done = True
        logger.debug("streaming phase complete")
