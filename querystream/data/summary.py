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
from typing import Any, Iterable

from querystream.data.statement import Statement
from querystream.utils.str_enum import StrEnum


class StatementType(StrEnum):
    """
    The kind of work a statement performed, as reported by the engine.

    Values:
        READ_ONLY: the statement only read data.
        READ_WRITE: the statement read and wrote data.
        WRITE_ONLY: the statement only wrote data.
        SCHEMA_WRITE: the statement altered the schema (indexes, constraints).
    """

    READ_ONLY = "r"
    READ_WRITE = "rw"
    WRITE_ONLY = "w"
    SCHEMA_WRITE = "s"


@dataclass(frozen=True)
class SummaryCounters:
    """
    The update statistics of a statement, i.e. how many entities it affected.

    Attributes:
        nodes_created: number of nodes created.
        nodes_deleted: number of nodes deleted.
        relationships_created: number of relationships created.
        relationships_deleted: number of relationships deleted.
        properties_set: number of properties set.
        labels_added: number of labels added to nodes.
        labels_removed: number of labels removed from nodes.
        indexes_added: number of indexes created.
        indexes_removed: number of indexes dropped.
        constraints_added: number of constraints created.
        constraints_removed: number of constraints dropped.
    """

    nodes_created: int = 0
    nodes_deleted: int = 0
    relationships_created: int = 0
    relationships_deleted: int = 0
    properties_set: int = 0
    labels_added: int = 0
    labels_removed: int = 0
    indexes_added: int = 0
    indexes_removed: int = 0
    constraints_added: int = 0
    constraints_removed: int = 0

    @property
    def contains_updates(self) -> bool:
        """Whether any of the counters is nonzero."""
        return any(
            getattr(self, counter_name) for counter_name in _COUNTER_KEYS.values()
        )

    @staticmethod
    def from_dict(raw_dict: dict[str, Any]) -> SummaryCounters:
        """
        Create an instance of SummaryCounters from the "stats" metadata
        sent by the engine, whose keys are dashed ("nodes-created", ...).
        Missing entries count as zero.
        """

        return SummaryCounters(
            **{
                counter_name: int(raw_dict.get(raw_key) or 0)
                for raw_key, counter_name in _COUNTER_KEYS.items()
            }
        )


_COUNTER_KEYS = {
    "nodes-created": "nodes_created",
    "nodes-deleted": "nodes_deleted",
    "relationships-created": "relationships_created",
    "relationships-deleted": "relationships_deleted",
    "properties-set": "properties_set",
    "labels-added": "labels_added",
    "labels-removed": "labels_removed",
    "indexes-added": "indexes_added",
    "indexes-removed": "indexes_removed",
    "constraints-added": "constraints_added",
    "constraints-removed": "constraints_removed",
}

EMPTY_COUNTERS = SummaryCounters()


@dataclass(frozen=True)
class Plan:
    """
    The execution plan of a statement, as a tree of operators.

    Attributes:
        operator_type: the name of the operator, e.g. "AllNodesScan".
        arguments: operator-specific arguments.
        identifiers: the identifiers (variables) this operator works with.
        children: the plans feeding into this operator.
    """

    operator_type: str
    arguments: dict[str, Any] = field(default_factory=dict)
    identifiers: tuple[str, ...] = ()
    children: tuple[Plan, ...] = ()

    @staticmethod
    def from_dict(raw_dict: dict[str, Any]) -> Plan:
        """Create a Plan (recursively) from the "plan" metadata of the engine."""

        return Plan(
            operator_type=raw_dict["operatorType"],
            arguments=dict(raw_dict.get("args") or {}),
            identifiers=tuple(raw_dict.get("identifiers") or ()),
            children=tuple(
                Plan.from_dict(child) for child in raw_dict.get("children") or []
            ),
        )


@dataclass(frozen=True)
class ProfiledPlan(Plan):
    """
    An execution plan that was actually run and measured. Besides what a
    Plan carries, each operator reports database hits and produced records.

    Attributes:
        operator_type: the name of the operator, e.g. "AllNodesScan".
        arguments: operator-specific arguments.
        identifiers: the identifiers (variables) this operator works with.
        children: the profiled plans feeding into this operator.
        db_hits: the number of times the operator hit the storage layer.
        records: the number of records the operator produced.
    """

    db_hits: int = 0
    records: int = 0

    @staticmethod
    def from_dict(raw_dict: dict[str, Any]) -> ProfiledPlan:
        """Create a ProfiledPlan (recursively) from the "profile" metadata."""

        return ProfiledPlan(
            operator_type=raw_dict["operatorType"],
            arguments=dict(raw_dict.get("args") or {}),
            identifiers=tuple(raw_dict.get("identifiers") or ()),
            children=tuple(
                ProfiledPlan.from_dict(child)
                for child in raw_dict.get("children") or []
            ),
            db_hits=int(raw_dict.get("dbHits") or 0),
            records=int(raw_dict.get("rows") or 0),
        )


@dataclass(frozen=True)
class InputPosition:
    """
    A position in the query text.

    Attributes:
        offset: the character offset, starting from 0.
        line: the line number, starting from 1.
        column: the column number, starting from 1.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True)
class Notification:
    """
    A notification from the engine about a statement: a warning, a
    performance hint or similar.

    Attributes:
        code: a code identifying the kind of notification.
        title: a short summary of the notification.
        description: a longer description of the notification.
        severity: the severity level, e.g. "WARNING" or "INFORMATION".
        position: where in the query text the notification applies, if known.
    """

    code: str
    title: str
    description: str
    severity: str | None = None
    position: InputPosition | None = None

    def summary(self) -> str:
        """Determine a string succinct description of this notification."""
        _pos = (
            f" (line {self.position.line}, column {self.position.column})"
            if self.position is not None
            else ""
        )
        return f"{self.title} [{self.code}]{_pos}: {self.description}"

    @staticmethod
    def from_dict(raw_dict: dict[str, Any]) -> Notification:
        """Create a Notification from one item of the "notifications" metadata."""

        raw_position = raw_dict.get("position")
        position: InputPosition | None
        if raw_position:
            position = InputPosition(
                offset=int(raw_position.get("offset") or 0),
                line=int(raw_position.get("line") or 0),
                column=int(raw_position.get("column") or 0),
            )
        else:
            position = None
        return Notification(
            code=raw_dict.get("code") or "",
            title=raw_dict.get("title") or "",
            description=raw_dict.get("description") or "",
            severity=raw_dict.get("severity"),
            position=position,
        )


@dataclass(frozen=True)
class ResultSummary:
    """
    What is known about a statement once all its results have streamed in.

    Attributes:
        statement: the statement this summary is about.
        counters: the update statistics.
        statement_type: the kind of work the statement performed, if reported.
        plan: the execution plan, if the statement was explained or profiled.
        profile: the profiled execution plan, if the statement was profiled.
        notifications: the notifications the engine attached to the statement.
    """

    statement: Statement
    counters: SummaryCounters = EMPTY_COUNTERS
    statement_type: StatementType | None = None
    plan: Plan | None = None
    profile: ProfiledPlan | None = None
    notifications: tuple[Notification, ...] = ()

    @property
    def has_plan(self) -> bool:
        """Whether a plan is available. A profiled statement also has a plan."""
        return self.plan is not None

    @property
    def has_profile(self) -> bool:
        return self.profile is not None


class SummaryBuilder:
    """
    Mutable collector of the summary fragments of one statement, turned into
    an immutable ResultSummary by `build()`.

    Each setter is expected to be invoked at most once, and none of them after
    `build()`: this is not checked here.
    """

    def __init__(self, statement: Statement) -> None:
        self._statement = statement
        self._statement_type: StatementType | None = None
        self._counters: SummaryCounters | None = None
        self._plan: Plan | None = None
        self._profile: ProfiledPlan | None = None
        self._notifications: list[Notification] = []

    def statement_type(self, statement_type: StatementType) -> None:
        self._statement_type = statement_type

    def statement_statistics(self, counters: SummaryCounters) -> None:
        self._counters = counters

    def plan(self, plan: Plan) -> None:
        self._plan = plan

    def profile(self, profile: ProfiledPlan) -> None:
        self._profile = profile

    def notifications(self, notifications: Iterable[Notification]) -> None:
        self._notifications = list(notifications)

    def build(self) -> ResultSummary:
        # a profile is a plan, too
        _plan = self._plan if self._plan is not None else self._profile
        return ResultSummary(
            statement=self._statement,
            counters=self._counters if self._counters is not None else EMPTY_COUNTERS,
            statement_type=self._statement_type,
            plan=_plan,
            profile=self._profile,
            notifications=tuple(self._notifications),
        )
