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
from collections import deque
from typing import TYPE_CHECKING, Any, Deque

from querystream.data.messages import (
    FailureMessage,
    IgnoredMessage,
    Message,
    RecordMessage,
    SuccessMessage,
)
from querystream.data.summary import (
    Notification,
    Plan,
    ProfiledPlan,
    StatementType,
    SummaryCounters,
)
from querystream.event_observers import (
    ObservableEvent,
    ObservableFailure,
    ObservableNotification,
    ObservableSuccess,
)
from querystream.exceptions import (
    QueryFailureException,
    UnexpectedMessageException,
)
from querystream.settings.defaults import (
    METADATA_FIELDS,
    METADATA_NOTIFICATIONS,
    METADATA_PLAN,
    METADATA_PROFILE,
    METADATA_STATS,
    METADATA_TYPE,
)
from querystream.utils.logging_tools import log_received_message
from querystream.utils.result_options import (
    FullResultOptions,
    ResultOptions,
    defaultResultOptions,
)

if TYPE_CHECKING:
    from querystream.data.cursors.collectors import StreamCollector
    from querystream.data.cursors.result_cursor import StatementResult


logger = logging.getLogger(__name__)


class ResponseDispatcher:
    """
    The routing table between incoming messages and the collectors waiting
    for them.

    Requests are answered by the engine strictly in the order they were sent,
    so collectors are kept in a FIFO queue: one collector per expected
    response, registered before the request goes out. RECORD messages feed the
    collector at the head of the queue; SUCCESS, FAILURE and IGNORED messages
    close the head response and pop its collector.

    Args:
        options: a (possibly partial) set of result options, overriding the
            defaults.
    """

    options: FullResultOptions
    _collectors: Deque[StreamCollector]

    def __init__(self, *, options: ResultOptions | None = None) -> None:
        self.options = defaultResultOptions.with_override(options)
        self._collectors = deque()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(pending responses: {self.pending_count})"

    @property
    def pending_count(self) -> int:
        """The number of responses still awaited."""
        return len(self._collectors)

    def register(self, collector: StreamCollector) -> None:
        """Expect one more response, to be fed into the provided collector."""
        self._collectors.append(collector)

    def register_result(self, result: StatementResult) -> None:
        """
        Expect the two responses (metadata phase, then streaming phase)
        making up one statement result.
        """
        self.register(result.run_response_collector)
        self.register(result.pull_all_response_collector)

    def dispatch(self, message: Message) -> None:
        """
        Route one decoded message to the appropriate collector.

        Raises:
            QueryFailureException: if the message is a FAILURE.
            UnexpectedMessageException: if no collector is waiting for a
                response, or the message is of an unknown kind.
        """
        if not self._collectors:
            raise UnexpectedMessageException(
                text=f"Received a {message.__class__.__name__} with no pending request.",
                raw_message=message,
            )
        if isinstance(message, RecordMessage):
            log_received_message(logger, "RECORD", message.fields)
            self._collectors[0].record(message.fields)
        elif isinstance(message, SuccessMessage):
            log_received_message(logger, "SUCCESS", message.metadata)
            self._handle_success(self._collectors.popleft(), message.metadata)
        elif isinstance(message, FailureMessage):
            log_received_message(logger, "FAILURE", message.metadata)
            self._collectors.popleft()
            self._handle_failure(message.metadata)
        elif isinstance(message, IgnoredMessage):
            log_received_message(logger, "IGNORED")
            self._collectors.popleft()
        else:
            raise UnexpectedMessageException(
                text=f"Cannot dispatch a message of type {type(message).__name__}.",
                raw_message=message,
            )

    def _handle_success(
        self,
        collector: StreamCollector,
        metadata: dict[str, Any],
    ) -> None:
        try:
            if METADATA_FIELDS in metadata:
                collector.keys(list(metadata[METADATA_FIELDS]))
            if METADATA_TYPE in metadata:
                collector.statement_type(StatementType.coerce(metadata[METADATA_TYPE]))
            if METADATA_STATS in metadata:
                collector.statement_statistics(
                    SummaryCounters.from_dict(metadata[METADATA_STATS])
                )
            if METADATA_PLAN in metadata:
                collector.plan(Plan.from_dict(metadata[METADATA_PLAN]))
            if METADATA_PROFILE in metadata:
                collector.profile(ProfiledPlan.from_dict(metadata[METADATA_PROFILE]))
            notifications: list[Notification] = []
            if METADATA_NOTIFICATIONS in metadata:
                notifications = [
                    Notification.from_dict(raw_notification)
                    for raw_notification in metadata[METADATA_NOTIFICATIONS]
                ]
                collector.notifications(notifications)
        except (KeyError, TypeError, ValueError) as exc:
            raise UnexpectedMessageException(
                text=f"Malformed metadata in SUCCESS message: {exc}",
                raw_message=metadata,
            ) from exc

        for notification in notifications:
            if self.options.log_notifications:
                logger.warning(
                    f"The query engine returned a notification: {notification.summary()}"
                )
            self._notify_observers(ObservableNotification(notification))
        self._notify_observers(ObservableSuccess(metadata))
        collector.done()

    def _handle_failure(self, metadata: dict[str, Any]) -> None:
        failure = QueryFailureException.from_metadata(metadata)
        self._notify_observers(
            ObservableFailure(code=failure.code, message=failure.message)
        )
        logger.warning(f"ResponseDispatcher about to raise from: {failure.text}")
        raise failure

    def _notify_observers(self, event: ObservableEvent) -> None:
        for observer in self.options.event_observers.values():
            observer.receive(event, sender=self)
