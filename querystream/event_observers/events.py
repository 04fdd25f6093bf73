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

from abc import ABC
from dataclasses import dataclass
from typing import Any

from querystream.data.summary import Notification
from querystream.utils.str_enum import StrEnum


class ObservableEventType(StrEnum):
    """
    Enum for the possible values of the event type for observable events
    """

    NOTIFICATION = "notification"
    FAILURE = "failure"
    SUCCESS = "success"


@dataclass
class ObservableEvent(ABC):
    """
    Class that represents the most general 'event' that is sent to observers.

    Attributes:
        event_type: the type of the event, such as "notification" or "failure".
    """

    event_type: ObservableEventType


@dataclass
class ObservableNotification(ObservableEvent):
    """
    An event representing a notification attached by the query engine
    to the completion of a statement (e.g. a performance hint).

    Attributes:
        event_type: it has value ObservableEventType.NOTIFICATION in this case.
        notification: the parsed notification.
    """

    notification: Notification

    def __init__(self, notification: Notification) -> None:
        self.event_type = ObservableEventType.NOTIFICATION
        self.notification = notification


@dataclass
class ObservableFailure(ObservableEvent):
    """
    An event representing a FAILURE message from the query engine.

    These are dispatched to the attached observers before the corresponding
    exception is raised out of the connection.

    Attributes:
        event_type: it has value ObservableEventType.FAILURE in this case.
        code: the error code returned by the engine, if any.
        message: the error message returned by the engine, if any.
    """

    code: str | None
    message: str | None

    def __init__(self, code: str | None, message: str | None) -> None:
        self.event_type = ObservableEventType.FAILURE
        self.code = code
        self.message = message


@dataclass
class ObservableSuccess(ObservableEvent):
    """
    An event representing a SUCCESS message closing one response stream,
    captured with its metadata exactly as decoded.

    Attributes:
        event_type: it has value ObservableEventType.SUCCESS in this case.
        metadata: the metadata dictionary carried by the message.
    """

    metadata: dict[str, Any]

    def __init__(self, metadata: dict[str, Any]) -> None:
        self.event_type = ObservableEventType.SUCCESS
        self.metadata = metadata
