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

from abc import ABC, abstractmethod
from typing import Any, Iterable

from querystream.event_observers.events import ObservableEvent, ObservableEventType


class Observer(ABC):
    """
    Something that wants to hear about what comes back from the query engine.

    Subclass it and implement `receive`, then attach instances through
    `ResultOptions(event_observers={"name": observer})`. A dispatcher calls
    each of its observers in turn, synchronously, for every event.

    For the common case of just collecting events, see `from_event_list`
    and `from_event_dict`.
    """

    @abstractmethod
    def receive(
        self,
        event: ObservableEvent,
        sender: Any = None,
    ) -> None:
        """Receive an event.

        Args:
            event: the event being delivered.
            sender: the dispatcher that routed the underlying message.
        """
        ...

    @staticmethod
    def from_event_list(
        event_list: list[ObservableEvent],
        *,
        event_types: Iterable[ObservableEventType] | None = None,
    ) -> Observer:
        """
        An observer appending every event it receives to `event_list`.

        Args:
            event_list: the list the caller will inspect.
            event_types: if provided, only events of these types are kept.
        """
        return _ListObserver(event_list, event_types)

    @staticmethod
    def from_event_dict(
        event_dict: dict[ObservableEventType, list[ObservableEvent]],
        *,
        event_types: Iterable[ObservableEventType] | None = None,
    ) -> Observer:
        """
        An observer storing the events it receives in `event_dict`, as lists
        keyed by event type.

        Args:
            event_dict: the dict the caller will inspect.
            event_types: if provided, only events of these types are kept.
        """
        return _DictObserver(event_dict, event_types)


class _FilteringObserver(Observer):
    event_types: set[ObservableEventType]

    def __init__(self, event_types: Iterable[ObservableEventType] | None) -> None:
        if event_types is None:
            self.event_types = set(ObservableEventType)
        else:
            self.event_types = {ObservableEventType.coerce(et) for et in event_types}

    def receive(
        self,
        event: ObservableEvent,
        sender: Any = None,
    ) -> None:
        if event.event_type in self.event_types:
            self._store(event)

    @abstractmethod
    def _store(self, event: ObservableEvent) -> None: ...


class _ListObserver(_FilteringObserver):
    def __init__(
        self,
        event_list: list[ObservableEvent],
        event_types: Iterable[ObservableEventType] | None,
    ) -> None:
        super().__init__(event_types)
        self.event_list = event_list

    def _store(self, event: ObservableEvent) -> None:
        self.event_list.append(event)


class _DictObserver(_FilteringObserver):
    def __init__(
        self,
        event_dict: dict[ObservableEventType, list[ObservableEvent]],
        event_types: Iterable[ObservableEventType] | None,
    ) -> None:
        super().__init__(event_types)
        self.event_dict = event_dict

    def _store(self, event: ObservableEvent) -> None:
        self.event_dict.setdefault(event.event_type, []).append(event)
