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
from typing import TYPE_CHECKING, Iterable, Iterator

from querystream.data.messages import Message
from querystream.exceptions import ConnectionClosedException

if TYPE_CHECKING:
    from querystream.data.dispatch import ResponseDispatcher


logger = logging.getLogger(__name__)


class Connection(ABC):
    """
    The only facet of a connection a result cursor ever touches.

    Connection establishment, pooling, authentication and the wire encoding
    all live elsewhere: a cursor just asks, when it needs data, that one more
    message be received and routed to whoever is waiting for it.
    """

    @abstractmethod
    def receive_one(self) -> None:
        """
        Block until one message is available, decode it and dispatch it to the
        collector registered for the in-flight request.

        Errors (I/O, protocol, engine failures) are raised from here.
        """
        ...


class MessageStreamConnection(Connection):
    """
    A connection over a stream of already-decoded messages, as produced by
    any external decoder. Each `receive_one` draws exactly one message from
    the stream and hands it to a `ResponseDispatcher`.

    Args:
        messages: an iterable of decoded messages. It is consumed lazily.
        dispatcher: the dispatcher routing each message to its collector.
    """

    _messages: Iterator[Message]
    received_count: int

    def __init__(
        self,
        messages: Iterable[Message],
        *,
        dispatcher: ResponseDispatcher,
    ) -> None:
        self._messages = iter(messages)
        self.dispatcher = dispatcher
        self.received_count = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(received so far: {self.received_count})"

    def receive_one(self) -> None:
        try:
            message = next(self._messages)
        except StopIteration:
            raise ConnectionClosedException(
                "No more messages can be received: the message stream has ended."
            ) from None
        self.received_count += 1
        self.dispatcher.dispatch(message)
