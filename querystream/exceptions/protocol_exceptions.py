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
from typing import Any

from querystream.exceptions.cursor_exceptions import QueryStreamException


@dataclass
class QueryFailureException(QueryStreamException):
    """
    The query engine answered a request with a FAILURE message.

    Attributes:
        text: a text message about the exception.
        code: the error code returned by the engine, if any.
        message: the error message returned by the engine, if any.
        raw_metadata: the full metadata of the FAILURE message.
    """

    text: str
    code: str | None
    message: str | None
    raw_metadata: dict[str, Any]

    def __init__(
        self,
        text: str,
        *,
        code: str | None,
        message: str | None,
        raw_metadata: dict[str, Any],
    ) -> None:
        super().__init__(text)
        self.text = text
        self.code = code
        self.message = message
        self.raw_metadata = raw_metadata

    @staticmethod
    def from_metadata(metadata: dict[str, Any]) -> QueryFailureException:
        """Parse the metadata of a FAILURE message into this exception."""

        code = metadata.get("code")
        message = metadata.get("message")
        if code and message:
            text = f"{message} ({code})"
        else:
            text = message or code or "The query engine reported a failure."
        return QueryFailureException(
            text,
            code=code,
            message=message,
            raw_metadata=metadata,
        )


@dataclass
class UnexpectedMessageException(QueryStreamException):
    """
    A message arrived that the client had no way to route, or whose content
    does not have the expected shape.

    Attributes:
        text: a text message about the exception.
        raw_message: the offending message, as decoded.
    """

    text: str
    raw_message: Any

    def __init__(
        self,
        text: str,
        raw_message: Any,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.raw_message = raw_message


@dataclass
class ConnectionClosedException(QueryStreamException):
    """
    A message was requested from a connection that has nothing more to deliver.

    Attributes:
        text: a text message about the exception.
    """

    text: str

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text
