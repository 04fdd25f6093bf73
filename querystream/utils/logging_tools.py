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
from typing import Any

# a logging level finer than DEBUG, for per-message protocol chatter
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def log_received_message(
    logger: logging.Logger,
    message_kind: str,
    detail: Any = None,
) -> None:
    """
    Log, at TRACE level, the arrival of one decoded message.

    Args:
        logger: the logger of the calling module.
        message_kind: a short label for the message, e.g. "RECORD".
        detail: optional extra payload to render alongside the label.
    """
    if logger.isEnabledFor(TRACE_LEVEL):
        if detail is not None:
            logger.log(TRACE_LEVEL, f"Received {message_kind}: '{detail}'")
        else:
            logger.log(TRACE_LEVEL, f"Received {message_kind}")


def log_pump(logger: logging.Logger, cursor_id: int, buffered: int) -> None:
    """Log, at TRACE level, a cursor pulling one message off the connection."""
    if logger.isEnabledFor(TRACE_LEVEL):
        logger.log(
            TRACE_LEVEL,
            f"cursor {cursor_id} pumping one message (buffered: {buffered})",
        )
