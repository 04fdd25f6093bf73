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

import importlib.metadata


def get_version() -> str:
    try:
        return importlib.metadata.version(__package__)
    # If the package is not installed, there is no metadata to read the version from
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


__version__: str = get_version()


import querystream.cursors  # noqa: E402
import querystream.summary  # noqa: F401, E402
from querystream.data.connection import (  # noqa: E402
    Connection,
    MessageStreamConnection,
)
from querystream.data.cursors.result_cursor import StatementResult  # noqa: E402
from querystream.data.dispatch import ResponseDispatcher  # noqa: E402
from querystream.data.messages import (  # noqa: E402
    FailureMessage,
    IgnoredMessage,
    RecordMessage,
    SuccessMessage,
)
from querystream.data.record import Record  # noqa: E402
from querystream.data.statement import Statement  # noqa: E402
from querystream.utils.result_options import (  # noqa: E402
    FullResultOptions,
    ResultOptions,
)

__all__ = [
    "Connection",
    "FailureMessage",
    "FullResultOptions",
    "IgnoredMessage",
    "MessageStreamConnection",
    "Record",
    "RecordMessage",
    "ResponseDispatcher",
    "ResultOptions",
    "Statement",
    "StatementResult",
    "SuccessMessage",
    "__version__",
]
