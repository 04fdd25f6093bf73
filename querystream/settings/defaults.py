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

# whether notifications attached by the engine to a completed statement
# are also reported through logging.warning
DEFAULT_LOG_NOTIFICATIONS = True

# Response metadata keys used by the query engine
METADATA_FIELDS = "fields"
METADATA_TYPE = "type"
METADATA_STATS = "stats"
METADATA_PLAN = "plan"
METADATA_PROFILE = "profile"
METADATA_NOTIFICATIONS = "notifications"
METADATA_FAILURE_CODE = "code"
METADATA_FAILURE_MESSAGE = "message"
