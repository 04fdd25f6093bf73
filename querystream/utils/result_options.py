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

from querystream.event_observers import Observer
from querystream.settings.defaults import DEFAULT_LOG_NOTIFICATIONS
from querystream.utils.unset import _UNSET, UnsetType


@dataclass
class ResultOptions:
    """
    The settings that govern how responses from the query engine are routed
    and reported while results stream in.

    This class is used to override default settings: values that are left
    unspecified keep the values inherited from the defaults (or from the
    `FullResultOptions` being overridden). See `FullResultOptions.with_override`.

    Attributes:
        event_observers: a map from observer names to `Observer` instances.
            Each of these will receive the notification, failure and success
            events produced while messages are dispatched. Overriding this
            setting merges the maps, an observer set to None in the override
            being removed.
        log_notifications: whether the notifications attached by the engine
            to a completed statement are also emitted as log warnings.
            Defaults to True.
    """

    event_observers: dict[str, Observer | None] | UnsetType = _UNSET
    log_notifications: bool | UnsetType = _UNSET


@dataclass
class FullResultOptions(ResultOptions):
    """
    A complete, fully-specified set of result options, where every attribute
    carries a definite value. This is what the `ResponseDispatcher` works with.

    Attributes:
        event_observers: a map from observer names to `Observer` instances.
        log_notifications: whether engine notifications are logged as warnings.
    """

    event_observers: dict[str, Observer] = field(default_factory=dict)
    log_notifications: bool = DEFAULT_LOG_NOTIFICATIONS

    def __init__(
        self,
        *,
        event_observers: dict[str, Observer] | None = None,
        log_notifications: bool = DEFAULT_LOG_NOTIFICATIONS,
    ) -> None:
        self.event_observers = dict(event_observers or {})
        self.log_notifications = log_notifications

    def with_override(self, other: ResultOptions | None) -> FullResultOptions:
        """
        Given an "overriding" set of options, possibly not defined in all its
        attributes, apply the override logic and return a new full options object.

        Args:
            other: a not-necessarily-fully-specified options object. All its defined
                settings take precedence.
        """

        if other is None:
            return FullResultOptions(
                event_observers=self.event_observers,
                log_notifications=self.log_notifications,
            )
        merged_observers: dict[str, Observer]
        if isinstance(other.event_observers, UnsetType):
            merged_observers = dict(self.event_observers)
        else:
            merged_observers = {
                obs_name: obs
                for obs_name, obs in {
                    **self.event_observers,
                    **other.event_observers,
                }.items()
                if obs is not None
            }
        return FullResultOptions(
            event_observers=merged_observers,
            log_notifications=(
                other.log_notifications
                if not isinstance(other.log_notifications, UnsetType)
                else self.log_notifications
            ),
        )


defaultResultOptions = FullResultOptions()
