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

from typing import Any

import pytest

from querystream import FullResultOptions, ResultOptions
from querystream.event_observers import ObservableEvent, Observer
from querystream.utils.result_options import defaultResultOptions
from querystream.utils.unset import _UNSET, UnsetType


class NamedObserver(Observer):
    def __init__(self, name: str) -> None:
        self.name = name

    def receive(self, event: ObservableEvent, sender: Any = None) -> None:
        pass


class TestResultOptions:
    @pytest.mark.describe("test of the default result options")
    def test_resultoptions_defaults(self) -> None:
        assert defaultResultOptions.event_observers == {}
        assert defaultResultOptions.log_notifications is True
        assert ResultOptions().log_notifications is _UNSET
        assert isinstance(ResultOptions().event_observers, UnsetType)

    @pytest.mark.describe("test of overriding result options")
    def test_resultoptions_override(self) -> None:
        obs_a = NamedObserver("a")
        obs_b = NamedObserver("b")
        base = FullResultOptions(event_observers={"a": obs_a})

        assert base.with_override(None) == base
        assert base.with_override(ResultOptions()) == base

        overridden = base.with_override(
            ResultOptions(event_observers={"b": obs_b}, log_notifications=False)
        )
        assert overridden.event_observers == {"a": obs_a, "b": obs_b}
        assert overridden.log_notifications is False
        # the original is left untouched
        assert base.event_observers == {"a": obs_a}

        removed = overridden.with_override(ResultOptions(event_observers={"a": None}))
        assert removed.event_observers == {"b": obs_b}
        assert removed.log_notifications is False
