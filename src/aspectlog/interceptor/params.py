# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Per-parameter opt-in marker for pre-call logging.

Either form marks a parameter::

    def greet(self, name: LogParameter[str], last_name: str) -> str: ...
    def greet(self, name: Annotated[str, LogParameter], last_name: str) -> str: ...

``Optional[LogParameter[str]]`` and ``LogParameter[str] | None`` are marked
too. Unmarked parameters never appear in a record, even when parameter logging
is active for the method.
"""

from __future__ import annotations

import types
import typing
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class LogParameter(Generic[T]):
    """Include this parameter's name and value in the pre-call record."""


def is_log_parameter(hint: Any) -> bool:
    """Return whether a resolved type hint carries the ``LogParameter`` marker.

    Optional and union hints such as ``LogParameter[str] | None`` are marked
    when any member is.
    """
    if typing.get_origin(hint) is Union or isinstance(hint, types.UnionType):
        return any(is_log_parameter(member) for member in typing.get_args(hint))
    if hint is LogParameter or typing.get_origin(hint) is LogParameter:
        return True
    if typing.get_origin(hint) is typing.Annotated:
        return any(item is LogParameter or isinstance(item, LogParameter) for item in hint.__metadata__)
    return False
