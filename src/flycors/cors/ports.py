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
"""Host-facing protocols for the CORS core.

Uses structural typing so that vendor-specific types (e.g. Starlette's
``Request`` and ``MutableHeaders``) satisfy them without adapters and stay
confined to the web layer.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class HeaderView(Protocol):
    """Read-only, case-insensitive header lookup."""

    def get(self, key: str, default: str | None = None) -> str | None: ...
    def getlist(self, key: str) -> list[str]: ...
    def keys(self) -> Iterable[str]: ...
    def __contains__(self, key: object) -> bool: ...


@runtime_checkable
class MutableHeaderView(HeaderView, Protocol):
    """Header lookup that can also insert or replace a value."""

    def __setitem__(self, key: str, value: str) -> None: ...


@runtime_checkable
class RequestHead(Protocol):
    """The parts of an incoming request the policy evaluator reads."""

    @property
    def method(self) -> str: ...

    @property
    def headers(self) -> HeaderView: ...
