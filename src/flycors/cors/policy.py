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
"""CORS policy data model.

Origin, header and expose policies are closed variants (:class:`AllowAll`,
:class:`AllowList`, :class:`AllowByPredicate`) matched explicitly by the
evaluator.  :class:`CorsPolicy` is immutable and bakes every closed list into
its header value once, at construction, so a single instance can be shared by
all concurrent requests without locking.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from flycors.cors.codec import bake
from flycors.kernel.exceptions import CorsConfigurationException

if TYPE_CHECKING:
    from flycors.cors.ports import RequestHead

OriginPredicate: TypeAlias = Callable[[str, "RequestHead"], bool]
"""``fn(origin, head) -> bool``.

May be called concurrently from many requests; it must be pure or
synchronize any state it captures.
"""


@dataclass(frozen=True, slots=True)
class AllowAll:
    """Every value is acceptable."""


@dataclass(frozen=True, slots=True)
class AllowList:
    """Only the enumerated values are acceptable."""

    values: frozenset[str] = frozenset()

    @classmethod
    def of(cls, values: Iterable[str]) -> AllowList:
        return cls(frozenset(values))


@dataclass(frozen=True, slots=True)
class AllowByPredicate:
    """An origin is acceptable when ``predicate(origin, head)`` is true."""

    predicate: OriginPredicate


OriginPolicy: TypeAlias = AllowAll | AllowList | AllowByPredicate
AllowancePolicy: TypeAlias = AllowAll | AllowList

ALLOW_ALL = AllowAll()


@dataclass(frozen=True)
class CorsPolicy:
    """Immutable CORS access policy.

    Origins in an :class:`AllowList` are compared case-sensitively; header
    names are compared case-insensitively; methods by exact token.

    Attributes:
        allowed_origins: Which ``Origin`` values may access the resource.
        allowed_methods: Methods advertised and accepted during preflight.
        allowed_headers: Request headers a preflight may ask for.
        expose_headers: Response headers scripts are allowed to read.
        supports_credentials: Emit ``Access-Control-Allow-Credentials: true``.
            A literal ``*`` origin is never sent when this is set.
        max_age: Seconds a browser may cache a preflight result.
        vary_header: Append ``Origin`` to ``Vary`` on augmented responses.
        preflight_enabled: Answer ``OPTIONS`` requests as preflights.
    """

    allowed_origins: OriginPolicy = field(default_factory=AllowList)
    allowed_methods: frozenset[str] = frozenset()
    allowed_headers: AllowancePolicy = field(default_factory=AllowList)
    expose_headers: AllowancePolicy = field(default_factory=AllowList)
    supports_credentials: bool = False
    max_age: int | None = None
    vary_header: bool = True
    preflight_enabled: bool = True

    baked_methods_value: str | None = field(init=False, default=None)
    baked_headers_value: str | None = field(init=False, default=None)
    baked_expose_value: str | None = field(init=False, default=None)
    allowed_header_names: frozenset[str] = field(init=False, default=frozenset(), repr=False)

    def __post_init__(self) -> None:
        errors: list[str] = []
        if self.allowed_origins is None:
            errors.append("allowed_origins must not be None")
        if self.max_age is not None and self.max_age < 0:
            errors.append(f"max_age must be non-negative, got {self.max_age}")
        if self.preflight_enabled and not self.allowed_methods:
            errors.append("allowed_methods must not be empty when preflight is enabled")
        if errors:
            raise CorsConfigurationException(errors)

        # Frozen: bake through object.__setattr__, exactly once.
        object.__setattr__(self, "allowed_methods", frozenset(self.allowed_methods))
        object.__setattr__(self, "baked_methods_value", bake(self.allowed_methods))

        match self.allowed_headers:
            case AllowList(values):
                object.__setattr__(self, "baked_headers_value", bake(values))
                object.__setattr__(self, "allowed_header_names", frozenset(v.lower() for v in values))
            case AllowAll():
                pass

        match self.expose_headers:
            case AllowList(values):
                object.__setattr__(self, "baked_expose_value", bake(values))
            case AllowAll():
                pass
