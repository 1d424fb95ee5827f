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
"""Fluent builder for :class:`CorsPolicy`.

The builder starts restrictive: no origin is allowed until one is named.
Problems are collected as setters are called and reported together by
:meth:`CorsBuilder.build`.

Usage::

    policy = (
        CorsBuilder()
        .allowed_origin("https://app.example.com")
        .allowed_methods(["GET", "POST"])
        .allowed_header("Content-Type")
        .supports_credentials()
        .max_age(3600)
        .build()
    )
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlsplit

from flycors.cors.policy import (
    ALLOW_ALL,
    AllowAll,
    AllowancePolicy,
    AllowByPredicate,
    AllowList,
    CorsPolicy,
    OriginPolicy,
    OriginPredicate,
)
from flycors.kernel.exceptions import CorsConfigurationException

ALL_METHODS: frozenset[str] = frozenset({"DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT"})

# RFC 9110 token
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class CorsBuilder:
    """Accumulates CORS settings and produces an immutable :class:`CorsPolicy`."""

    def __init__(self) -> None:
        self._any_origin = False
        self._origins: set[str] = set()
        self._origin_fn: OriginPredicate | None = None
        self._methods: set[str] = set(ALL_METHODS)
        self._headers: AllowancePolicy = AllowList()
        self._expose: AllowancePolicy = AllowList()
        self._supports_credentials = False
        self._max_age: int | None = None
        self._vary_header = True
        self._preflight = True
        self._errors: list[str] = []

    @classmethod
    def permissive(cls) -> CorsBuilder:
        """Allow everything. Intended for development only."""
        return (
            cls()
            .allow_any_origin()
            .allow_any_method()
            .allow_any_header()
            .expose_any_header()
            .max_age(3600)
        )

    # -- origins -------------------------------------------------------------

    def allow_any_origin(self) -> CorsBuilder:
        self._any_origin = True
        return self

    def allowed_origin(self, origin: str) -> CorsBuilder:
        """Add an exact ``scheme://host[:port]`` origin to the allow-list."""
        if origin == "*":
            self._errors.append("use allow_any_origin() instead of allowed_origin('*')")
        elif not _is_origin(origin):
            self._errors.append(f"invalid origin {origin!r}: expected scheme://host[:port]")
        else:
            self._origins.add(origin)
        return self

    def allowed_origin_fn(self, predicate: OriginPredicate) -> CorsBuilder:
        """Judge origins with ``predicate(origin, head)``.

        The predicate may run concurrently for many requests.
        """
        self._origin_fn = predicate
        return self

    # -- methods -------------------------------------------------------------

    def allow_any_method(self) -> CorsBuilder:
        self._methods = set(ALL_METHODS)
        return self

    def allowed_methods(self, methods: Iterable[str]) -> CorsBuilder:
        """Replace the allowed methods. Tokens are kept exactly as given."""
        self._methods = set()
        for method in methods:
            if _TOKEN_RE.match(method):
                self._methods.add(method)
            else:
                self._errors.append(f"invalid method token {method!r}")
        return self

    # -- request headers -----------------------------------------------------

    def allow_any_header(self) -> CorsBuilder:
        self._headers = ALLOW_ALL
        return self

    def allowed_header(self, name: str) -> CorsBuilder:
        return self.allowed_headers([name])

    def allowed_headers(self, names: Iterable[str]) -> CorsBuilder:
        """Add request header names. Has no effect after :meth:`allow_any_header`."""
        self._headers = self._extend(self._headers, names)
        return self

    # -- exposed headers -----------------------------------------------------

    def expose_any_header(self) -> CorsBuilder:
        self._expose = ALLOW_ALL
        return self

    def expose_headers(self, names: Iterable[str]) -> CorsBuilder:
        """Add response header names scripts may read."""
        self._expose = self._extend(self._expose, names)
        return self

    # -- flags ---------------------------------------------------------------

    def max_age(self, seconds: int | None) -> CorsBuilder:
        if seconds is not None and seconds < 0:
            self._errors.append(f"max_age must be non-negative, got {seconds}")
        else:
            self._max_age = seconds
        return self

    def supports_credentials(self) -> CorsBuilder:
        self._supports_credentials = True
        return self

    def disable_vary_header(self) -> CorsBuilder:
        self._vary_header = False
        return self

    def disable_preflight(self) -> CorsBuilder:
        self._preflight = False
        return self

    # -- build ---------------------------------------------------------------

    def build(self) -> CorsPolicy:
        """Produce the policy.

        Raises:
            CorsConfigurationException: listing every problem found.
        """
        errors = list(self._errors)
        if self._origin_fn is not None and self._origins:
            errors.append("an origin allow-list cannot be combined with allowed_origin_fn()")
        if self._preflight and not self._methods:
            errors.append("at least one method is required while preflight is enabled")
        if errors:
            raise CorsConfigurationException(errors)

        return CorsPolicy(
            allowed_origins=self._origin_policy(),
            allowed_methods=frozenset(self._methods),
            allowed_headers=self._headers,
            expose_headers=self._expose,
            supports_credentials=self._supports_credentials,
            max_age=self._max_age,
            vary_header=self._vary_header,
            preflight_enabled=self._preflight,
        )

    def _origin_policy(self) -> OriginPolicy:
        # A predicate narrows "any origin" down to the origins it accepts.
        if self._origin_fn is not None:
            return AllowByPredicate(self._origin_fn)
        if self._any_origin:
            return ALLOW_ALL
        return AllowList(frozenset(self._origins))

    def _extend(self, current: AllowancePolicy, names: Iterable[str]) -> AllowancePolicy:
        match current:
            case AllowAll():
                return current
            case AllowList(values):
                # Header names are case-insensitive: first spelling wins.
                accepted = {value.lower(): value for value in values}
                for name in names:
                    if not _TOKEN_RE.match(name):
                        self._errors.append(f"invalid header name {name!r}")
                    else:
                        accepted.setdefault(name.lower(), name)
                return AllowList(frozenset(accepted.values()))


def _is_origin(value: str) -> bool:
    try:
        parts = urlsplit(value)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError:
        return False
    return bool(parts.scheme and parts.hostname) and not (parts.path or parts.query or parts.fragment)
