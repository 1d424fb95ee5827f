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
"""Preflight responder — synthesizes the answer to an ``OPTIONS`` preflight."""

from __future__ import annotations

from dataclasses import dataclass

from flycors.cors.evaluator import (
    ACCESS_CONTROL_REQUEST_HEADERS,
    resolve_allow_origin,
    validate_preflight,
)
from flycors.cors.policy import CorsPolicy
from flycors.cors.ports import RequestHead

ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ACCESS_CONTROL_ALLOW_METHODS = "Access-Control-Allow-Methods"
ACCESS_CONTROL_ALLOW_HEADERS = "Access-Control-Allow-Headers"
ACCESS_CONTROL_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ACCESS_CONTROL_MAX_AGE = "Access-Control-Max-Age"


@dataclass(frozen=True)
class PreflightResponse:
    """A bodiless response, independent of any web framework."""

    status_code: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str) -> str | None:
        """Case-insensitive lookup of a single header value."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None


def is_preflight(policy: CorsPolicy, head: RequestHead) -> bool:
    """Whether *head* must be answered as a preflight under *policy*."""
    return policy.preflight_enabled and head.method == "OPTIONS"


def build_preflight_response(policy: CorsPolicy, head: RequestHead) -> PreflightResponse:
    """Validate a preflight and build its response.

    Raises:
        CorsRejectedException: if the origin, requested method or requested
            headers are not allowed. The downstream handler must not run.
    """
    validate_preflight(policy, head).raise_for_rejection()

    headers: list[tuple[str, str]] = []

    origin = resolve_allow_origin(policy, head)
    if origin is not None:
        headers.append((ACCESS_CONTROL_ALLOW_ORIGIN, origin))

    if policy.baked_methods_value is not None:
        headers.append((ACCESS_CONTROL_ALLOW_METHODS, policy.baked_methods_value))

    if policy.baked_headers_value is not None:
        headers.append((ACCESS_CONTROL_ALLOW_HEADERS, policy.baked_headers_value))
    else:
        # Any header allowed: reflect what was asked for.
        requested = head.headers.get(ACCESS_CONTROL_REQUEST_HEADERS)
        if requested is not None:
            headers.append((ACCESS_CONTROL_ALLOW_HEADERS, requested))

    if policy.supports_credentials:
        headers.append((ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"))

    if policy.max_age is not None:
        headers.append((ACCESS_CONTROL_MAX_AGE, str(policy.max_age)))

    return PreflightResponse(status_code=200, headers=tuple(headers))
