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
"""Policy evaluator — pure checks of a request head against a CorsPolicy.

Every check returns a :class:`ValidationOutcome` and never raises on
malformed input; malformed values simply fail to match.  Only a
caller-supplied origin predicate can raise.
"""

from __future__ import annotations

import structlog

from flycors.cors.codec import split_header_values
from flycors.cors.outcome import ALLOWED, RejectionKind, ValidationOutcome
from flycors.cors.policy import AllowAll, AllowByPredicate, AllowList, CorsPolicy
from flycors.cors.ports import RequestHead

logger = structlog.get_logger("flycors.cors")

ORIGIN = "Origin"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"

WILDCARD = "*"


def validate_origin(policy: CorsPolicy, head: RequestHead) -> ValidationOutcome:
    """Check the request's ``Origin`` against the origin policy.

    A request without ``Origin`` is not cross-origin and is always allowed.
    """
    origin = head.headers.get(ORIGIN)
    if origin is None:
        return ALLOWED

    match policy.allowed_origins:
        case AllowAll():
            allowed = True
        case AllowList(values):
            allowed = origin in values
        case AllowByPredicate(predicate):
            allowed = bool(predicate(origin, head))

    if allowed:
        return ALLOWED
    return _rejected(RejectionKind.ORIGIN_NOT_ALLOWED, origin=origin)


def validate_allowed_method(policy: CorsPolicy, head: RequestHead) -> ValidationOutcome:
    """Check ``Access-Control-Request-Method``; a missing header is rejected.

    Methods are compared as exact tokens, without case folding.
    """
    method = head.headers.get(ACCESS_CONTROL_REQUEST_METHOD)
    if method is None:
        return _rejected(RejectionKind.METHOD_NOT_ALLOWED, method="")
    if method in policy.allowed_methods:
        return ALLOWED
    return _rejected(RejectionKind.METHOD_NOT_ALLOWED, method=method)


def validate_allowed_headers(policy: CorsPolicy, head: RequestHead) -> ValidationOutcome:
    """Check every token of ``Access-Control-Request-Headers``, failing on the first miss."""
    match policy.allowed_headers:
        case AllowAll():
            return ALLOWED
        case AllowList():
            pass

    requested = head.headers.get(ACCESS_CONTROL_REQUEST_HEADERS)
    if requested is None:
        return ALLOWED

    for token in split_header_values(requested):
        if not token or token.lower() not in policy.allowed_header_names:
            return _rejected(RejectionKind.HEADER_NOT_ALLOWED, header=token)
    return ALLOWED


def validate_preflight(policy: CorsPolicy, head: RequestHead) -> ValidationOutcome:
    """Origin, then method, then headers; stops at the first rejection."""
    return (
        validate_origin(policy, head)
        .and_then(lambda: validate_allowed_method(policy, head))
        .and_then(lambda: validate_allowed_headers(policy, head))
    )


def resolve_allow_origin(policy: CorsPolicy, head: RequestHead) -> str | None:
    """Value for ``Access-Control-Allow-Origin``, or ``None`` without an ``Origin``.

    The wildcard is only used for :class:`AllowAll` without credentials;
    every other case echoes the request's exact origin.
    """
    origin = head.headers.get(ORIGIN)
    if origin is None:
        return None
    if isinstance(policy.allowed_origins, AllowAll) and not policy.supports_credentials:
        return WILDCARD
    return origin


def _rejected(kind: RejectionKind, **context: str) -> ValidationOutcome:
    logger.debug("cors_rejected", kind=kind.name, **context)
    return ValidationOutcome.reject(kind, **context)
