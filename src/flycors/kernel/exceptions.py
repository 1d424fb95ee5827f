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
"""Unified exception hierarchy for FlyCors.

All library exceptions inherit from FlyCorsException, enabling unified
error handling at the host boundary.

Categories:
- BusinessException: invalid policy configuration detected at startup
- SecurityException: cross-origin requests rejected by the active policy
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flycors.cors.outcome import RejectionKind


class FlyCorsException(Exception):
    """Base exception for all FlyCors errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "ORIGIN_NOT_ALLOWED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# ---------------------------------------------------------------------------
# Business / configuration
# ---------------------------------------------------------------------------


class BusinessException(FlyCorsException):
    """Rule violations in caller-supplied configuration."""


class CorsConfigurationException(BusinessException):
    """A CORS policy could not be built from the supplied settings.

    ``context["errors"]`` lists every problem found, not only the first.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__(
            "Invalid CORS policy: " + "; ".join(errors),
            code="CORS_CONFIGURATION",
            context={"errors": list(errors)},
        )
        self.errors = list(errors)


# ---------------------------------------------------------------------------
# Security / rejections
# ---------------------------------------------------------------------------


class SecurityException(FlyCorsException):
    """Cross-origin access denied."""


class CorsRejectedException(SecurityException):
    """A request was rejected by the CORS policy.

    Rejections are scoped to a single request and are never retried.
    """

    def __init__(self, kind: RejectionKind, message: str | None = None, context: dict | None = None) -> None:
        super().__init__(message or kind.description, code=kind.name, context=context)
        self.kind = kind


class OriginNotAllowedException(CorsRejectedException):
    """The ``Origin`` is not in the allow-list or the origin predicate returned false."""


class MethodNotAllowedException(CorsRejectedException):
    """The preflight's requested method is missing or not allowed."""


class HeaderNotAllowedException(CorsRejectedException):
    """The preflight requested a header that is not allowed."""
