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
"""Validation outcomes produced by the policy evaluator."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from flycors.kernel.exceptions import (
    CorsRejectedException,
    HeaderNotAllowedException,
    MethodNotAllowedException,
    OriginNotAllowedException,
)


class RejectionKind(Enum):
    """Why a cross-origin request was refused."""

    ORIGIN_NOT_ALLOWED = "Origin is not allowed to make this request"
    METHOD_NOT_ALLOWED = "Requested method is not allowed"
    HEADER_NOT_ALLOWED = "One or more requested headers are not allowed"

    @property
    def description(self) -> str:
        return self.value


_EXCEPTIONS: dict[RejectionKind, type[CorsRejectedException]] = {
    RejectionKind.ORIGIN_NOT_ALLOWED: OriginNotAllowedException,
    RejectionKind.METHOD_NOT_ALLOWED: MethodNotAllowedException,
    RejectionKind.HEADER_NOT_ALLOWED: HeaderNotAllowedException,
}


def rejection_for(kind: RejectionKind, context: dict | None = None) -> CorsRejectedException:
    """Build the exception matching *kind*."""
    return _EXCEPTIONS[kind](kind, context=context)


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Either allowed (``rejection is None``) or rejected with a kind.

    ``context`` carries the offending value for diagnostics.
    """

    rejection: RejectionKind | None = None
    context: dict | None = None

    @property
    def allowed(self) -> bool:
        return self.rejection is None

    @classmethod
    def reject(cls, kind: RejectionKind, **context: str) -> ValidationOutcome:
        return cls(rejection=kind, context=context or None)

    def and_then(self, check: Callable[[], ValidationOutcome]) -> ValidationOutcome:
        """Run *check* only if this outcome is allowed (short-circuit composition)."""
        if self.rejection is not None:
            return self
        return check()

    def raise_for_rejection(self) -> None:
        """Raise the matching :class:`CorsRejectedException` if rejected."""
        if self.rejection is not None:
            raise rejection_for(self.rejection, context=self.context)


ALLOWED = ValidationOutcome()
