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
"""Request routing for the interception layer.

Decides, before the downstream handler runs, which terminal state a request
ends in.  Host adapters act on the result; this module never touches a
response.
"""

from __future__ import annotations

from enum import Enum

from flycors.cors.evaluator import ORIGIN, validate_origin
from flycors.cors.policy import CorsPolicy
from flycors.cors.ports import RequestHead
from flycors.cors.preflight import is_preflight


class InterceptionState(Enum):
    """Terminal states of a request passing through the CORS layer."""

    PREFLIGHT_SHORT_CIRCUIT = "preflight_short_circuit"
    """Answered as a preflight; downstream never called."""

    REJECTED_SHORT_CIRCUIT = "rejected_short_circuit"
    """Origin refused; error response, downstream never called."""

    AUGMENTED = "augmented"
    """Forwarded downstream; CORS headers added to its response."""

    PASS_THROUGH = "pass_through"
    """No ``Origin``; forwarded and returned unmodified."""

    @property
    def forwards(self) -> bool:
        return self in (InterceptionState.AUGMENTED, InterceptionState.PASS_THROUGH)


def route_request(policy: CorsPolicy, head: RequestHead) -> InterceptionState:
    if is_preflight(policy, head):
        return InterceptionState.PREFLIGHT_SHORT_CIRCUIT
    if ORIGIN not in head.headers:
        return InterceptionState.PASS_THROUGH
    if not validate_origin(policy, head).allowed:
        return InterceptionState.REJECTED_SHORT_CIRCUIT
    return InterceptionState.AUGMENTED
