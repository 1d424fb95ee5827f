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
"""Response augmenter — adds the CORS decision to a downstream response."""

from __future__ import annotations

import structlog

from flycors.cors.codec import encode_header_values
from flycors.cors.evaluator import resolve_allow_origin
from flycors.cors.policy import AllowAll, CorsPolicy
from flycors.cors.ports import MutableHeaderView, RequestHead
from flycors.cors.preflight import ACCESS_CONTROL_ALLOW_CREDENTIALS, ACCESS_CONTROL_ALLOW_ORIGIN

logger = structlog.get_logger("flycors.cors")

ACCESS_CONTROL_EXPOSE_HEADERS = "Access-Control-Expose-Headers"
VARY = "Vary"


def augment_response(policy: CorsPolicy, head: RequestHead, headers: MutableHeaderView) -> None:
    """Insert CORS headers into *headers* in place.

    Assumes the request's origin already passed validation.  With an
    expose-any policy, the advertised names are the response's own headers
    as handed over by the downstream handler.
    """
    response_header_names = {name.lower() for name in headers.keys()}

    origin = resolve_allow_origin(policy, head)
    if origin is not None:
        headers[ACCESS_CONTROL_ALLOW_ORIGIN] = origin

    if policy.baked_expose_value is not None:
        headers[ACCESS_CONTROL_EXPOSE_HEADERS] = policy.baked_expose_value
    elif isinstance(policy.expose_headers, AllowAll) and response_header_names:
        expose = encode_header_values(response_header_names)
        logger.debug("cors_exposing_response_headers", expose_headers=expose)
        headers[ACCESS_CONTROL_EXPOSE_HEADERS] = expose

    if policy.supports_credentials:
        headers[ACCESS_CONTROL_ALLOW_CREDENTIALS] = "true"

    if policy.vary_header:
        existing = headers.get(VARY)
        headers[VARY] = f"{existing}, Origin" if existing else "Origin"
