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
"""FlyCors CORS — framework-agnostic policy engine."""

from flycors.cors.augmenter import augment_response
from flycors.cors.builder import ALL_METHODS, CorsBuilder
from flycors.cors.codec import encode_header_values
from flycors.cors.evaluator import (
    resolve_allow_origin,
    validate_allowed_headers,
    validate_allowed_method,
    validate_origin,
    validate_preflight,
)
from flycors.cors.interception import InterceptionState, route_request
from flycors.cors.outcome import ALLOWED, RejectionKind, ValidationOutcome
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
from flycors.cors.ports import HeaderView, MutableHeaderView, RequestHead
from flycors.cors.preflight import PreflightResponse, build_preflight_response, is_preflight

__all__ = [
    "ALLOWED",
    "ALLOW_ALL",
    "ALL_METHODS",
    "AllowAll",
    "AllowByPredicate",
    "AllowList",
    "AllowancePolicy",
    "CorsBuilder",
    "CorsPolicy",
    "HeaderView",
    "InterceptionState",
    "MutableHeaderView",
    "OriginPolicy",
    "OriginPredicate",
    "PreflightResponse",
    "RejectionKind",
    "RequestHead",
    "ValidationOutcome",
    "augment_response",
    "build_preflight_response",
    "encode_header_values",
    "is_preflight",
    "resolve_allow_origin",
    "route_request",
    "validate_allowed_headers",
    "validate_allowed_method",
    "validate_origin",
    "validate_preflight",
]
