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
"""Tests for the policy evaluator checks and origin resolution."""

from __future__ import annotations

import pytest

from flycors.cors.evaluator import (
    resolve_allow_origin,
    validate_allowed_headers,
    validate_allowed_method,
    validate_origin,
    validate_preflight,
)
from flycors.cors.outcome import ALLOWED, RejectionKind
from flycors.cors.policy import ALLOW_ALL, AllowByPredicate, AllowList, CorsPolicy
from flycors.kernel.exceptions import OriginNotAllowedException

EXAMPLE = "http://example.com"


def _policy(**kwargs) -> CorsPolicy:
    kwargs.setdefault("allowed_methods", frozenset({"GET", "POST"}))
    return CorsPolicy(**kwargs)


class TestValidateOrigin:
    def test_no_origin_is_allowed(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        assert validate_origin(policy, make_head()) == ALLOWED

    def test_allow_all(self, make_head):
        policy = _policy(allowed_origins=ALLOW_ALL)
        assert validate_origin(policy, make_head(headers={"Origin": "http://anything.test"})).allowed

    def test_allow_list_member(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        assert validate_origin(policy, make_head(headers={"Origin": EXAMPLE})).allowed

    def test_allow_list_non_member(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        outcome = validate_origin(policy, make_head(headers={"Origin": "http://evil.com"}))

        assert not outcome.allowed
        assert outcome.rejection is RejectionKind.ORIGIN_NOT_ALLOWED
        assert outcome.context == {"origin": "http://evil.com"}

    def test_allow_list_is_case_sensitive(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        outcome = validate_origin(policy, make_head(headers={"Origin": "http://EXAMPLE.com"}))
        assert outcome.rejection is RejectionKind.ORIGIN_NOT_ALLOWED

    def test_allow_list_no_prefix_matching(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        outcome = validate_origin(policy, make_head(headers={"Origin": EXAMPLE + ":8080"}))
        assert not outcome.allowed

    def test_predicate_sees_origin_and_head(self, make_head):
        seen = []

        def predicate(origin, head):
            seen.append((origin, head.headers.get("origin")))
            return "DNT" in head.headers

        policy = _policy(allowed_origins=AllowByPredicate(predicate))

        rejected = validate_origin(policy, make_head(headers={"Origin": EXAMPLE}))
        allowed = validate_origin(policy, make_head(headers={"Origin": EXAMPLE, "DNT": "1"}))

        assert rejected.rejection is RejectionKind.ORIGIN_NOT_ALLOWED
        assert allowed.allowed
        assert seen == [(EXAMPLE, EXAMPLE), (EXAMPLE, EXAMPLE)]

    def test_predicate_not_called_without_origin(self, make_head):
        def predicate(origin, head):
            raise AssertionError("must not be called")

        policy = _policy(allowed_origins=AllowByPredicate(predicate))
        assert validate_origin(policy, make_head()).allowed


class TestValidateAllowedMethod:
    def test_member(self, make_head):
        head = make_head("OPTIONS", {"Access-Control-Request-Method": "POST"})
        assert validate_allowed_method(_policy(), head).allowed

    def test_non_member(self, make_head):
        head = make_head("OPTIONS", {"Access-Control-Request-Method": "DELETE"})
        outcome = validate_allowed_method(_policy(), head)
        assert outcome.rejection is RejectionKind.METHOD_NOT_ALLOWED

    def test_exact_token_match(self, make_head):
        head = make_head("OPTIONS", {"Access-Control-Request-Method": "post"})
        outcome = validate_allowed_method(_policy(), head)
        assert outcome.rejection is RejectionKind.METHOD_NOT_ALLOWED

    def test_missing_header(self, make_head):
        outcome = validate_allowed_method(_policy(), make_head("OPTIONS"))
        assert outcome.rejection is RejectionKind.METHOD_NOT_ALLOWED


class TestValidateAllowedHeaders:
    def test_allow_all(self, make_head):
        policy = _policy(allowed_headers=ALLOW_ALL)
        head = make_head("OPTIONS", {"Access-Control-Request-Headers": "X-Anything, ,,"})
        assert validate_allowed_headers(policy, head).allowed

    def test_no_header_requested(self, make_head):
        policy = _policy(allowed_headers=AllowList.of(["X-Token"]))
        assert validate_allowed_headers(policy, make_head("OPTIONS")).allowed

    def test_case_insensitive_and_trimmed(self, make_head):
        policy = _policy(allowed_headers=AllowList.of(["X-Token", "Content-Type"]))
        head = make_head("OPTIONS", {"Access-Control-Request-Headers": " x-token ,CONTENT-TYPE"})
        assert validate_allowed_headers(policy, head).allowed

    def test_unmatched_token_rejected(self, make_head):
        policy = _policy(allowed_headers=AllowList.of(["X-Token"]))
        head = make_head("OPTIONS", {"Access-Control-Request-Headers": "x-token, x-secret, x-other"})
        outcome = validate_allowed_headers(policy, head)

        assert outcome.rejection is RejectionKind.HEADER_NOT_ALLOWED
        # Fails on the first unmatched token.
        assert outcome.context == {"header": "x-secret"}

    @pytest.mark.parametrize("value", ["X-Token,", ",", "X-Token,,X-Token", "X Token"])
    def test_malformed_value_rejected(self, make_head, value):
        policy = _policy(allowed_headers=AllowList.of(["X-Token"]))
        head = make_head("OPTIONS", {"Access-Control-Request-Headers": value})
        assert validate_allowed_headers(policy, head).rejection is RejectionKind.HEADER_NOT_ALLOWED


class TestValidatePreflight:
    def test_short_circuits_on_origin(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        head = make_head("OPTIONS", {"Origin": "http://evil.com"})
        # Method header is missing too, but the origin is reported first.
        assert validate_preflight(policy, head).rejection is RejectionKind.ORIGIN_NOT_ALLOWED

    def test_method_before_headers(self, make_head):
        policy = _policy(allowed_origins=ALLOW_ALL, allowed_headers=AllowList.of(["X-A"]))
        head = make_head(
            "OPTIONS",
            {
                "Origin": EXAMPLE,
                "Access-Control-Request-Method": "PATCH",
                "Access-Control-Request-Headers": "X-B",
            },
        )
        assert validate_preflight(policy, head).rejection is RejectionKind.METHOD_NOT_ALLOWED

    def test_all_pass(self, make_head):
        policy = _policy(allowed_origins=ALLOW_ALL, allowed_headers=AllowList.of(["X-A"]))
        head = make_head(
            "OPTIONS",
            {"Origin": EXAMPLE, "Access-Control-Request-Method": "GET", "Access-Control-Request-Headers": "x-a"},
        )
        assert validate_preflight(policy, head) == ALLOWED

    def test_raise_for_rejection(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        outcome = validate_origin(policy, make_head(headers={"Origin": "http://evil.com"}))

        with pytest.raises(OriginNotAllowedException) as info:
            outcome.raise_for_rejection()
        assert info.value.kind is RejectionKind.ORIGIN_NOT_ALLOWED
        assert info.value.code == "ORIGIN_NOT_ALLOWED"


class TestResolveAllowOrigin:
    def test_no_origin(self, make_head):
        assert resolve_allow_origin(_policy(allowed_origins=ALLOW_ALL), make_head()) is None

    def test_allow_all_without_credentials_is_wildcard(self, make_head):
        policy = _policy(allowed_origins=ALLOW_ALL)
        assert resolve_allow_origin(policy, make_head(headers={"Origin": EXAMPLE})) == "*"

    def test_allow_all_with_credentials_echoes(self, make_head):
        policy = _policy(allowed_origins=ALLOW_ALL, supports_credentials=True)
        assert resolve_allow_origin(policy, make_head(headers={"Origin": EXAMPLE})) == EXAMPLE

    def test_allow_list_echoes(self, make_head):
        policy = _policy(allowed_origins=AllowList.of([EXAMPLE]))
        assert resolve_allow_origin(policy, make_head(headers={"Origin": EXAMPLE})) == EXAMPLE

    def test_predicate_echoes(self, make_head):
        policy = _policy(allowed_origins=AllowByPredicate(lambda origin, head: True))
        assert resolve_allow_origin(policy, make_head(headers={"Origin": EXAMPLE})) == EXAMPLE
