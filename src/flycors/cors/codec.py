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
"""Header value codec — comma-joined token lists."""

from __future__ import annotations

from collections.abc import Iterable

SEPARATOR = ", "


def encode_header_values(tokens: Iterable[str]) -> str:
    """Join *tokens* into a single header value.

    Tokens are de-duplicated and sorted, so equal sets always encode to the
    same string regardless of iteration order::

        >>> encode_header_values({"X", "A", "B"})
        'A, B, X'
    """
    return SEPARATOR.join(sorted(set(tokens)))


def split_header_values(value: str) -> list[str]:
    """Split a comma-separated header value into whitespace-trimmed tokens.

    Empty tokens are kept so callers can treat them as malformed.
    """
    return [token.strip() for token in value.split(",")]


def bake(tokens: Iterable[str]) -> str | None:
    """Precompute the header value for a closed token set, or ``None`` when empty."""
    tokens = frozenset(tokens)
    if not tokens:
        return None
    return encode_header_values(tokens)
