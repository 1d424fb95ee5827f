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
"""CORS configuration properties (``flycors.cors.*``).

Example ``flycors.yaml``::

    flycors:
      cors:
        enabled: true
        allowed-origins: ["https://app.example.com"]
        allowed-methods: ["GET", "POST"]
        allowed-headers: ["Content-Type", "Authorization"]
        expose-headers: ["X-Request-ID"]
        supports-credentials: true
        max-age: 3600
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from flycors.core.config import config_properties
from flycors.cors.builder import CorsBuilder
from flycors.cors.policy import CorsPolicy

ANY = "*"


@config_properties(prefix="flycors.cors")
class CorsProperties(BaseModel):
    """Declarative CORS settings. ``["*"]`` in a list means "any"."""

    enabled: bool = False
    allowed_origins: list[str] = Field(default_factory=list)
    allowed_methods: list[str] = Field(default_factory=lambda: [ANY])
    allowed_headers: list[str] = Field(default_factory=list)
    expose_headers: list[str] = Field(default_factory=list)
    supports_credentials: bool = False
    max_age: int | None = Field(default=None, ge=0)
    vary_header: bool = True
    preflight: bool = True

    @field_validator("allowed_origins", "allowed_methods", "allowed_headers", "expose_headers", mode="before")
    @classmethod
    def _split_csv(cls, value: object) -> object:
        # Also accept "a, b, c" (e.g. a ${PLACEHOLDER} resolved from the environment).
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    def to_policy(self) -> CorsPolicy:
        """Build the immutable policy; raises ``CorsConfigurationException`` if invalid."""
        builder = CorsBuilder()

        if ANY in self.allowed_origins:
            builder.allow_any_origin()
        else:
            for origin in self.allowed_origins:
                builder.allowed_origin(origin)

        if ANY in self.allowed_methods:
            builder.allow_any_method()
        else:
            builder.allowed_methods(self.allowed_methods)

        if ANY in self.allowed_headers:
            builder.allow_any_header()
        else:
            builder.allowed_headers(self.allowed_headers)

        if ANY in self.expose_headers:
            builder.expose_any_header()
        else:
            builder.expose_headers(self.expose_headers)

        if self.supports_credentials:
            builder.supports_credentials()
        if not self.vary_header:
            builder.disable_vary_header()
        if not self.preflight:
            builder.disable_preflight()

        return builder.max_age(self.max_age).build()
