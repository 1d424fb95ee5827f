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
"""Logging configuration properties (``flycors.logging.*``).

Example ``flycors.yaml``::

    flycors:
      logging:
        level: INFO
        format: json
        cors-level: DEBUG
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator

from flycors.core.config import config_properties

CORS_LOGGERS: tuple[str, ...] = ("flycors.cors", "flycors.web")
"""Loggers that carry CORS decisions (``cors_rejected``, ``cors_request_routed``, ...)."""

_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"})


@config_properties(prefix="flycors.logging")
class LoggingProperties(BaseModel):
    """Root level, output format and the level of the CORS decision loggers.

    ``cors_level`` falls back to ``level`` when unset; set it to ``DEBUG`` to
    see why individual requests were routed or rejected.
    """

    level: str = "INFO"
    format: Literal["console", "json"] = "console"
    cors_level: str | None = None

    @field_validator("level", "cors_level", mode="before")
    @classmethod
    def _known_level(cls, value: object) -> object:
        if value is None:
            return None
        level = str(value).upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return str(value).lower()

    @property
    def effective_cors_level(self) -> str:
        return self.cors_level or self.level
