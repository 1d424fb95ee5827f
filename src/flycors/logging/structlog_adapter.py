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
"""StructlogAdapter — renders FlyCors decision events through structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from flycors.core.config import Config
from flycors.logging.properties import CORS_LOGGERS, LoggingProperties


class StructlogAdapter:
    """Configures structlog on top of stdlib logging for a FlyCors host.

    The root logger gets ``properties.level``; the CORS decision loggers
    (``flycors.cors`` and ``flycors.web``) get ``properties.cors_level`` so
    per-request debug events can be switched on without flooding the rest of
    the application.
    """

    def __init__(self, properties: LoggingProperties | None = None) -> None:
        self._properties = properties or LoggingProperties()

    @classmethod
    def from_config(cls, config: Config) -> StructlogAdapter:
        return cls(config.bind(LoggingProperties))

    @property
    def properties(self) -> LoggingProperties:
        return self._properties

    def configure(self) -> None:
        renderer: structlog.types.Processor
        if self._properties.format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer()

        structlog.configure(
            processors=[
                # must stay first: drops events below the stdlib logger level
                structlog.stdlib.filter_by_level,
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.UnicodeDecoder(),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=self._properties.level,
            force=True,
        )

        cors_level = self._properties.effective_cors_level
        for name in CORS_LOGGERS:
            logging.getLogger(name).setLevel(cors_level)
