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
"""Starlette application factory with CORS wired in."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from flycors.core.config import Config
from flycors.cors.policy import CorsPolicy
from flycors.cors.properties import CorsProperties
from flycors.kernel.exceptions import CorsRejectedException
from flycors.logging.structlog_adapter import StructlogAdapter
from flycors.web.adapters.starlette.cors_middleware import CorsMiddleware
from flycors.web.adapters.starlette.errors import cors_exception_handler

logger = structlog.get_logger("flycors.web")


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    cors: CorsPolicy | None = None,
    config: Config | None = None,
    debug: bool = False,
    lifespan: Any = None,
) -> Starlette:
    """Create a Starlette application guarded by :class:`CorsMiddleware`.

    The policy is taken from ``cors`` when given, otherwise from the
    ``flycors.cors`` section of ``config`` when that section is enabled.
    Without either, no CORS handling is installed.

    When ``config`` is provided, logging is configured from its
    ``flycors.logging`` section as well.
    """
    if config is not None:
        StructlogAdapter.from_config(config).configure()
        if cors is None:
            properties = config.bind(CorsProperties)
            if properties.enabled:
                cors = properties.to_policy()
        logger.info(
            "cors_configured",
            enabled=cors is not None,
            config_sources=config.loaded_sources,
        )

    middleware: list[Middleware] = []
    if cors is not None:
        middleware.append(Middleware(CorsMiddleware, policy=cors))

    app = Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=middleware,
        exception_handlers={CorsRejectedException: cors_exception_handler},
        lifespan=lifespan,
    )
    app.state.cors_policy = cors
    return app
