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
"""CORS middleware for Starlette — pure ASGI."""

from __future__ import annotations

import structlog
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from flycors.cors.augmenter import augment_response
from flycors.cors.interception import InterceptionState, route_request
from flycors.cors.outcome import RejectionKind, rejection_for
from flycors.cors.policy import CorsPolicy
from flycors.cors.preflight import build_preflight_response
from flycors.kernel.exceptions import CorsRejectedException
from flycors.web.adapters.starlette.errors import cors_rejection_response

logger = structlog.get_logger("flycors.web")


class CorsMiddleware:
    """Applies a :class:`CorsPolicy` to every HTTP request.

    Preflights and refused origins are answered here without calling the
    wrapped app.  Allowed cross-origin responses get their CORS headers on
    ``http.response.start``, so bodies stream through untouched.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware``; non-HTTP
    scopes (lifespan, websocket) are forwarded as-is.
    """

    def __init__(self, app: ASGIApp, policy: CorsPolicy) -> None:
        self.app = app
        self._policy = policy

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive, send)
        state = route_request(self._policy, request)
        logger.debug(
            "cors_request_routed",
            method=request.method,
            path=request.url.path,
            state=state.value,
        )

        if state.forwards:
            if state is InterceptionState.AUGMENTED:
                send = self._augmenting(request, send)
            await self.app(scope, receive, send)
        elif state is InterceptionState.PREFLIGHT_SHORT_CIRCUIT:
            await self._preflight(request)(scope, receive, send)
        else:
            exc = rejection_for(
                RejectionKind.ORIGIN_NOT_ALLOWED,
                context={"origin": request.headers.get("origin", "")},
            )
            await cors_rejection_response(request, exc)(scope, receive, send)

    def _preflight(self, request: Request) -> Response:
        try:
            preflight = build_preflight_response(self._policy, request)
        except CorsRejectedException as exc:
            return cors_rejection_response(request, exc)

        response = Response(status_code=preflight.status_code)
        for name, value in preflight.headers:
            response.headers[name] = value
        return response

    def _augmenting(self, request: Request, send: Send) -> Send:
        policy = self._policy

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                augment_response(policy, request, MutableHeaders(scope=message))
            await send(message)

        return send_with_cors
