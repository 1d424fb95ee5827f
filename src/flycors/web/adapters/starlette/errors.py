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
"""Rejection rendering — RFC 7807 inspired error responses."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import JSONResponse

from flycors.kernel.exceptions import CorsRejectedException

REJECTION_STATUS = 400


def cors_rejection_response(request: Request, exc: CorsRejectedException) -> JSONResponse:
    """Render a rejection as a JSON error.

    Carries no ``Access-Control-Allow-Origin``, so the browser hides the body
    from the calling script.
    """
    body: dict[str, Any] = {
        "error": {
            "message": str(exc),
            "code": exc.code,
            "timestamp": datetime.now(UTC).isoformat(),
            "status": REJECTION_STATUS,
            "path": request.url.path,
        }
    }
    if exc.context:
        body["error"]["context"] = exc.context
    return JSONResponse(body, status_code=REJECTION_STATUS)


async def cors_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Starlette exception handler for rejections raised inside routes."""
    return cors_rejection_response(request, cast(CorsRejectedException, exc))
