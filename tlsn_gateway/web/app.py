from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from tlsn_gateway import __version__
from tlsn_gateway.attestation.types import PresentationVerifier
from tlsn_gateway.config import GatewayConfig
from tlsn_gateway.errors import MalformedRequest
from tlsn_gateway.monitoring.metrics_exporter import CONTENT_TYPE
from tlsn_gateway.service.response import assemble_failure
from tlsn_gateway.service.service import VerificationService

logger = logging.getLogger(__name__)


def create_app(
    config: GatewayConfig | None = None,
    verifier: PresentationVerifier | None = None,
    service: VerificationService | None = None,
) -> FastAPI:
    app = FastAPI(title="TLSN Gateway", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    svc = service or VerificationService(config or GatewayConfig.from_env(), verifier=verifier)
    app.state.service = svc

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return await svc.health_check()

    @app.get("/metrics")
    def metrics() -> Response:
        return Response(content=svc.metrics.export(), media_type=CONTENT_TYPE)

    @app.post("/verify")
    async def verify(request: Request) -> JSONResponse:
        # Always 200: a rejected proof is a verification outcome, not an HTTP error.
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else None
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            error = MalformedRequest(f"body is not valid JSON: {exc}")
            logger.warning(f"Proof rejected ({error.kind}): {error.message}")
            return JSONResponse(assemble_failure(error).to_dict())
        result = await svc.verify(payload)
        return JSONResponse(result.to_dict())

    return app
