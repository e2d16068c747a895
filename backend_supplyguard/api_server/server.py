"""
FastAPI server — HTTP interface to the risk analyzer.

POST /api/analyze-risk scores a product history; the other routes expose the
flagged-product registry and supplier analytics kept in memory by the analyzer.
Request validation (productId / productHistory present) happens here, never
in the analyzer.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from backend_supplyguard import __version__
from backend_supplyguard.analysis_engine import RiskAnalyzer
from backend_supplyguard.api_server.middleware import RequestLoggingMiddleware
from backend_supplyguard.config import Settings, get_settings
from backend_supplyguard.core.exceptions import InvalidRequestError
from backend_supplyguard.ingestion import normalize_history
from backend_supplyguard.supplyguard_logging import configure_structlog, get_logger

logger = get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields: productId, productHistory"
PRODUCT_ID_TYPE_MESSAGE = "productId must be a string or an integer"
INVALID_BODY_MESSAGE = "Request body must be a JSON object"


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------

class AnalyzeRiskRequest(BaseModel):
    """POST /api/analyze-risk body. Both fields are checked by the route, not by the schema."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: Any = Field(None, alias="productId", description="Product id on the ledger (string or integer)")
    product_history: Any = Field(None, alias="productHistory", description="Stage history, oldest first")


# -----------------------------------------------------------------------------
# Dependency
# -----------------------------------------------------------------------------

def get_analyzer(request: Request) -> RiskAnalyzer:
    return request.app.state.analyzer


async def _invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    logger.info("analyze_risk_rejected", code=exc.code, error=exc.message)
    return JSONResponse(status_code=400, content={"error": exc.message, "code": exc.code})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable or non-object bodies are client errors like any other: 400, not 422."""
    logger.info("analyze_risk_rejected", code=InvalidRequestError.code, error=INVALID_BODY_MESSAGE)
    return JSONResponse(
        status_code=400,
        content={"error": INVALID_BODY_MESSAGE, "code": InvalidRequestError.code},
    )


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------

def create_app(analyzer: RiskAnalyzer | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the app around an analyzer (a fresh one from settings when not given)."""
    s = settings or get_settings()
    configure_structlog(s.log_level, s.log_format)
    risk_analyzer = analyzer or RiskAnalyzer.from_settings(s)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "anomaly_service_started",
            risk_threshold=risk_analyzer.risk_threshold,
            time_gap_warning_sec=risk_analyzer.detection_config.time_gap_warning_sec,
        )
        yield
        logger.info("anomaly_service_stopped")

    app = FastAPI(
        title="Backend SupplyGuard API",
        description="Counterfeit risk scoring for supply-chain product histories.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.analyzer = risk_analyzer
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(InvalidRequestError, _invalid_request_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy", "service": "anomaly-detection"}

    @app.post("/api/analyze-risk")
    def analyze_risk(body: AnalyzeRiskRequest, analyzer: RiskAnalyzer = Depends(get_analyzer)):
        """Score a product history. 400 when productId or productHistory is missing or malformed."""
        if body.product_id is None or body.product_id == "" or body.product_history is None:
            raise InvalidRequestError(MISSING_FIELDS_MESSAGE)
        if isinstance(body.product_id, bool) or not isinstance(body.product_id, (int, str)):
            raise InvalidRequestError(PRODUCT_ID_TYPE_MESSAGE)
        history = normalize_history(body.product_history)
        try:
            result = analyzer.analyze_product(body.product_id, history)
        except Exception as e:
            logger.exception("analyze_risk_failed", product_id=body.product_id, error=str(e))
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "message": str(e)},
            )
        return result.to_dict()

    @app.get("/api/flagged-products")
    def flagged_products(analyzer: RiskAnalyzer = Depends(get_analyzer)) -> dict[str, Any]:
        return {"flaggedProducts": [r.to_dict() for r in analyzer.get_flagged_products()]}

    @app.get("/api/supplier-analytics/{address}")
    def supplier_analytics(address: str, analyzer: RiskAnalyzer = Depends(get_analyzer)) -> dict[str, Any]:
        return analyzer.get_supplier_analytics(address).to_dict()

    @app.post("/api/clear-cache")
    def clear_cache(analyzer: RiskAnalyzer = Depends(get_analyzer)) -> dict[str, str]:
        analyzer.clear_cache()
        return {"message": "Cache cleared successfully"}

    return app
