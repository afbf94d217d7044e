#!/usr/bin/env python3
"""
Header Guardian - FastAPI Backend
"""
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Dict, Optional
import sys
import logging
from pathlib import Path
import time as _time

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from fetcher import FetchError
from guardian import HeaderGuardian
from settings import load_config

from backend.metrics import (
    record_analysis, record_fetch_failure, set_app_info, get_metrics_output,
    get_metrics_content_type, HTTP_REQUESTS_TOTAL, HTTP_REQUEST_DURATION,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Header Guardian API",
    description="API for scoring the HTTP security headers of a URL",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# Prometheus metrics middleware
@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    path = request.url.path
    # Skip metrics noise from scraping and health checks
    if path in ("/metrics", "/health"):
        return await call_next(request)
    method = request.method
    start = _time.time()
    response = await call_next(request)
    duration = _time.time() - start
    # Label by route template so unknown paths share one series
    route = request.scope.get("route")
    endpoint = getattr(route, "path", None) or "unmatched"
    HTTP_REQUESTS_TOTAL.labels(method=method, endpoint=endpoint, status=response.status_code).inc()
    HTTP_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)
    return response


# Global instances
config: Optional[Dict] = None
guardian: Optional[HeaderGuardian] = None


# Pydantic models
class AnalyzeRequest(BaseModel):
    url: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


# Error rendering
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# Initialize
@app.on_event("startup")
async def startup_event():
    global config, guardian

    config = load_config()
    guardian = HeaderGuardian.from_config(config)

    set_app_info(version=app.version, verify_tls=guardian.fetcher.verify_tls)


@app.post("/analyze", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def analyze(analyze_request: AnalyzeRequest):
    """Fetch a URL and score its security headers"""
    if not analyze_request.url:
        raise HTTPException(status_code=400, detail="URL is required")

    if guardian is None:
        raise HTTPException(status_code=500, detail="Analyzer not initialized")

    try:
        result = guardian.analyze_url(analyze_request.url)
    except FetchError as e:
        record_fetch_failure()
        raise HTTPException(status_code=500, detail=f"Failed to analyze URL: {e}")

    record_analysis(result)
    return result.to_dict()


@app.get("/metrics", include_in_schema=False)
async def prometheus_metrics():
    """Prometheus metrics endpoint."""
    return Response(content=get_metrics_output(), media_type=get_metrics_content_type())


# Health check
@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    server_config = load_config().get('server', {})
    uvicorn.run(app, host=server_config.get('host', '0.0.0.0'), port=int(server_config.get('port', 8080)))
