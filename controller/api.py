import logging
import time
from typing import Any, Dict, Optional
from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app_spec import ConfigDecodeError, get_example_configs, load_app_config, validate_config
from controller.utils.models import (
    DecodeErrorResponse,
    HealthResponse,
    ValidationResponse,
    ViolationResponse
)
from metrics.exporter import MetricsExporter

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# FastAPI app
app = FastAPI(
    title="App Config Validation API",
    description="Validates application deployment configurations",
    version=API_VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_metrics_exporter: Optional[MetricsExporter] = None

def get_metrics_exporter() -> MetricsExporter:
    global _metrics_exporter
    if _metrics_exporter is None:
        _metrics_exporter = MetricsExporter()
    return _metrics_exporter

# API Endpoints

@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness probe."""
    return HealthResponse(status="healthy", service="appspec", version=API_VERSION)

@app.post(
    "/apps/validate",
    response_model=ValidationResponse,
    responses={422: {"model": DecodeErrorResponse}}
)
async def validate_app(config: Dict[str, Any] = Body(...)):
    """
    Validate an application configuration.

    Invalid configurations are an ordinary result and return 200 with the
    full list of violations. Only bodies that cannot be decoded into the
    schema's types are rejected with 422.
    """
    exporter = get_metrics_exporter()
    started_at = time.time()

    try:
        app_config = load_app_config(config)
    except ConfigDecodeError as e:
        exporter.record_decode_error()
        logger.error(f"Failed to decode app config: {e}")
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg"), "type": err.get("type")}
            for err in e.errors
        ]
        return JSONResponse(
            status_code=422,
            content=DecodeErrorResponse(detail=str(e), errors=errors).model_dump()
        )

    report = validate_config(app_config)
    exporter.record_validation(report, started_at)

    if not report.ok:
        logger.info(f"App config '{app_config.app_name}' rejected with {len(report)} violation(s)")

    return ValidationResponse(
        app=app_config.app_name,
        valid=report.ok,
        violations=[ViolationResponse(**v.to_dict()) for v in report]
    )

@app.get("/apps/examples")
async def list_examples():
    """List the names of the bundled example configurations."""
    return sorted(get_example_configs().keys())

@app.get("/apps/examples/{name}")
async def get_example(name: str):
    """Get an example configuration by name."""
    examples = get_example_configs()
    if name not in examples:
        raise HTTPException(status_code=404, detail=f"Example '{name}' not found")
    return examples[name]

@app.get("/metrics")
async def metrics():
    """Prometheus metrics."""
    exporter = get_metrics_exporter()
    return Response(content=exporter.export(), media_type=exporter.content_type)
