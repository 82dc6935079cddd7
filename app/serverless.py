"""Serverless-function entry points (Netlify/Lambda proxy style) over the same pipeline.

Each handler takes an event with `queryStringParameters` (and, for the
routing `handler`, a `path`) and returns `{"statusCode", "headers", "body"}`.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional

from app.config import settings
from app.environment_service import EnvironmentService, build_location_query, get_default_service
from app.errors import EcoWatchError
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="serverless")

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def _response(status_code: int, payload: Any) -> Dict[str, Any]:
    return {"statusCode": status_code, "headers": dict(JSON_HEADERS), "body": json.dumps(payload)}


def _run(event: Dict[str, Any], action: Callable[[EnvironmentService, Any], Any],
         service: Optional[EnvironmentService]) -> Dict[str, Any]:
    setup_logging(level=settings.log_level, job_name="ecowatch-fn")
    params = (event or {}).get("queryStringParameters") or {}
    try:
        query = build_location_query(city=params.get("city"), zip_code=params.get("zipCode"))
        result = action(service or get_default_service(), query)
    except EcoWatchError as exc:
        return _response(exc.status_code, {"error": exc.message})
    except Exception as exc:
        logger.exception("Function execution error")
        return _response(500, {"error": f"Internal Server Error: {exc}"})
    return _response(200, result)


def current_handler(event: Dict[str, Any], context: Any = None, *,
                    service: Optional[EnvironmentService] = None) -> Dict[str, Any]:
    """Handle /environment/current."""
    return _run(
        event,
        lambda svc, query: svc.current_conditions(query).model_dump(mode="json", by_alias=True),
        service,
    )


def forecast_handler(event: Dict[str, Any], context: Any = None, *,
                     service: Optional[EnvironmentService] = None) -> Dict[str, Any]:
    """Handle /environment/forecast."""
    return _run(
        event,
        lambda svc, query: [day.model_dump(mode="json", by_alias=True) for day in svc.forecast(query)],
        service,
    )


def handler(event: Dict[str, Any], context: Any = None, *,
            service: Optional[EnvironmentService] = None) -> Dict[str, Any]:
    """Route on the last path segment ("current" or "forecast")."""
    path = ((event or {}).get("path") or "").rstrip("/")
    endpoint = path.rsplit("/", 1)[-1]
    if endpoint == "current":
        return current_handler(event, context, service=service)
    if endpoint == "forecast":
        return forecast_handler(event, context, service=service)
    return _response(404, {"error": f"Unknown endpoint: {path or '/'}"})
