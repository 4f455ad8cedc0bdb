from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from jokeapi.api.dependencies import get_app_metrics
from jokeapi.config import get_settings
from jokeapi.observability.metrics import JokeMetrics


router = APIRouter(tags=["metrics"])


@router.get("/metrics", include_in_schema=False)
async def metrics(app_metrics: JokeMetrics = Depends(get_app_metrics)) -> Response:
    settings = get_settings()
    if not settings.enable_metrics_endpoint:
        raise HTTPException(status_code=404, detail="Not found")
    return Response(content=app_metrics.render(), media_type=app_metrics.content_type)
