"""FastAPI server exposing viewport marker clustering."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .schemas.models import ClusterMarkersRequest
from .tools.clustering import cluster_markers
from markercluster.clustering import ClustererOptions
from markercluster.tools.config_loader import ConfigLoader

app = FastAPI(title="Marker Cluster Server", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


def _load_profile(name: Optional[str]) -> Dict[str, Any]:
    try:
        if name:
            return ConfigLoader.load_profile(name)
        return ConfigLoader.load_default_or_env_profile()
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _options_for(request: ClusterMarkersRequest) -> ClustererOptions:
    options = ClustererOptions.from_profile(_load_profile(request.profile))
    if request.options is not None:
        options = options.with_overrides(**request.options.model_dump())
    return options


@app.post("/actions/cluster_markers")
async def cluster_markers_action(request: ClusterMarkersRequest) -> Dict[str, Any]:
    response = cluster_markers(request, _options_for(request))
    return response.model_dump(by_alias=True)
