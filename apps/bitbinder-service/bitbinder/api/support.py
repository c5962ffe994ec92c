"""
Support and build information endpoints.
"""
from __future__ import annotations

import os

from fastapi import APIRouter

router = APIRouter(tags=["support"])

SERVICE_NAME = "bitbinder-service"


@router.get("/health")
def health():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/build-info")
def get_build_info():
    """Return build and deployment information for the running service."""
    build_sha = os.getenv("BUILD_SHA")
    build_timestamp = os.getenv("BUILD_TIMESTAMP")
    version = os.getenv("VERSION", "unknown")

    return {
        "build_sha": build_sha if build_sha else None,
        "build_timestamp": build_timestamp if build_timestamp else None,
        "service_name": SERVICE_NAME,
        "version": version,
    }
