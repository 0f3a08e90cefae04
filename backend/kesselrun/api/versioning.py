"""API version registration."""
from typing import Dict, Iterable

from fastapi import APIRouter, FastAPI

from kesselrun.api.v1 import api_router as v1_router
from kesselrun.shared_kernel.exceptions import ConfigurationError

API_ROUTERS: Dict[str, APIRouter] = {
    "v1": v1_router,
}

SUPPORTED_VERSIONS_HEADER = "api-supported-versions"


def include_versioned_routers(app: FastAPI, versions: Iterable[str]) -> None:
    """Mount one router per enabled version under ``/api/{version}``."""
    for version in versions:
        router = API_ROUTERS.get(version)
        if router is None:
            raise ConfigurationError(
                f"Unknown API version '{version}'",
                code="UNKNOWN_API_VERSION",
                details={"known": sorted(API_ROUTERS)},
            )
        app.include_router(router, prefix=f"/api/{version}")


def _header_version(version: str) -> str:
    number = version.lstrip("v")
    return number if "." in number else number + ".0"


def supported_versions_header(versions: Iterable[str]) -> str:
    return ", ".join(_header_version(version) for version in versions)
