"""
Liveness endpoint.
"""

from fastapi import APIRouter, Depends

from hostel_laundry.api import deps
from hostel_laundry.config.settings import Settings
from hostel_laundry.repositories.store_factory import StoreProvider
from hostel_laundry.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(
    config: Settings = Depends(deps.get_app_settings),
    provider: StoreProvider = Depends(deps.get_store_provider),
):
    return HealthResponse(
        app=config.APP_NAME,
        version=config.API_VERSION,
        environment=config.ENVIRONMENT,
        storage=provider.mode,
        email_configured=provider.is_demo or config.is_email_configured(),
    )
