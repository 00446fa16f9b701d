"""Health check endpoint."""

from rollwithit.core.logger import LogIcon, logger
from rollwithit.core.settings import settings as st
from rollwithit.models.core import HealthResponse, IncomingRequest


def health_check(request: IncomingRequest) -> HealthResponse:
    logger.info("Health check requested", icon=LogIcon.HEALTHCHECK)
    return HealthResponse(status="healthy", service=st.API_NAME, version=st.API_VERSION)
