"""
FastAPI application entry point.
"""

from fastapi import FastAPI

from pr_policy.api import webhooks
from pr_policy.config import ConfigurationError, get_settings
from pr_policy.middleware.logging import RequestLoggingMiddleware
from pr_policy.utils.logging import get_logger, setup_logging

settings = get_settings()

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

app = FastAPI(
    title="Azure DevOps PR Policy Checker",
    description="Checks that pull requests bump the GitVersion file and update the change log",
    version="0.1.0"
)

app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Azure DevOps PR Policy Checker API",
        "version": "0.1.0",
        "docs": "/docs"
    }


app.include_router(webhooks.router)


@app.on_event("startup")
async def startup_event():
    """Report configuration problems at startup."""
    logger.info("Starting Azure DevOps PR Policy Checker API")

    # Requests still answer 400 until the settings are complete.
    try:
        settings.validate_required()
    except ConfigurationError as e:
        logger.warning(f"Incomplete configuration: {e}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
