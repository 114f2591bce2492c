"""
Main entry point for the Espresso API.
"""

from .api import app  # noqa: F401

if __name__ == "__main__":
    import uvicorn

    from .config import get_settings

    settings = get_settings()
    uvicorn.run(
        "espresso_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
