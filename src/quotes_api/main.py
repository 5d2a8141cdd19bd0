"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn quotes_api.main:app --reload

    # Production
    uvicorn quotes_api.main:app --host 0.0.0.0 --workers 4
"""

from quotes_api.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from quotes_api.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "quotes_api.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
