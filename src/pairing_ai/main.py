"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn pairing_ai.main:app --reload

    # Production
    uvicorn pairing_ai.main:app --host 0.0.0.0 --port 8080 --workers 4
"""

from pairing_ai.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from pairing_ai.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "pairing_ai.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
