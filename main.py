"""
Main entrypoint: anomaly detection API server.

Env: RISK_THRESHOLD, TIME_GAP_WARNING, SUPPLYGUARD_LOCATIONS_PATH, API_HOST, PORT / API_PORT, LOG_LEVEL.

Equivalent: uvicorn backend_supplyguard.api_server.app:app --host 0.0.0.0 --port 5000
"""

# Configure structured JSON logging before other imports that may log
from backend_supplyguard.supplyguard_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    from backend_supplyguard.config import get_settings

    settings = get_settings()

    from backend_supplyguard.api_server.app import app
    import uvicorn

    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        risk_threshold=settings.risk_threshold,
        time_gap_warning_sec=settings.time_gap_warning_sec,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
