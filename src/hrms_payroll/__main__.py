"""Entry point for running the application with uvicorn."""

import uvicorn

from hrms_payroll.config import configure_logging, settings


def main() -> None:
    """Run the application."""
    configure_logging()
    uvicorn.run(
        "hrms_payroll.api.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
