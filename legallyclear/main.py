import uvicorn

from legallyclear.config.settings import load_settings
from legallyclear.logging.logger import Log
from legallyclear.web.app import create_app


def main() -> None:
    """Entry point: load settings -> configure logging -> build app -> serve."""
    settings = load_settings()
    Log.configure(settings.log_level)
    Log.info(f"Starting LegallyClear ({settings.app_env}) with provider {settings.model_provider}")

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
