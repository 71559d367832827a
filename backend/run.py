"""Run the API under uvicorn: python run.py [--host H] [--port P] [--test-mode] [--config PATH]"""

import argparse
import logging
import os

import uvicorn

from config import Settings

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="DaySync API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=5173)
    parser.add_argument("--test-mode", action="store_true", help="Serve canned data instead of calling providers")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    if args.config:
        # app.py builds a module-level app on import; point it at the same file
        os.environ["DAYSYNC_CONFIG"] = args.config
    settings = Settings(config_path=args.config)
    if args.test_mode:
        settings.test_mode = True

    from app import configure_logging, create_app

    # Replace whatever the import-time app configured with this run's settings
    configure_logging(settings, force=True)
    app = create_app(settings)
    logger.info("Starting server on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
