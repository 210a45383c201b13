"""Entry point: configure logging, register the document tools and run the MCP server."""

import logging

from core.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting with settings: {settings.get_environment_summary()}")

    # Importing the tool module registers its tools on the server
    import gdocs.writing  # noqa: F401
    from core.server import server

    server.run()


if __name__ == "__main__":
    main()
