"""
utilkit – Main entry point.

Minimal bootstrap script to verify the package imports and logging is wired.
"""

from utilkit.config.settings import get_settings
from utilkit.utils.logging_setup import get_logger, setup_logging


def main() -> None:
    """Configure logging and print a bootstrap confirmation message."""
    settings = get_settings()
    setup_logging(settings.log_level)
    get_logger("main").info("utilkit loaded with settings {}", settings)
    print("utilkit bootstrap complete")


if __name__ == "__main__":
    main()
