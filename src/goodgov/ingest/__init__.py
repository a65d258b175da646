"""Ingest package for loading the Good Government dataset.

This package reads the country-year indicator CSV and runs the
transformation pipeline that produces records and country groups.
"""

from goodgov.logging_config import create_logger

logger = create_logger(__name__)


def init_ingest_package() -> None:
    """Initialize the ingest package and log package details."""
    logger.debug("🚢 Initializing Good Government Ingest Package")
    logger.debug("   🔍 Ready to load CSV from local paths, http(s) URLs or s3:// URIs")


init_ingest_package()
