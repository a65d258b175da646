"""Good Government data pipeline.

Loads the country-level development indicator dataset (HDI, GDP, GNI,
Economic Freedom, Gini), normalizes each metric globally and per
country, groups the series by country and derives the sorted, filtered
views that the connected-scatterplot charts draw.

Entry points:

- ``load_and_process(source)`` -> ``Dataset(records, groups)``
- ``recompute_view(groups, view)`` -> displayed groups
"""

import os

from goodgov.logging_config import create_logger

logger = create_logger(__name__)


def init_goodgov_package() -> None:
    """Initialize the package and log package details."""
    logger.debug("🚀 Initializing Good Government Data Pipeline")
    package_path = os.path.dirname(os.path.abspath(__file__))
    logger.debug(f"   📂 Package Path: {package_path}")


init_goodgov_package()

from goodgov.ingest.run import Ingest, load_and_process  # noqa: E402
from goodgov.models import Dataset, Group, Record  # noqa: E402
from goodgov.view import ViewConfig, recompute_view  # noqa: E402

__all__ = [
    "Dataset",
    "Group",
    "Ingest",
    "Record",
    "ViewConfig",
    "load_and_process",
    "recompute_view",
]
