import logging

import ee
from decouple import config

from lst_ndvi.constants import Default_Roi, Export_Folder

ROI_ASSET = config("LST_ROI_ASSET", default=Default_Roi)
EXPORT_FOLDER = config("LST_EXPORT_FOLDER", default=Export_Folder)
EXPORT_BUCKET = config("LST_EXPORT_BUCKET", default="")
LOG_LEVEL = config("LST_LOG_LEVEL", default="INFO")


def initialize_earth_engine(project: str | None = None):
    """Authenticate against Earth Engine with the Cloud project from GEE_PROJECT."""
    project = project or config("GEE_PROJECT")
    ee.Initialize(project=project)
    logging.getLogger(__name__).info("Earth Engine initialized for project %s", project)
    return project


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
