import logging

import ee

from lst_ndvi.constants import Modis_LST, Modis_NBAR
from lst_ndvi.transforms import add_ndvi_variables, add_time_millis, mask_modis_lst, scale_modis_lst

logger = logging.getLogger(__name__)


def modis_lst_collection(roi, start_date, end_date) -> ee.ImageCollection:
    """
    MOD11A2 images over the ROI, scaled to Celsius, masked by QC_Day and carrying
    a `millis` acquisition-time band.
    """
    return (
        ee.ImageCollection(Modis_LST)
        .filterBounds(roi)
        .filter(ee.Filter.date(start_date, end_date))
        .map(scale_modis_lst)
        .map(mask_modis_lst)
        .map(add_time_millis)
    )


def mcd43a4_ndvi_collection(start_date, end_date) -> ee.ImageCollection:
    """MCD43A4 images with NDVI, time and constant bands."""
    return ee.ImageCollection(Modis_NBAR).filter(ee.Filter.date(start_date, end_date)).map(add_ndvi_variables)


def ensure_not_empty(collection: ee.ImageCollection, description: str) -> int:
    num_images = collection.size().getInfo()
    if num_images == 0:
        raise RuntimeError(f"No {description} images were found for the region and dates. Try a different range.")

    logger.info("Number of %s images after filtering: %s", description, num_images)
    return num_images
