import logging
import time

import ee

from lst_ndvi.constants import (
    Export_CRS,
    Export_Folder,
    Export_Format,
    Export_Max_Pixels,
    Export_Scale,
    LST_Band,
    Task_Poll_Interval,
)

logger = logging.getLogger(__name__)


def to_bands(collection: ee.ImageCollection, band: str = LST_Band) -> ee.Image:
    """Stack every image of the collection as one band of a single image."""
    return collection.select(band).toBands()


def export_params(
    image: ee.Image,
    region,
    description: str,
    file_name_prefix: str,
    scale=Export_Scale,
    crs=Export_CRS,
) -> dict:
    """Keyword arguments shared by the Drive and Cloud Storage GeoTIFF exports."""
    return {
        "image": image,
        "description": description,
        "fileNamePrefix": file_name_prefix,
        "fileFormat": Export_Format,
        "region": region,
        "scale": scale,
        "crs": crs,
        "maxPixels": Export_Max_Pixels,
    }


def export_to_drive(image, region, description, file_name_prefix, folder=Export_Folder, **kwargs):
    task = ee.batch.Export.image.toDrive(
        folder=folder, **export_params(image, region, description, file_name_prefix, **kwargs)
    )
    task.start()
    logger.info("Started Drive export %s to folder %s (task %s)", description, folder, task.id)
    return task


def export_to_cloud_storage(image, region, description, file_name_prefix, bucket: str, **kwargs):
    task = ee.batch.Export.image.toCloudStorage(
        bucket=bucket, **export_params(image, region, description, file_name_prefix, **kwargs)
    )
    task.start()
    logger.info("Started export %s to gs://%s/%s.tif (task %s)", description, bucket, file_name_prefix, task.id)
    return task


def wait_for_task(task, poll_interval=Task_Poll_Interval, timeout=None) -> bool:
    """
    Block until the export task finishes. Returns True when it completed and False
    when Earth Engine reports it failed or was cancelled.
    """
    started = time.monotonic()
    while True:
        status = task.status()
        state = status.get("state")

        if state == "COMPLETED":
            logger.info("Export task %s completed", status.get("id"))
            return True
        if state in ("FAILED", "CANCELLED"):
            logger.error("Export task %s %s: %s", status.get("id"), state.lower(), status.get("error_message"))
            return False
        if timeout is not None and time.monotonic() - started > timeout:
            raise TimeoutError(f"Export task {status.get('id')} still {state} after {timeout} seconds")

        logger.info("Export task %s is %s", status.get("id"), state)
        time.sleep(poll_interval)
