import logging
from pathlib import Path

from lst_ndvi.charts import fetch_series, plot_series
from lst_ndvi.composites import lst_trend_image, monthly_median_collection
from lst_ndvi.constants import (
    LST_Band,
    NDVI_Band,
    lst_chart_title,
    lst_export_name,
    monthly_export_name,
    ndvi_chart_title,
)
from lst_ndvi.create_map import create_lst_map, save_map
from lst_ndvi.datasets import ensure_not_empty, mcd43a4_ndvi_collection, modis_lst_collection
from lst_ndvi.export import export_to_cloud_storage, export_to_drive, to_bands, wait_for_task
from lst_ndvi.region import buffered_bounds
from lst_ndvi.transforms import add_variables

logger = logging.getLogger(__name__)

TASKS = ("Map", "Time Series", "Export", "Monthly Export")


def make_map(roi, start_date, end_date, output_dir):
    lst = modis_lst_collection(roi, start_date, end_date)
    ensure_not_empty(lst, "MOD11A2")
    Map = create_lst_map(
        roi,
        lst,
        mcd43a4_ndvi_collection(start_date, end_date),
        buffered_bounds(roi),
        trend_image=lst_trend_image(lst.map(add_variables)),
    )
    return save_map(Map, Path(output_dir) / f"lst_map_{start_date}_{end_date}.html")


def make_time_series(roi, start_date, end_date, output_dir):
    """Save the LST and NDVI ROI-median charts; returns their paths."""
    lst = modis_lst_collection(roi, start_date, end_date).map(add_variables)
    ensure_not_empty(lst, "MOD11A2")
    ndvi = mcd43a4_ndvi_collection(start_date, end_date)

    charts = []
    for collection, band, title in ((lst, LST_Band, lst_chart_title), (ndvi, NDVI_Band, ndvi_chart_title)):
        frame = fetch_series(collection, band, roi)
        if frame.empty:
            logger.warning("No unmasked %s values over the ROI, skipping chart", band)
            continue
        charts.append(plot_series(frame, band, title, Path(output_dir) / f"{band.lower()}_{start_date}_{end_date}.png"))
    return charts


def start_export(image, region, name, folder, bucket, wait):
    description, prefix = name
    if bucket:
        task = export_to_cloud_storage(image, region, description, prefix, bucket=bucket)
    else:
        task = export_to_drive(image, region, description, prefix, folder=folder)

    if wait and not wait_for_task(task):
        raise RuntimeError(f"Export {description} did not complete.")
    return task


def run_task(task: str, roi, start_date, end_date, year, n_years, folder, bucket="", wait=False, output_dir="."):
    """
    Cases: Map, Time Series, Export, Monthly Export
    """
    match task:
        case "Map":
            return make_map(roi, start_date, end_date, output_dir)

        case "Time Series":
            return make_time_series(roi, start_date, end_date, output_dir)

        case "Export":
            lst = modis_lst_collection(roi, start_date, end_date)
            ensure_not_empty(lst, "MOD11A2")
            return start_export(to_bands(lst), buffered_bounds(roi), lst_export_name, folder, bucket, wait)

        case "Monthly Export":
            monthly = monthly_median_collection(roi, year, n_years)
            return start_export(monthly.toBands(), buffered_bounds(roi), monthly_export_name, folder, bucket, wait)

        case _:
            raise ValueError(f"Unknown task '{task}', choose one of {', '.join(TASKS)}.")
