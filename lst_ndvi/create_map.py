import logging
from pathlib import Path

import geemap

from lst_ndvi.constants import Map_Zoom, lst_vis_params, ndvi_vis_params, trend_vis_params
from lst_ndvi.composites import median_composite, recent_value_composite

logger = logging.getLogger(__name__)


def create_lst_map(
    roi,
    lst_collection,
    ndvi_collection=None,
    export_region=None,
    show_median=False,
    trend_image=None,
    map_factory=geemap.Map,
):
    """
    Map of the most recent cloud-free LST over the ROI. The LST median, the NDVI
    median, the per-pixel LST trend and the export region are optional extra layers.
    `map_factory` picks the geemap backend (ipyleaflet or folium).
    """
    Map = map_factory()
    Map.centerObject(roi, Map_Zoom)
    Map.addLayer(roi, {}, "ROI")

    if show_median:
        Map.addLayer(median_composite(lst_collection), lst_vis_params, "lstMedian", False)

    Map.addLayer(recent_value_composite(lst_collection), lst_vis_params, "recentValueComposite")

    if ndvi_collection is not None:
        Map.addLayer(
            median_composite(ndvi_collection), ndvi_vis_params, "NDVI MCD43A4 median over the period", False
        )

    if trend_image is not None:
        Map.addLayer(trend_image, trend_vis_params, "lstTrend", False)

    # keep the boundary above the rasters
    Map.addLayer(roi, {}, "ROI")
    if export_region is not None:
        Map.addLayer(export_region, {}, "roi_buffer")

    return Map


def save_map(Map, output_path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    Map.save(str(output_path))
    logger.info("Saved map %s", output_path)
    return output_path
