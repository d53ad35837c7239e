import ee

from lst_ndvi.constants import LST_Band, Modis_LST
from lst_ndvi.transforms import mask_modis_lst, scale_modis_lst


def recent_value_composite(collection: ee.ImageCollection) -> ee.Image:
    """Cloud-free, most recent value composite: per pixel, the unmasked observation with the largest `millis`."""
    return collection.qualityMosaic("millis")


def median_composite(collection: ee.ImageCollection) -> ee.Image:
    return collection.median()


def monthly_median_collection(roi, year: int, n_years: int) -> ee.ImageCollection:
    """
    One median LST image per calendar month, starting January `year`, for `n_years` years.
    Each image is stamped with its month start as `system:time_start`.
    """
    if n_years < 1:
        raise ValueError(f"n_years must be at least 1, got {n_years}")

    first_day = ee.Date.fromYMD(year, 1, 1)
    modis_lst = (
        ee.ImageCollection(Modis_LST)
        .filterBounds(roi)
        .filterDate(first_day, ee.Date.fromYMD(year + n_years, 1, 1))
        .map(scale_modis_lst)
        .map(mask_modis_lst)
        .select([LST_Band])
    )

    def month_median(n):
        start = first_day.advance(n, "month")
        end = start.advance(1, "month")
        return modis_lst.filterDate(start, end).median().set("system:time_start", start.millis())

    months = ee.List.sequence(0, n_years * 12 - 1, 1).map(month_median).flatten()
    return ee.ImageCollection.fromImages(months)


def lst_trend_image(collection: ee.ImageCollection, band: str = LST_Band) -> ee.Image:
    """
    Per-pixel least squares fit of `band` against time. Needs the `t` and `constant`
    bands from add_variables; returns bands `offset` and `slope` (units per year).
    """
    fit = collection.select(["constant", "t", band]).reduce(ee.Reducer.linearRegression(numX=2, numY=1))
    return fit.select("coefficients").arrayProject([0]).arrayFlatten([["offset", "slope"]])
