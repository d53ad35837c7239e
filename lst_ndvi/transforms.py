"""
Per-image transformations mapped over MODIS collections. Each function only builds
an Earth Engine expression; nothing is evaluated until a result is requested.
"""

import ee

from lst_ndvi.constants import (
    LST_Band,
    LST_Offset,
    LST_Scale,
    QC_Band,
    NDVI_Band,
    NIR_Band,
    Red_Band,
    Mandatory_QA_Bits,
    Data_Quality_Bits,
    LST_Error_Bits,
)


def bitwise_extract(value, from_bit: int, to_bit: int):
    """
    Extract the bits from_bit..to_bit (inclusive) of an ee.Image or ee.Number.
    Adapted from https://gis.stackexchange.com/a/349401/5160
    """
    mask_size = to_bit - from_bit + 1
    mask = (1 << mask_size) - 1
    return value.rightShift(from_bit).bitwiseAnd(mask)


def scale_modis_lst(image: ee.Image) -> ee.Image:
    """Scale MOD11A2 daytime LST to Celsius, replacing the raw band."""
    thermal_band = image.select(LST_Band).multiply(LST_Scale).add(LST_Offset)
    return image.addBands(thermal_band, None, True)


def mask_modis_lst(image: ee.Image) -> ee.Image:
    """
    Mask pixels with poor QC_Day flags and keep the mask as a `qaMask` band.

    Bit 0-1 - Mandatory QA flags (0 good, 1 other quality)
    Bit 2-3 - Data quality flag (0 good)
    Bit 4-5 - Emissivity error flag (not used)
    Bit 6-7 - LST error flag (<= 1 K for 0, <= 2 K for 1)
    """
    qc_day = image.select(QC_Band)
    qa_mask = bitwise_extract(qc_day, *Mandatory_QA_Bits).lte(1)
    data_quality_mask = bitwise_extract(qc_day, *Data_Quality_Bits).eq(0)
    lst_error_mask = bitwise_extract(qc_day, *LST_Error_Bits).lte(1)
    qa_mask = qa_mask.And(data_quality_mask).And(lst_error_mask).rename("qaMask")

    return image.addBands(qa_mask).updateMask(qa_mask)


def add_time_millis(image: ee.Image) -> ee.Image:
    """Acquisition time in milliseconds since the epoch, used as quality band for the recent-value mosaic."""
    millis = ee.Image(image.getNumber("system:time_start")).rename("millis").toFloat()
    return image.addBands(millis)


def add_variables(image: ee.Image) -> ee.Image:
    """Add a `t` band (fractional years since 1970) and a `constant` band for trend fitting."""
    date = image.date()
    years = date.difference(ee.Date("1970-01-01"), "year")
    return image.addBands(ee.Image(years).rename("t")).float().addBands(ee.Image.constant(1))


def add_ndvi_variables(image: ee.Image) -> ee.Image:
    """Add NDVI from the MCD43A4 NIR/red reflectances, then the trend variables."""
    ndvi = image.normalizedDifference([NIR_Band, Red_Band]).rename(NDVI_Band)
    return add_variables(image.addBands(ndvi))
