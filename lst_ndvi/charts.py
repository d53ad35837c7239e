"""
Time series charts of the ROI median. The reduction runs on Earth Engine; the
returned values are plotted locally with pandas/matplotlib and a linear trend.
"""

import logging
from pathlib import Path

import ee
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
from sklearn.linear_model import LinearRegression  # noqa: E402

from lst_ndvi.constants import Chart_Scale, chart_options  # noqa: E402

logger = logging.getLogger(__name__)

MS_PER_YEAR = 365.25 * 24 * 60 * 60 * 1000


def series_features(collection: ee.ImageCollection, band: str, roi, scale=Chart_Scale) -> ee.FeatureCollection:
    """One feature per image with the ROI median of `band` and the acquisition time."""

    def reduce_image(image):
        stats = image.select(band).reduceRegion(
            reducer=ee.Reducer.median(), geometry=roi.geometry(), scale=scale, bestEffort=True
        )
        return ee.Feature(None, {band: stats.get(band), "system:time_start": image.get("system:time_start")})

    return ee.FeatureCollection(collection.map(reduce_image))


def features_to_frame(features: dict, band: str) -> pd.DataFrame:
    """
    Convert a FeatureCollection getInfo() payload into a date-sorted frame.
    Images fully masked over the ROI come back as null and are dropped.
    """
    rows = []
    for feature in features.get("features", []):
        properties = feature.get("properties", {})
        value = properties.get(band)
        millis = properties.get("system:time_start")
        if value is None or millis is None:
            continue
        rows.append({"date": pd.to_datetime(millis, unit="ms"), band: float(value)})

    frame = pd.DataFrame(rows, columns=["date", band])
    return frame.sort_values("date").reset_index(drop=True)


def fetch_series(collection: ee.ImageCollection, band: str, roi, scale=Chart_Scale) -> pd.DataFrame:
    features = series_features(collection, band, roi, scale).getInfo()
    frame = features_to_frame(features, band)
    logger.info("Retrieved %s %s observations", len(frame), band)
    return frame


def fractional_years(dates: pd.Series) -> np.ndarray:
    """Years since 1970-01-01 as floats."""
    millis = (dates - pd.Timestamp("1970-01-01")).dt.total_seconds().to_numpy() * 1000
    return millis / MS_PER_YEAR


def fit_trend(frame: pd.DataFrame, band: str) -> dict:
    """Ordinary least squares trend of `band` against time; the slope is in units per year."""
    if len(frame) < 2:
        raise ValueError(f"At least two {band} observations are needed to fit a trend, got {len(frame)}.")

    X = fractional_years(frame["date"]).reshape(-1, 1)
    y = frame[band].to_numpy()

    model = LinearRegression()
    model.fit(X, y)

    return {"slope": float(model.coef_[0]), "intercept": float(model.intercept_), "fitted": model.predict(X)}


def plot_series(frame: pd.DataFrame, band: str, title: str, output_path, options=None) -> Path:
    """Scatter chart of the series with its trend line, saved as PNG."""
    options = {**chart_options, **(options or {})}
    trend_color = "#" + options["trendlines"][0]["color"]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(
        frame["date"],
        frame[band],
        marker="o",
        markersize=options["pointSize"],
        linewidth=options["lineWidth"],
        label=band,
    )
    if len(frame) >= 2:
        trend = fit_trend(frame, band)
        ax.plot(frame["date"], trend["fitted"], color=trend_color, label=f"trend ({trend['slope']:.3f}/yr)")

    ax.set_title(title)
    ax.set_xlabel("Date")
    ax.set_ylabel(band)
    ax.legend()
    fig.autofmt_xdate()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved chart %s", output_path)
    return output_path
