"""
Shared fixtures. Earth Engine objects are replaced by small fakes that evaluate
the same method chains on plain integers, so the suite runs without credentials.
"""

import matplotlib
import pandas as pd
import pytest

matplotlib.use("Agg")


class FakeBand:
    """Stands in for a single-band ee.Image holding one pixel value."""

    def __init__(self, value, name=None):
        self.value = value
        self.name = name

    def rightShift(self, n):
        return FakeBand(self.value >> n)

    def bitwiseAnd(self, mask):
        return FakeBand(self.value & mask)

    def multiply(self, factor):
        return FakeBand(self.value * factor)

    def add(self, offset):
        return FakeBand(self.value + offset)

    def lte(self, n):
        return FakeBand(self.value <= n)

    def eq(self, n):
        return FakeBand(self.value == n)

    def And(self, other):
        return FakeBand(bool(self.value) and bool(other.value))

    def rename(self, name):
        return FakeBand(self.value, name)


class FakeImage:
    def __init__(self, **bands):
        self.bands = {name: FakeBand(value, name) for name, value in bands.items()}
        self.added = []
        self.mask = None

    def select(self, name):
        return self.bands[name]

    def addBands(self, band, names=None, overwrite=False):
        self.added.append((band, names, overwrite))
        return self

    def updateMask(self, mask):
        self.mask = mask
        return self


@pytest.fixture
def fake_image():
    return FakeImage


@pytest.fixture
def lst_payload():
    """getInfo() payload of a FeatureCollection built by series_features."""
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "properties": {"LST_Day_1km": 21.5, "system:time_start": 1530403200000}},
            {"type": "Feature", "properties": {"LST_Day_1km": None, "system:time_start": 1523664000000}},
            {"type": "Feature", "properties": {"LST_Day_1km": 12.25, "system:time_start": 1522540800000}},
            {"type": "Feature", "properties": {"system:time_start": 1525132800000}},
        ],
    }


@pytest.fixture
def linear_frame():
    """LST rising by exactly 2 degrees per (Julian) year."""
    dates = pd.Timestamp("2018-01-01") + pd.to_timedelta([0, 91.3125, 182.625, 365.25, 730.5], unit="D")
    years = (dates - pd.Timestamp("1970-01-01")).total_seconds() / (365.25 * 86400)
    return pd.DataFrame({"date": dates, "LST_Day_1km": 10 + 2 * years})
