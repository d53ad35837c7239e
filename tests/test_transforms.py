from unittest import mock

import pytest

from lst_ndvi.transforms import (
    add_ndvi_variables,
    add_time_millis,
    add_variables,
    bitwise_extract,
    mask_modis_lst,
    scale_modis_lst,
)
from tests.conftest import FakeBand


class TestBitwiseExtract:
    @pytest.mark.parametrize(
        "value, from_bit, to_bit, expected",
        [
            (0b11010110, 0, 1, 0b10),
            (0b11010110, 2, 3, 0b01),
            (0b11010110, 4, 5, 0b01),
            (0b11010110, 6, 7, 0b11),
            (0b11010110, 0, 7, 0b11010110),
            (0b00001000, 3, 3, 1),
        ],
    )
    def test_extracts_bit_range(self, value, from_bit, to_bit, expected):
        assert bitwise_extract(FakeBand(value), from_bit, to_bit).value == expected

    def test_uses_ee_bit_operators(self):
        image = mock.MagicMock()
        bitwise_extract(image, 6, 7)
        image.rightShift.assert_called_once_with(6)
        image.rightShift.return_value.bitwiseAnd.assert_called_once_with(0b11)


class TestScaleModisLst:
    def test_converts_to_celsius_and_overwrites(self, fake_image):
        image = fake_image(LST_Day_1km=15000, QC_Day=0)
        scale_modis_lst(image)

        band, names, overwrite = image.added[0]
        assert band.value == pytest.approx(26.85)
        assert names is None
        assert overwrite is True


class TestMaskModisLst:
    @pytest.mark.parametrize(
        "qc, keep",
        [
            (0b00000000, True),  # all good
            (0b00000001, True),  # other quality, still produced
            (0b01000001, True),  # LST error <= 2K
            (0b00110000, True),  # emissivity error is ignored
            (0b00000010, False),  # not produced, cloud
            (0b00000100, False),  # data quality flag set
            (0b10000000, False),  # LST error <= 3K
        ],
    )
    def test_qc_day_decision(self, fake_image, qc, keep):
        image = fake_image(LST_Day_1km=15000, QC_Day=qc)
        result = mask_modis_lst(image)

        assert result.mask.value is keep
        assert result.mask.name == "qaMask"
        assert image.added[0][0] is result.mask


class TestTimeBands:
    @mock.patch("lst_ndvi.transforms.ee")
    def test_add_time_millis(self, ee):
        image = mock.MagicMock()
        add_time_millis(image)

        image.getNumber.assert_called_once_with("system:time_start")
        ee.Image.assert_called_once_with(image.getNumber.return_value)
        ee.Image.return_value.rename.assert_called_once_with("millis")
        image.addBands.assert_called_once_with(ee.Image.return_value.rename.return_value.toFloat.return_value)

    @mock.patch("lst_ndvi.transforms.ee")
    def test_add_variables(self, ee):
        image = mock.MagicMock()
        add_variables(image)

        image.date.return_value.difference.assert_called_once_with(ee.Date.return_value, "year")
        ee.Date.assert_called_once_with("1970-01-01")
        ee.Image.return_value.rename.assert_called_once_with("t")
        ee.Image.constant.assert_called_once_with(1)
        image.addBands.return_value.float.return_value.addBands.assert_called_once_with(ee.Image.constant.return_value)

    @mock.patch("lst_ndvi.transforms.ee")
    def test_add_ndvi_variables(self, ee):
        image = mock.MagicMock()
        add_ndvi_variables(image)

        image.normalizedDifference.assert_called_once_with(["Nadir_Reflectance_Band2", "Nadir_Reflectance_Band1"])
        image.normalizedDifference.return_value.rename.assert_called_once_with("NDVI")
        with_ndvi = image.addBands.return_value
        with_ndvi.addBands.assert_called_once()
        ee.Image.return_value.rename.assert_called_once_with("t")
