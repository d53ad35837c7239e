import ee
import geemap.foliumap as foliumap
import streamlit as st

from lst_ndvi.charts import fetch_series, fit_trend
from lst_ndvi.constants import (
    Default_End_Date,
    Default_Start_Date,
    LST_Band,
    NDVI_Band,
    lst_chart_title,
    ndvi_chart_title,
)
from lst_ndvi.composites import lst_trend_image
from lst_ndvi.create_map import create_lst_map
from lst_ndvi.datasets import ensure_not_empty, mcd43a4_ndvi_collection, modis_lst_collection
from lst_ndvi.region import load_region
from lst_ndvi.settings import ROI_ASSET, initialize_earth_engine
from lst_ndvi.transforms import add_variables


def show_series(collection, band, title, roi):
    st.subheader(title)
    frame = fetch_series(collection, band, roi)
    if frame.empty:
        st.warning(f"No unmasked {band} values over the region.")
        return
    st.line_chart(frame.set_index("date")[band])
    if len(frame) >= 2:
        st.metric("Trend per year", f"{fit_trend(frame, band)['slope']:.4f}")


def create_lst_dashboard():
    """Sidebar-driven LST map and time series for one region."""
    st.set_page_config(layout="centered")
    st.title("MODIS Land Surface Temperature and NDVI")
    st.markdown("Most recent cloud-free LST composite and ROI-median time series from Google Earth Engine.")

    st.sidebar.title("Options")
    roi_asset = st.sidebar.text_input("Region asset", value=ROI_ASSET)
    start_date = st.sidebar.text_input("Start date", value=Default_Start_Date)
    end_date = st.sidebar.text_input("End date", value=Default_End_Date)

    try:
        initialize_earth_engine()
        roi = load_region(roi_asset)
        lst = modis_lst_collection(roi, start_date, end_date)
        ensure_not_empty(lst, "MOD11A2")
        ndvi = mcd43a4_ndvi_collection(start_date, end_date)

        Map = create_lst_map(
            roi, lst, ndvi, trend_image=lst_trend_image(lst.map(add_variables)), map_factory=foliumap.Map
        )
        Map.to_streamlit()

        show_series(lst.map(add_variables), LST_Band, lst_chart_title, roi)
        show_series(ndvi, NDVI_Band, ndvi_chart_title, roi)
    except (ee.EEException, RuntimeError, ValueError) as e:
        st.error(str(e))


if __name__ == "__main__":
    create_lst_dashboard()
