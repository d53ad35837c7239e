## Default Inputs: MODIS LST over the City of Detroit, April 2018 - September 2021
Default_Roi = "users/QiuYuean/City_of_Detroit_Boundary"
Default_Start_Date = "2018-04-01"
Default_End_Date = "2021-09-30"
Default_Year = 2018
Default_N_Years = 4
Default_City_Tolerance = 2000  # metres, simplification of FAO GAUL boundaries

## Datasets
Modis_LST = "MODIS/061/MOD11A2"  # 8-day, 1-km
Modis_NBAR = "MODIS/061/MCD43A4"  # daily nadir BRDF-adjusted reflectance
City_Boundaries = "FAO/GAUL/2015/level2"

## Bands
LST_Band = "LST_Day_1km"
QC_Band = "QC_Day"
NDVI_Band = "NDVI"
NIR_Band = "Nadir_Reflectance_Band2"
Red_Band = "Nadir_Reflectance_Band1"

## MOD11A2 scaling to Celsius
LST_Scale = 0.02
LST_Offset = -273.15

## QC_Day bit ranges (from_bit, to_bit)
Mandatory_QA_Bits = (0, 1)
Data_Quality_Bits = (2, 3)
LST_Error_Bits = (6, 7)

## Map layers
lst_vis_params = {"bands": LST_Band, "min": 0, "max": 40, "palette": ["white", "yellow", "red"]}
ndvi_vis_params = {"bands": NDVI_Band, "min": 0.1, "max": 0.9, "palette": ["white", "green"]}
trend_vis_params = {"bands": "slope", "min": -1, "max": 1, "palette": ["blue", "white", "red"]}
Map_Zoom = 10

## Time series charts
Chart_Scale = 1000  # metres, native MODIS resolution
lst_chart_title = "MOD11A2 LST Time Series (median over the ROI)"
ndvi_chart_title = "MCD43A4 NDVI Time Series (median over the ROI)"
chart_options = {
    "trendlines": {0: {"color": "CC0000"}},
    "lineWidth": 1,
    "pointSize": 3,
}

## Export
Export_Folder = "GEO874_2023FA"
Export_Buffer = 10000  # metres around the ROI
Export_Scale = 1000
Export_CRS = "EPSG:4326"
Export_Format = "GeoTIFF"
Export_Max_Pixels = 1e13
lst_export_name = ("MOD11A2_detroit_2018_2021", "mod11a2_detroit_2018_2021")
monthly_export_name = ("MOD11A2_detroit_monthly_median", "mod11a2_detroit_monthly_median")
Task_Poll_Interval = 30  # seconds
