import logging

import ee
from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from lst_ndvi.constants import City_Boundaries, Default_City_Tolerance, Export_Buffer

logger = logging.getLogger(__name__)


def get_city_coordinates(city: str) -> list[float]:
    """Geocode a city name to [longitude, latitude]."""
    city_name = city.title()
    try:
        geolocator = Nominatim(user_agent="lst_ndvi")
        location = geolocator.geocode(city_name)

    except GeopyError as e:
        raise ValueError(f"Geolocation service error: {e}")

    if location is None:
        raise ValueError(f"City '{city_name}' could not be found.")

    city_coordinates = [location.longitude, location.latitude]
    logger.info("The center coordinates for %s are %s", city_name, city_coordinates)
    return city_coordinates


def load_region(asset_id: str) -> ee.FeatureCollection:
    """Boundary polygon(s) stored as a feature collection asset."""
    return ee.FeatureCollection(asset_id)


def region_from_city(coordinates, tolerance=Default_City_Tolerance) -> ee.FeatureCollection:
    """
    Second-level administrative boundary (FAO GAUL) containing the point, simplified
    to keep the requests light.
    """
    city = ee.Geometry.Point(coordinates)
    table = ee.FeatureCollection(City_Boundaries)
    return table.filterBounds(city).map(lambda vec: vec.simplify(tolerance))


def buffered_bounds(roi: ee.FeatureCollection, distance=Export_Buffer) -> ee.Geometry:
    """Bounding box of the first ROI feature grown by `distance` metres, used as export region."""
    feature = ee.Feature(roi.first())
    return feature.buffer(distance).bounds().geometry()
