import math

EARTH_RADIUS_KM = 6371


def haversine_km(lat1, lng1, lat2, lng2):
    """
    Great-circle distance between two points on a sphere of radius 6371 km.

    Args:
        lat1, lng1: The first point in decimal degrees.
        lat2, lng2: The second point in decimal degrees.

    Returns:
        float: The distance in kilometres, rounded to two decimals.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)
