"""Approximate WGS-84 centroids for Singapore planning areas.

Offline fallback for when OneMap is unreachable or returns nothing usable.
Distances are plain Euclidean in degree space, which is close enough at
Singapore's scale.
"""

import math

from pinsight.models.area import GeoPoint

# Order matters: on equal distance the first area listed wins.
PLANNING_AREA_CENTROIDS: dict[str, tuple[float, float]] = {
    "ANG MO KIO": (1.3691, 103.8454),
    "BEDOK": (1.3236, 103.9273),
    "BISHAN": (1.3526, 103.8352),
    "BOON LAY": (1.3396, 103.7066),
    "BUKIT BATOK": (1.3590, 103.7637),
    "BUKIT MERAH": (1.2819, 103.8239),
    "BUKIT PANJANG": (1.3774, 103.7719),
    "BUKIT TIMAH": (1.3294, 103.7858),
    "CENTRAL WATER CATCHMENT": (1.3800, 103.8200),
    "CHANGI": (1.3644, 103.9915),
    "CHOA CHU KANG": (1.3840, 103.7470),
    "CLEMENTI": (1.3162, 103.7649),
    "DOWNTOWN CORE": (1.2789, 103.8536),
    "GEYLANG": (1.3201, 103.8918),
    "HOUGANG": (1.3612, 103.8863),
    "JURONG EAST": (1.3329, 103.7436),
    "JURONG WEST": (1.3404, 103.7090),
    "KALLANG": (1.3100, 103.8651),
    "LIM CHU KANG": (1.4231, 103.7181),
    "MANDAI": (1.4041, 103.8197),
    "MARINE PARADE": (1.3021, 103.9073),
    "MUSEUM": (1.2966, 103.8488),
    "NEWTON": (1.3138, 103.8380),
    "NOVENA": (1.3274, 103.8438),
    "ORCHARD": (1.3048, 103.8318),
    "OUTRAM": (1.2797, 103.8393),
    "PASIR RIS": (1.3721, 103.9474),
    "PIONEER": (1.3153, 103.6978),
    "PUNGGOL": (1.4043, 103.9021),
    "QUEENSTOWN": (1.2942, 103.7861),
    "RIVER VALLEY": (1.2930, 103.8333),
    "ROCHOR": (1.3048, 103.8555),
    "SEMBAWANG": (1.4491, 103.8185),
    "SENGKANG": (1.3868, 103.8914),
    "SERANGOON": (1.3554, 103.8679),
    "SINGAPORE RIVER": (1.2881, 103.8466),
    "STRAITS VIEW": (1.2634, 103.8198),
    "TAMPINES": (1.3496, 103.9568),
    "TANGLIN": (1.3085, 103.8116),
    "TOA PAYOH": (1.3343, 103.8563),
    "WESTERN ISLANDS": (1.2260, 103.7680),
    "WESTERN WATER CATCHMENT": (1.3500, 103.6900),
    "WOODLANDS": (1.4382, 103.7890),
    "YISHUN": (1.4304, 103.8354),
}


def nearest_planning_area(point: GeoPoint) -> str:
    """Return the planning area whose centroid is closest to the point."""
    nearest = ""
    min_dist = math.inf
    for area, (c_lat, c_lng) in PLANNING_AREA_CENTROIDS.items():
        dist = math.hypot(point.latitude - c_lat, point.longitude - c_lng)
        if dist < min_dist:
            min_dist = dist
            nearest = area
    return nearest


def planning_area_centroid(area: str) -> GeoPoint | None:
    coords = PLANNING_AREA_CENTROIDS.get(area.upper().strip())
    if coords is None:
        return None
    return GeoPoint(latitude=coords[0], longitude=coords[1])
