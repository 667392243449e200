from collections import namedtuple

import numpy as np

__all__ = ['NoFlyZone', 'in_no_fly_zone', 'clamp_to_bounds', 'sq_separation']


NoFlyZone = namedtuple('NoFlyZone', ['x_min', 'x_max', 'y_min', 'y_max'])


def in_no_fly_zone(point, zones):
    """
    Determines whether the x, y coordinates of a world frame point fall inside any no-fly rectangle.

    Zones are height independent and their bounds are inclusive.

    Parameters
    ----------
    point : array-like
        World frame point, only x and y are used.
    zones : list
        List of NoFlyZone (or any 4-sequence x_min, x_max, y_min, y_max).
    Returns
    -------
    : bool
        True if the point lies inside at least one zone.
    """
    x, y = point[0], point[1]
    for zone in zones:
        x_min, x_max, y_min, y_max = zone
        if x_min <= x <= x_max and y_min <= y <= y_max:
            return True
    return False


def clamp_to_bounds(point, map_size, min_height, max_height):
    """
    Clamps x and y to +/- map_size / 2 and z to [min_height, max_height].

    The map is treated as centred on the frame origin; no origin offset is applied.
    """
    half = np.asarray(map_size, dtype=float) / 2
    return np.array([
        min(max(point[0], -half[0]), half[0]),
        min(max(point[1], -half[1]), half[1]),
        min(max(point[2], min_height), max_height)
    ])


def sq_separation(p, q):
    v = np.asarray(p, dtype=float) - np.asarray(q, dtype=float)
    return float(np.dot(v, v))
