from collections import namedtuple, OrderedDict

import numpy as np

from rrt_planning.geometric.transformation import FrameTransform
from rrt_planning.geometric.utils import NoFlyZone
from rrt_planning.planners.exceptions import ConfigurationException
from rrt_planning.spatial.index import SpatialIndex

__all__ = ['Endpoints', 'Boundaries', 'MapCharacteristics', 'NodeCharacteristics', 'PlanningContext']


Endpoints = namedtuple('Endpoints', ['start', 'goal'])
Boundaries = namedtuple('Boundaries', ['min_height', 'max_height', 'no_fly_zones'])
MapCharacteristics = namedtuple('MapCharacteristics', ['obstacles', 'map_size', 'origin'])
NodeCharacteristics = namedtuple('NodeCharacteristics', ['timeout', 'step_size', 'clearance', 'frame'])


def _vector3(value, label):
    vec = np.array(value, dtype=float)
    if vec.shape != (3,):
        raise ConfigurationException("{} must be a 1x3 vector, got {}".format(label, value))
    if not np.all(np.isfinite(vec)):
        raise ConfigurationException("{} must be finite, got {}".format(label, value))
    return vec


class PlanningContext():

    """
    Holds the four configuration groups a search needs. Each group has its own slot and may only be filled once.

    Attributes:
        endpoints (Endpoints): Start and goal positions in the working frame.
        boundaries (Boundaries): Height limits and world frame no-fly rectangles.
        map_characteristics (MapCharacteristics): Obstacle set, map extent and origin.
        node_characteristics (NodeCharacteristics): Timeout, step size, clearance and frame transform.
    """

    groups = ['endpoints', 'boundaries', 'map_characteristics', 'node_characteristics']

    def __init__(self):
        self.endpoints = None
        self.boundaries = None
        self.map_characteristics = None
        self.node_characteristics = None

    def set_endpoints(self, start, goal):
        self._check_unset('endpoints')
        self.endpoints = Endpoints(_vector3(start, "start"), _vector3(goal, "goal"))
        return self.endpoints

    def set_boundaries(self, min_height, max_height, no_fly_zones=None):
        self._check_unset('boundaries')
        if min_height > max_height:
            raise ConfigurationException(
                "min_height {} must not exceed max_height {}".format(min_height, max_height))
        zones = []
        for zone in (no_fly_zones if no_fly_zones is not None else []):
            if len(zone) != 4:
                raise ConfigurationException("No-fly zones are (x_min, x_max, y_min, y_max), got {}".format(zone))
            zone = NoFlyZone(*[float(bound) for bound in zone])
            if zone.x_min > zone.x_max or zone.y_min > zone.y_max:
                raise ConfigurationException("No-fly zone has inverted bounds: {}".format(zone))
            zones.append(zone)
        self.boundaries = Boundaries(float(min_height), float(max_height), zones)
        return self.boundaries

    def set_map_characteristics(self, obstacles, map_size, origin=(0.0, 0.0, 0.0)):
        self._check_unset('map_characteristics')
        if not isinstance(obstacles, SpatialIndex):
            try:
                obstacles = SpatialIndex(obstacles)
            except ValueError as e:
                raise ConfigurationException(str(e)) from e
        map_size = _vector3(map_size, "map_size")
        if np.any(map_size < 0):
            raise ConfigurationException("map_size must be non-negative, got {}".format(map_size))
        self.map_characteristics = MapCharacteristics(obstacles, map_size, _vector3(origin, "origin"))
        return self.map_characteristics

    def set_node_characteristics(self, timeout, step_size, clearance, rotation=(0.0, 0.0, 0.0),
                                 translation=(0.0, 0.0, 0.0)):
        self._check_unset('node_characteristics')
        for label, value in [("timeout", timeout), ("step_size", step_size), ("clearance", clearance)]:
            if not value > 0:
                raise ConfigurationException("{} must be positive, got {}".format(label, value))
        frame = FrameTransform(_vector3(rotation, "rotation"), _vector3(translation, "translation"))
        self.node_characteristics = NodeCharacteristics(float(timeout), float(step_size), float(clearance), frame)
        return self.node_characteristics

    def missing_groups(self):
        return [group for group in self.groups if getattr(self, group) is None]

    def is_configured(self):
        return len(self.missing_groups()) == 0

    def summary(self):
        """
        Plain dictionary of the scalar settings, for logging.
        """
        summary = OrderedDict()
        if self.endpoints is not None:
            summary['start'] = list(self.endpoints.start)
            summary['goal'] = list(self.endpoints.goal)
        if self.boundaries is not None:
            summary['height'] = [self.boundaries.min_height, self.boundaries.max_height]
            summary['no_fly_zones'] = len(self.boundaries.no_fly_zones)
        if self.map_characteristics is not None:
            summary['obstacles'] = len(self.map_characteristics.obstacles)
            summary['map_size'] = list(self.map_characteristics.map_size)
        if self.node_characteristics is not None:
            summary['timeout'] = self.node_characteristics.timeout
            summary['step_size'] = self.node_characteristics.step_size
            summary['clearance'] = self.node_characteristics.clearance
        return summary

    def _check_unset(self, group):
        if getattr(self, group) is not None:
            raise ConfigurationException("The {} group has already been configured.".format(group))
