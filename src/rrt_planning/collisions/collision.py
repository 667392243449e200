"""
Collision checking of straight segments against a point cloud obstacle set, and the interfaces used to inject it
into the planner.
"""
import math

import numpy as np

from rrt_planning.local.evaluation import incremental_evaluate
from rrt_planning.local.interpolation import line_samples
from rrt_planning.spatial.index import SpatialIndex

__all__ = ['segment_clear', 'PointCloudCollisionChecker']


def segment_clear(p, q, threshold, obstacles):
    """
    Determines whether the straight segment from p to q keeps at least threshold clearance from every obstacle point.

    The obstacles are first cropped to a box around the whole segment (broad phase). The segment is then
    discretized into ceil(|p - q| / threshold) points and, in order from p to q, the broad phase subset is cropped to
    a cube of side 2 * threshold around each point before the radius query (narrow phase). The crops only prune; the
    outcome equals a radius query against the full obstacle set at every sample.

    Args:
        p (array-like): 1x3 segment start.
        q (array-like): 1x3 segment end.
        threshold (float): Clearance radius.
        obstacles (SpatialIndex or array-like): Obstacle points.

    Returns:
        bool: True if no obstacle point is within threshold of any sample.
    """
    p = np.asarray(p, dtype=float)
    q = np.asarray(q, dtype=float)
    if np.array_equal(p, q):
        return True
    if threshold <= 0:
        raise ValueError("Clearance threshold must be positive, got {}".format(threshold))
    if not isinstance(obstacles, SpatialIndex):
        obstacles = SpatialIndex(obstacles)

    # AABB around the segment, padded by the clearance on every side.
    local_obs = obstacles.box_query((p + q) / 2, np.abs(p - q) + 2 * threshold)
    if local_obs.is_empty():
        return True

    n = math.ceil(np.linalg.norm(p - q) / threshold)
    clearance_crop = np.full(3, 2 * threshold)

    def sample_clear(point):
        sub_local_obs = local_obs.box_query(point, clearance_crop)
        if sub_local_obs.is_empty():
            return True
        return not sub_local_obs.radius_query(point, threshold).exists

    return incremental_evaluate(sample_clear, line_samples(p, q, n))


class PointCloudCollisionChecker():

    """
    Binds an obstacle set and a clearance threshold for repeated segment checks.

    Attributes:
        obstacles (SpatialIndex): Obstacle points.
        threshold (float): Clearance radius.
    """

    def __init__(self, obstacles, threshold):
        self.obstacles = obstacles if isinstance(obstacles, SpatialIndex) else SpatialIndex(obstacles)
        if threshold <= 0:
            raise ValueError("Clearance threshold must be positive, got {}".format(threshold))
        self.threshold = threshold

    def segment_clear(self, p, q):
        return segment_clear(p, q, self.threshold, self.obstacles)

    def __call__(self, p, q):
        return self.segment_clear(p, q)
