import math

import numpy as np
from pyquaternion import Quaternion
from scipy.spatial.transform import Rotation as R

__all__ = ['deg2rad', 'rad2deg', 'rpy2quat', 'rpy2rot', 'transform_vector',
           'rotate_translation_with_rpy', 'FrameTransform']


def deg2rad(deg):
    return deg / 180.0 * math.pi


def rad2deg(rad):
    return rad / math.pi * 180.0


def rpy2quat(rpy, degrees=True):
    """
    Composes roll, pitch and yaw into a single quaternion, applied intrinsically about X, then Y, then Z.

    Args:
        rpy (array-like): roll, pitch, yaw.
        degrees (bool, optional): True for degrees, False for radians. Defaults to True.

    Returns:
        Quaternion: Rx(roll) * Ry(pitch) * Rz(yaw).
    """
    roll, pitch, yaw = [deg2rad(angle) if degrees else angle for angle in rpy]
    return Quaternion(axis=[1.0, 0.0, 0.0], radians=roll) \
        * Quaternion(axis=[0.0, 1.0, 0.0], radians=pitch) \
        * Quaternion(axis=[0.0, 0.0, 1.0], radians=yaw)


def rpy2rot(rpy, degrees=False):
    """
    Converts rpy / intrinsic xyz euler angles into a rotation matrix.

    Args:
        rpy (array-like): rpy / intrinsic xyz euler angles.
        degrees (bool) : Whether or not euler_angles are in degrees (True), or radians (False).

    Returns:
        ndarray: The rotation matrix.
    """
    return R.from_euler('XYZ', rpy, degrees=degrees).as_matrix()


def transform_vector(point, rpy, translation, forward_or_back):
    """
    Moves a point between the working frame and the world frame.

    "backward" rotates the point and then adds the translation (working -> world). "forward" subtracts the
    translation and then rotates (world -> working). The two modes share the same rotation, so they are not
    inverses of one another unless the rotation is the identity.

    Args:
        point (array-like): 1x3 point.
        rpy (array-like): roll, pitch, yaw in degrees.
        translation (array-like): 1x3 translation.
        forward_or_back (str): "forward" or "backward".

    Returns:
        ndarray: The transformed point.
    """
    return _apply_transform(rpy2quat(rpy, degrees=True), point, translation, forward_or_back)


def _apply_transform(q, point, translation, forward_or_back):
    point = np.asarray(point, dtype=float)
    translation = np.asarray(translation, dtype=float)
    if forward_or_back == "backward":
        return np.array(q.rotate(point)) + translation
    elif forward_or_back == "forward":
        return np.array(q.rotate(point - translation))
    raise ValueError("forward_or_back must be 'forward' or 'backward', got {}".format(forward_or_back))


def rotate_translation_with_rpy(rotation, translation):
    """
    Rotates the negated translation by the rotation built from the negated rpy angles (degrees).

    Standalone alternate convention for callers that describe the frame from the other side. The planner itself
    only uses transform_vector.
    """
    rot = R.from_euler('XYZ', -np.asarray(rotation, dtype=float), degrees=True)
    return rot.apply(-np.asarray(translation, dtype=float))


class FrameTransform():

    def __init__(self, rotation=(0.0, 0.0, 0.0), translation=(0.0, 0.0, 0.0)):
        self.rotation = np.array(rotation, dtype=float)
        self.translation = np.array(translation, dtype=float)
        if self.rotation.shape != (3,) or self.translation.shape != (3,):
            raise ValueError("Rotation and translation must both be 1x3 vectors.")
        self.quaternion = rpy2quat(self.rotation, degrees=True)

    def to_world(self, point):
        return _apply_transform(self.quaternion, point, self.translation, "backward")

    def to_local(self, point):
        return _apply_transform(self.quaternion, point, self.translation, "forward")

    def is_identity(self):
        return not np.any(self.rotation) and not np.any(self.translation)
