import numpy as np


def cumulative_distance(local_path):
    """
    Calculates the cumulative euclidean distnace sum of a sequence of vectors.
    The distance between each consecutive point is calculated and summed.

    Args:
        local_path (array-like): Sequence of vectors representing a path.

    Returns:
        float: The cumulative euclidean distance. Zero for paths with fewer than two points.
    """
    if len(local_path) < 2:
        return 0.0
    return float(np.sum(np.sqrt(np.sum(np.diff(np.asarray(local_path, dtype=float), axis=0)**2, 1))))


def linspace(start, stop, n):
    """
    Produces n evenly spaced values from start to stop, both endpoints included.

    Args:
        start (float): First value.
        stop (float): Last value.
        n (int): Number of values. A single value yields [start].

    Returns:
        ndarray: The n values.
    """
    n = int(n)
    if n < 1:
        raise ValueError("linspace requires at least one value, got n={}".format(n))
    return np.linspace(start, stop, n)


def line_samples(p, q, n):
    """
    Discretizes the straight line from p to q into n points by spacing each axis independently.

    Args:
        p (ndarray): Numpy vector representing the starting point.
        q (ndarray): Numpy vector representing the ending point.
        n (int): Number of points.

    Returns:
        ndarray: nx3 array of points ordered from p to q.
    """
    return np.column_stack([linspace(p[axis], q[axis], n) for axis in range(len(p))])
