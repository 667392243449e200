from collections import namedtuple

import numpy as np
from sklearn.neighbors import KDTree

__all__ = ['SpatialIndex', 'RadiusQueryResult']


RadiusQueryResult = namedtuple('RadiusQueryResult', ['exists', 'count'])


class SpatialIndex():
    """
    Immutable 3D point set supporting axis-aligned box crops and Euclidean radius queries.

    Box crops return a new SpatialIndex over the subset, so crops compose. Radius queries are answered by a
    scikit-learn KDTree that is only fitted the first time a radius query is made on a given index.

    Args:
        X (array-like): Nx3 array-like of points. N may be zero.
        model_type (str, optional): Determines the choice of model. Defaults to "KDTree".
        model_kwargs (dict, optional): Keyword args to pass to the chosen model. Defaults to None.

    Raises:
        ValueError: Error if X is not Nx3 or the model type is not available for use.
    """

    available_models = ['KDTree']

    def __init__(self, X, model_type="KDTree", model_kwargs=None):
        X = np.array(X, dtype=float)
        if X.size == 0:
            X = X.reshape(0, 3)
        if X.ndim != 2 or X.shape[1] != 3:
            raise ValueError("Points must be an Nx3 array, got shape {}".format(X.shape))
        if model_type not in self.available_models:
            raise ValueError(
                "{} is not a valid value for model_type. Must be one of {}".format(model_type, self.available_models))
        X.setflags(write=False)
        self.X = X
        self.model_type = model_type
        self.model_kwargs = model_kwargs if model_kwargs is not None else {}
        self.model = None

    def __len__(self):
        return self.X.shape[0]

    @property
    def points(self):
        return self.X

    def is_empty(self):
        return len(self) == 0

    def fit(self):
        """
        Fits the chosen model on the current point set.
        """
        if self.model_type == "KDTree":
            # KDTree keeps a writeable view of its data.
            self.model = KDTree(np.array(self.X), **self.model_kwargs)

    def box_query(self, center, extent):
        """
        Crops the point set to the axis-aligned box [center - extent / 2, center + extent / 2], bounds inclusive.

        Args:
            center (array-like): 1x3 box centroid.
            extent (array-like): 1x3 box dimensions.

        Returns:
            SpatialIndex: Index over the points inside the box.
        """
        center = np.asarray(center, dtype=float)
        half = np.asarray(extent, dtype=float) / 2
        lower = center - half
        upper = center + half
        mask = np.all((self.X >= lower) & (self.X <= upper), axis=1)
        return SpatialIndex(self.X[mask], model_type=self.model_type, model_kwargs=self.model_kwargs)

    def radius_query(self, point, radius):
        """
        Counts the points whose Euclidean distance to point is at most radius.

        Args:
            point (array-like): 1x3 query point.
            radius (float): Search radius. A radius of 0 only matches coincident points.

        Returns:
            RadiusQueryResult: Whether any point was found and how many.
        """
        if radius < 0:
            raise ValueError("Radius must be non-negative, got {}".format(radius))
        if self.is_empty():
            return RadiusQueryResult(False, 0)
        if self.model is None:
            self.fit()
        count = int(self.model.query_radius([np.asarray(point, dtype=float)], r=radius, count_only=True)[0])
        return RadiusQueryResult(count > 0, count)
