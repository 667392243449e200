"""
Random draws used to grow the search tree.
"""
import math

import numpy as np

__all__ = ['StepSampler']


class StepSampler():

    """
    Draws directions, node indices and step scales from a single numpy Generator.

    Attributes:
        rng (numpy.random.Generator): Source of all randomness for a planning session.
        step_range (tuple): Lower and upper bound of the step scale.
    """

    def __init__(self, rng=None, seed=None, step_range=(0.6, 1.0)):
        """
        Args:
            rng (numpy.random.Generator, optional): Generator to draw from. Built from seed if not given.
            seed (int, optional): Seed for a new generator.
            step_range (tuple, optional): Bounds of the uniform step scale. Defaults to (0.6, 1.0).
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.step_range = step_range

    def direction(self):
        """
        Samples each axis independently and uniformly in [-1, 1]. The vector is not normalized.

        Returns:
            ndarray: 1x3 direction.
        """
        return self.rng.uniform(-1.0, 1.0, size=3)

    def node_index(self, size):
        """
        Selects an index uniformly from [0, size).

        Returns:
            int: ceil(u * size) - 1 for u uniform in [0, 1), with a zero draw mapped to 0.
        """
        return max(int(math.ceil(self.rng.random() * size)) - 1, 0)

    def step_scale(self):
        return self.rng.uniform(self.step_range[0], self.step_range[1])

    def bias(self, rate):
        """
        Returns True with probability rate.
        """
        return rate > 0 and self.rng.random() < rate
