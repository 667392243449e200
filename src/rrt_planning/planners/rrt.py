from collections import namedtuple
from enum import Enum
import time

import numpy as np

from rrt_planning.collisions.collision import PointCloudCollisionChecker
from rrt_planning.core.planning_context import PlanningContext
from rrt_planning.geometric.utils import clamp_to_bounds, in_no_fly_zone, sq_separation
from rrt_planning.local.interpolation import cumulative_distance
from rrt_planning.log import Logger
from rrt_planning.planners.exceptions import (ConfigurationException, MaxItersException, NotConfiguredException,
                                              PlanningTimeoutException)
from rrt_planning.planners.tree import SearchTree
from rrt_planning.planners.utils import extract_path
from rrt_planning.sampling.samplers import StepSampler
from rrt_planning.sampling.state_validity import CandidateValidityChecker

__all__ = ['RRTSearch', 'SearchState', 'PlanningStatus', 'PlanningResult']


class SearchState(Enum):
    UNCONFIGURED = 'unconfigured'
    GROWING = 'growing'
    REACHED = 'reached'
    TIMED_OUT = 'timed_out'
    ITERATION_LIMIT = 'iteration_limit'


class PlanningStatus(Enum):
    FOUND = 'found'
    NOT_CONFIGURED = 'not_configured'
    TIMED_OUT = 'timed_out'
    ITERATION_LIMIT = 'iteration_limit'


class PlanningResult(namedtuple('PlanningResult', ['status', 'path', 'iterations', 'node_count', 'elapsed'])):
    """
    Outcome of a search. path is goal first and only non-empty when status is FOUND.
    """
    __slots__ = ()

    @property
    def success(self):
        return self.status == PlanningStatus.FOUND

    def raise_for_status(self):
        if self.status == PlanningStatus.NOT_CONFIGURED:
            raise NotConfiguredException("Planner was run before all configuration groups were supplied.")
        if self.status == PlanningStatus.TIMED_OUT:
            raise PlanningTimeoutException(
                "Goal not reached after {} iterations in {:.3f} seconds.".format(self.iterations, self.elapsed))
        if self.status == PlanningStatus.ITERATION_LIMIT:
            raise MaxItersException("Max iterations ({}) reached...planning failure.".format(self.iterations))
        return self


_STATUS_BY_STATE = {
    SearchState.REACHED: PlanningStatus.FOUND,
    SearchState.TIMED_OUT: PlanningStatus.TIMED_OUT,
    SearchState.ITERATION_LIMIT: PlanningStatus.ITERATION_LIMIT,
}


class RRTSearch():

    """
    Randomized tree search from a start to a goal through a point cloud, bounded by height limits, map extent and
    world frame no-fly rectangles.

    All four configure_* methods must be called once before plan() or run() will grow the tree. Each growth step
    picks a random tree node and a random non-normalized direction in [-1, 1]^3, steps by 60-100% of step_size,
    clamps the result to the map, rejects it if its world frame projection is inside a no-fly zone or if the edge
    from the node is blocked, and otherwise inserts it. The search is reached once a new node is within step_size of
    the goal with a clear edge to it.

    Args:
        params (dict, optional): Search options: 'goal_bias', 'max_iters', 'include_start', 'seed', 'log_level'.
        logger (Logger, optional): Logger to use. One is built from params['log_level'] if not given.
        rng (numpy.random.Generator, optional): Generator for every random draw of the session.
    """

    def __init__(self, params=None, logger=None, rng=None):
        params = params if params is not None else {}
        self.goal_bias = params.get('goal_bias', 0.0)
        self.max_iters = params.get('max_iters', None)
        self.include_start = params.get('include_start', False)
        if not 0.0 <= self.goal_bias <= 1.0:
            raise ConfigurationException("goal_bias must be within [0, 1], got {}".format(self.goal_bias))
        self.log = logger if logger is not None else Logger(handlers=['logging'], level=params.get('log_level', 'info'))
        self.sampler = StepSampler(rng=rng, seed=params.get('seed', None))
        self.context = PlanningContext()
        self.tree = SearchTree()
        self.state = SearchState.UNCONFIGURED
        self.iterations = 0
        self.rejected_no_fly = 0
        self.rejected_collision = 0
        self.goal_idx = None
        self.result = None
        self.svc = None
        self.collision_checker = None

    @classmethod
    def from_params(cls, params, obstacles=None, logger=None, rng=None):
        """
        Builds a fully configured search from a flat parameter dictionary.

        Required keys are 'start', 'goal', 'min_height', 'max_height', 'map_size', 'step_size' and 'clearance'.
        'timeout' defaults to 0.1 seconds; 'no_fly_zones', 'origin', 'rotation' and 'translation' default to empty
        or zero.

        Args:
            params (dict): Configuration and search options.
            obstacles (array-like or SpatialIndex, optional): Obstacle points. Defaults to an empty set.
        """
        required = ['start', 'goal', 'min_height', 'max_height', 'map_size', 'step_size', 'clearance']
        missing = [key for key in required if key not in params]
        if missing:
            raise ConfigurationException("Missing planning parameters: {}".format(missing))
        search = cls(params, logger=logger, rng=rng)
        search.configure_endpoints(params['start'], params['goal'])
        search.configure_boundaries(params['min_height'], params['max_height'], params.get('no_fly_zones', []))
        search.configure_map(obstacles if obstacles is not None else np.empty((0, 3)), params['map_size'],
                             params.get('origin', (0.0, 0.0, 0.0)))
        search.configure_timing(params.get('timeout', 0.1), params['step_size'], params['clearance'],
                                params.get('rotation', (0.0, 0.0, 0.0)), params.get('translation', (0.0, 0.0, 0.0)))
        return search

    def configure_endpoints(self, start, goal):
        endpoints = self._configure(self.context.set_endpoints, start, goal)
        self.tree.add_root(endpoints.start)

    def configure_boundaries(self, min_height, max_height, no_fly_zones=None):
        self._configure(self.context.set_boundaries, min_height, max_height, no_fly_zones)

    def configure_map(self, obstacles, map_size, origin=(0.0, 0.0, 0.0)):
        self._configure(self.context.set_map_characteristics, obstacles, map_size, origin)

    def configure_timing(self, timeout, step_size, clearance, rotation=(0.0, 0.0, 0.0), translation=(0.0, 0.0, 0.0)):
        self._configure(self.context.set_node_characteristics, timeout, step_size, clearance, rotation, translation)

    def is_configured(self):
        return self.context.is_configured()

    def missing_groups(self):
        return self.context.missing_groups()

    def run(self):
        """
        Runs the search and returns the path only.

        Returns:
            list: Goal-first positions, stopping one edge short of the start unless 'include_start' was set.
                  Empty if the planner is not fully configured or the search failed.
        """
        return self.plan().path

    def plan(self):
        """
        Grows the tree until the goal is connected, the timeout elapses or the iteration cap is hit.

        Returns:
            PlanningResult: Status, path and search statistics.
        """
        if self.result is not None:
            return self.result
        if not self.context.is_configured():
            self.log.warn("Planner is missing configuration groups {}...not planning.".format(self.missing_groups()))
            return PlanningResult(PlanningStatus.NOT_CONFIGURED, [], 0, len(self.tree), 0.0)

        self._setup()
        self.log.info("Planning with {}".format(dict(self.context.summary())))
        timeout = self.context.node_characteristics.timeout
        self.state = SearchState.GROWING
        tick = time.perf_counter()
        while self.state == SearchState.GROWING:
            self._search_single_node()
            if self.state == SearchState.REACHED:
                break
            if time.perf_counter() - tick > timeout:
                self.state = SearchState.TIMED_OUT
            elif self.max_iters is not None and self.iterations >= self.max_iters:
                self.state = SearchState.ITERATION_LIMIT
        elapsed = time.perf_counter() - tick

        path = []
        if self.state == SearchState.REACHED:
            path = extract_path(self.tree, self.goal_idx, include_start=self.include_start)
            self.log.info("Goal reached in {} iterations ({:.3f}s), {} nodes, path of {} points and length {:.3f}.".format(
                self.iterations, elapsed, len(self.tree), len(path), cumulative_distance(path)))
        else:
            self.log.info("Search ended with state {} after {} iterations ({:.3f}s), {} nodes.".format(
                self.state.value, self.iterations, elapsed, len(self.tree)))
        self.log.debug("Rejected candidates: {} in no-fly zones, {} blocked edges.".format(
            self.rejected_no_fly, self.rejected_collision))
        self.result = PlanningResult(_STATUS_BY_STATE[self.state], path, self.iterations, len(self.tree), elapsed)
        return self.result

    def _configure(self, setter, *args):
        try:
            return setter(*args)
        except ConfigurationException as e:
            self.log.warn("Rejected configuration: {}".format(e))
            raise

    def _setup(self):
        boundaries = self.context.boundaries
        frame = self.context.node_characteristics.frame
        self.collision_checker = PointCloudCollisionChecker(self.context.map_characteristics.obstacles,
                                                            self.context.node_characteristics.clearance)

        def outside_no_fly_zones(candidate):
            # Zones are given in the world frame; candidates live in the working frame.
            if in_no_fly_zone(frame.to_world(candidate), boundaries.no_fly_zones):
                self.rejected_no_fly += 1
                return False
            return True

        def edge_clear(parent, candidate):
            if not self.collision_checker.segment_clear(parent, candidate):
                self.rejected_collision += 1
                return False
            return True

        validity_funcs = [outside_no_fly_zones] if boundaries.no_fly_zones else []
        self.svc = CandidateValidityChecker(validity_funcs=validity_funcs, col_func=edge_clear)

    def _search_single_node(self):
        self.iterations += 1
        goal = self.context.endpoints.goal
        if self.sampler.bias(self.goal_bias):
            idx = self.tree.nearest(goal)
            direction = goal - self.tree.position(idx)
            norm = np.linalg.norm(direction)
            direction = direction / norm if norm > 0 else direction
        else:
            direction = self.sampler.direction()
            idx = self.sampler.node_index(len(self.tree))

        parent = self.tree.position(idx)
        candidate = self._node_stepping(parent, direction)
        if not self.svc.validate(parent, candidate):
            return False

        new_idx = self.tree.add_node(candidate, idx)
        step_size = self.context.node_characteristics.step_size
        if sq_separation(candidate, goal) < step_size ** 2 and self.collision_checker.segment_clear(candidate, goal):
            self.goal_idx = self.tree.add_node(goal, new_idx)
            self.state = SearchState.REACHED
        return True

    def _node_stepping(self, node, direction):
        step_size = self.context.node_characteristics.step_size
        step = node + self.sampler.step_scale() * step_size * direction
        return clamp_to_bounds(step, self.context.map_characteristics.map_size,
                               self.context.boundaries.min_height, self.context.boundaries.max_height)
