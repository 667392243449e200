import unittest

import numpy as np

from rrt_planning.collisions.collision import segment_clear
from rrt_planning.geometric.transformation import FrameTransform
from rrt_planning.geometric.utils import in_no_fly_zone
from rrt_planning.log import Logger
from rrt_planning.planners.exceptions import (ConfigurationException, MaxItersException, NotConfiguredException,
                                              PlanningTimeoutException)
from rrt_planning.planners.rrt import RRTSearch, PlanningStatus, SearchState
from rrt_planning.spatial.index import SpatialIndex


def quiet_logger():
    return Logger(handlers=['logging'], level='err')


def scenario_params(**overrides):
    params = {
        'start': [0.0, 0.0, 0.0],
        'goal': [10.0, 0.0, 0.0],
        'min_height': -10.0,
        'max_height': 10.0,
        'no_fly_zones': [],
        'map_size': [30.0, 30.0, 20.0],
        'origin': [0.0, 0.0, 0.0],
        'timeout': 5.0,
        'step_size': 1.0,
        'clearance': 0.5,
        'rotation': [0.0, 0.0, 0.0],
        'translation': [0.0, 0.0, 0.0],
        'seed': 42,
    }
    params.update(overrides)
    return params


def wall_obstacles():
    ys, zs = np.meshgrid(np.arange(-3.0, 3.01, 0.25), np.arange(-3.0, 3.01, 0.25))
    return np.column_stack([np.full(ys.size, 5.0), ys.ravel(), zs.ravel()])


class TestNotConfigured(unittest.TestCase):
    def test_run_without_configuration(self):
        search = RRTSearch(logger=quiet_logger())
        result = search.plan()
        self.assertEqual(result.status, PlanningStatus.NOT_CONFIGURED)
        self.assertEqual(result.path, [])
        self.assertEqual(search.iterations, 0)
        self.assertEqual(search.run(), [])
        self.assertEqual(search.state, SearchState.UNCONFIGURED)

    def test_three_groups_are_not_enough(self):
        search = RRTSearch(logger=quiet_logger())
        search.configure_endpoints([0, 0, 0], [1, 0, 0])
        search.configure_boundaries(-1, 1, [])
        search.configure_map([], [10, 10, 10], [0, 0, 0])
        self.assertFalse(search.is_configured())
        self.assertEqual(search.missing_groups(), ['node_characteristics'])
        self.assertEqual(search.run(), [])
        self.assertEqual(search.iterations, 0)
        self.assertEqual(len(search.tree), 1)

    def test_repeated_group_does_not_mask_missing_group(self):
        search = RRTSearch(logger=quiet_logger())
        search.configure_endpoints([0, 0, 0], [1, 0, 0])
        search.configure_boundaries(-1, 1, [])
        search.configure_map([], [10, 10, 10], [0, 0, 0])
        with self.assertRaises(ConfigurationException):
            search.configure_map([], [10, 10, 10], [0, 0, 0])
        self.assertEqual(search.plan().status, PlanningStatus.NOT_CONFIGURED)
        self.assertEqual(search.iterations, 0)

    def test_raise_for_status(self):
        with self.assertRaises(NotConfiguredException):
            RRTSearch(logger=quiet_logger()).plan().raise_for_status()


class TestFromParams(unittest.TestCase):
    def test_missing_keys(self):
        params = scenario_params()
        del params['step_size']
        with self.assertRaises(ConfigurationException):
            RRTSearch.from_params(params, logger=quiet_logger())

    def test_configures_every_group(self):
        search = RRTSearch.from_params(scenario_params(no_fly_zones=[[4, 6, -5, 5]]), logger=quiet_logger())
        self.assertTrue(search.is_configured())
        self.assertEqual(len(search.context.boundaries.no_fly_zones), 1)
        np.testing.assert_array_almost_equal(search.tree.position(0), [0.0, 0.0, 0.0])

    def test_rejects_bad_goal_bias(self):
        with self.assertRaises(ConfigurationException):
            RRTSearch({'goal_bias': 1.5}, logger=quiet_logger())


class TestEmptyMap(unittest.TestCase):
    def test_reaches_far_goal_with_goal_bias(self):
        search = RRTSearch.from_params(scenario_params(goal_bias=0.2), logger=quiet_logger())
        result = search.plan()
        self.assertEqual(result.status, PlanningStatus.FOUND)
        self.assertGreater(len(result.path), 0)
        np.testing.assert_array_almost_equal(result.path[0], [10.0, 0.0, 0.0])
        self.assertEqual(search.state, SearchState.REACHED)

    def test_reaches_near_goal_with_plain_sampling(self):
        search = RRTSearch.from_params(scenario_params(goal=[2.0, 0.0, 0.0]), logger=quiet_logger())
        path = search.run()
        self.assertGreater(len(path), 0)
        np.testing.assert_array_almost_equal(path[0], [2.0, 0.0, 0.0])
        # The final edge into the goal is shorter than one step.
        goal_parent = search.tree.position(search.tree.parent(search.goal_idx))
        self.assertLess(np.linalg.norm(path[0] - goal_parent), 1.0)

    def test_path_omits_start_by_default(self):
        search = RRTSearch.from_params(scenario_params(goal=[2.0, 0.0, 0.0]), logger=quiet_logger())
        path = search.run()
        goal_idx = search.goal_idx
        chain = [goal_idx]
        while search.tree.parent(chain[-1]) is not None:
            chain.append(search.tree.parent(chain[-1]))
        self.assertEqual(len(path), len(chain) - 1)
        for point, idx in zip(path, chain):
            np.testing.assert_array_almost_equal(point, search.tree.position(idx))

    def test_include_start(self):
        search = RRTSearch.from_params(scenario_params(goal=[2.0, 0.0, 0.0], include_start=True),
                                       logger=quiet_logger())
        path = search.run()
        np.testing.assert_array_almost_equal(path[0], [2.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(path[-1], [0.0, 0.0, 0.0])

    def test_goal_node_attached_to_last_node(self):
        search = RRTSearch.from_params(scenario_params(goal=[2.0, 0.0, 0.0]), logger=quiet_logger())
        search.run()
        self.assertEqual(search.goal_idx, len(search.tree) - 1)
        parent = search.tree.parent(search.goal_idx)
        self.assertEqual(parent, len(search.tree) - 2)
        self.assertIn(search.goal_idx, search.tree.children(parent))

    def test_plan_is_cached(self):
        search = RRTSearch.from_params(scenario_params(goal=[2.0, 0.0, 0.0]), logger=quiet_logger())
        first = search.plan()
        iterations = search.iterations
        second = search.plan()
        self.assertIs(first, second)
        self.assertEqual(search.iterations, iterations)


class TestFailures(unittest.TestCase):
    def test_timeout(self):
        search = RRTSearch.from_params(scenario_params(goal=[14.0, 14.0, 9.0], timeout=0.05), logger=quiet_logger())
        result = search.plan()
        self.assertEqual(result.status, PlanningStatus.TIMED_OUT)
        self.assertEqual(result.path, [])
        self.assertGreater(result.iterations, 0)
        self.assertGreaterEqual(result.elapsed, 0.05)
        with self.assertRaises(PlanningTimeoutException):
            result.raise_for_status()

    def test_reach_on_the_step_that_exceeds_timeout(self):
        search = RRTSearch.from_params(scenario_params(goal=[0.5, 0.0, 0.0], timeout=1e-9, goal_bias=1.0),
                                       logger=quiet_logger())
        result = search.plan()
        self.assertEqual(result.status, PlanningStatus.FOUND)
        self.assertEqual(result.iterations, 1)
        self.assertGreater(result.elapsed, 1e-9)
        np.testing.assert_array_almost_equal(result.path[0], [0.5, 0.0, 0.0])
        self.assertIs(result.raise_for_status(), result)

    def test_iteration_limit(self):
        search = RRTSearch.from_params(scenario_params(goal=[14.0, 14.0, 9.0], timeout=60.0, max_iters=25),
                                       logger=quiet_logger())
        result = search.plan()
        self.assertEqual(result.status, PlanningStatus.ITERATION_LIMIT)
        self.assertEqual(result.iterations, 25)
        self.assertEqual(search.run(), [])
        with self.assertRaises(MaxItersException):
            result.raise_for_status()


class TestReproducibility(unittest.TestCase):
    def test_same_seed_same_tree(self):
        trees = []
        for _ in range(2):
            search = RRTSearch.from_params(scenario_params(goal=[14.0, 14.0, 9.0], timeout=60.0, max_iters=200,
                                                           seed=5),
                                           obstacles=wall_obstacles(), logger=quiet_logger())
            search.plan()
            trees.append(search.tree.positions())
        np.testing.assert_array_equal(trees[0], trees[1])

    def test_injected_generator(self):
        search = RRTSearch(logger=quiet_logger(), rng=np.random.default_rng(0))
        self.assertIsInstance(search.sampler.rng, np.random.Generator)


class TestTreeInvariants(unittest.TestCase):

    def assert_nodes_valid(self, search, zones, frame, map_size, min_height, max_height):
        half = np.asarray(map_size) / 2
        goal_idx = search.goal_idx
        for node in search.tree.nodes():
            if node.parent is None or node.index == goal_idx:
                continue
            position = node.position
            self.assertTrue(-half[0] <= position[0] <= half[0])
            self.assertTrue(-half[1] <= position[1] <= half[1])
            self.assertTrue(min_height <= position[2] <= max_height)
            self.assertFalse(in_no_fly_zone(frame.to_world(position), zones))
            for child in node.children:
                self.assertEqual(search.tree.parent(child), node.index)

    def assert_path_clear(self, path, clearance, obstacles):
        for p, q in zip(path, path[1:]):
            self.assertTrue(segment_clear(p, q, clearance, obstacles))

    def test_no_fly_zone(self):
        zones = [[4.0, 6.0, -5.0, 5.0]]
        params = scenario_params(no_fly_zones=zones, timeout=1.0, goal_bias=0.05)
        search = RRTSearch.from_params(params, logger=quiet_logger())
        result = search.plan()
        self.assertIn(result.status, [PlanningStatus.FOUND, PlanningStatus.TIMED_OUT])
        self.assert_nodes_valid(search, zones, FrameTransform(), params['map_size'], -10.0, 10.0)
        for point in result.path[1:]:
            self.assertFalse(in_no_fly_zone(point, zones))

    def test_no_fly_zone_in_rotated_frame(self):
        zones = [[-1.0, 3.0, 3.0, 4.0]]
        params = scenario_params(goal=[3.0, 0.0, 0.0], no_fly_zones=zones, rotation=[0.0, 0.0, 90.0],
                                 translation=[1.0, 2.0, 0.0], timeout=1.0, map_size=[12.0, 12.0, 6.0],
                                 min_height=-1.0, max_height=2.0)
        search = RRTSearch.from_params(params, logger=quiet_logger())
        search.plan()
        frame = FrameTransform([0.0, 0.0, 90.0], [1.0, 2.0, 0.0])
        self.assertGreater(len(search.tree), 1)
        self.assert_nodes_valid(search, zones, frame, params['map_size'], -1.0, 2.0)

    def test_found_path_avoids_no_fly_zone(self):
        zones = [[0.5, 2.5, 0.3, 3.0]]
        params = scenario_params(goal=[3.0, 0.0, 0.0], no_fly_zones=zones, goal_bias=0.3, include_start=True,
                                 seed=7)
        search = RRTSearch.from_params(params, logger=quiet_logger())
        result = search.plan()
        self.assertEqual(result.status, PlanningStatus.FOUND)
        self.assertGreater(len(result.path), 1)
        np.testing.assert_array_almost_equal(result.path[-1], [0.0, 0.0, 0.0])
        for point in result.path:
            self.assertFalse(in_no_fly_zone(point, zones))
        self.assert_nodes_valid(search, zones, FrameTransform(), params['map_size'], -10.0, 10.0)

    def test_found_path_clears_corridor_walls(self):
        ys, zs = np.meshgrid(np.arange(0.8, 3.01, 0.2), np.arange(-1.5, 1.51, 0.2))
        wall = np.column_stack([np.full(ys.size, 1.5), ys.ravel(), zs.ravel()])
        obstacles = np.vstack([wall, wall * [1.0, -1.0, 1.0]])
        index = SpatialIndex(obstacles)
        params = scenario_params(goal=[3.0, 0.0, 0.0], clearance=0.3, goal_bias=0.3, include_start=True, seed=11)
        search = RRTSearch.from_params(params, obstacles=obstacles, logger=quiet_logger())
        result = search.plan()
        self.assertEqual(result.status, PlanningStatus.FOUND)
        self.assertGreater(len(result.path), 1)
        # The walls do block edges that cross them.
        self.assertFalse(segment_clear([1.0, 1.5, 0.0], [2.0, 1.5, 0.0], params['clearance'], index))
        self.assertFalse(segment_clear([1.0, -1.5, 0.0], [2.0, -1.5, 0.0], params['clearance'], index))
        self.assert_path_clear(result.path, params['clearance'], index)
        self.assert_nodes_valid(search, [], FrameTransform(), params['map_size'], -10.0, 10.0)

    def test_obstacle_wall(self):
        obstacles = wall_obstacles()
        params = scenario_params(timeout=2.0, goal_bias=0.1, include_start=True)
        search = RRTSearch.from_params(params, obstacles=obstacles, logger=quiet_logger())
        result = search.plan()
        self.assert_nodes_valid(search, [], FrameTransform(), params['map_size'], -10.0, 10.0)
        index = SpatialIndex(obstacles)
        self.assert_path_clear(result.path, params['clearance'], index)
        for node in search.tree.nodes():
            if node.parent is not None:
                self.assertTrue(segment_clear(search.tree.position(node.parent), node.position,
                                              params['clearance'], index))


if __name__ == "__main__":
    unittest.main()
