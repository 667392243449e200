import sys

import numpy as np

from rrt_planning.core.serialization import load_json_params, dump_path
from rrt_planning.log import Logger
from rrt_planning.planners.rrt import RRTSearch


def column_obstacles(center, radius, height, spacing=0.2):
    """
    Vertical cylinder shell of points, standing in for a perceived obstacle.
    """
    angles = np.arange(0, 2 * np.pi, spacing / radius)
    heights = np.arange(-height / 2, height / 2, spacing)
    ring = np.column_stack([center[0] + radius * np.cos(angles), center[1] + radius * np.sin(angles)])
    return np.array([[x, y, z] for x, y in ring for z in heights])


def main():
    if len(sys.argv) > 1:
        params = load_json_params(sys.argv[1])
    else:
        params = {
            "start": [0.0, 0.0, 1.0],
            "goal": [8.0, 1.0, 1.0],
            "min_height": 0.0,
            "max_height": 3.0,
            "no_fly_zones": [[3.0, 4.0, 2.0, 6.0]],
            "map_size": [20.0, 20.0, 6.0],
            "origin": [0.0, 0.0, 0.0],
            "timeout": 2.0,
            "step_size": 1.0,
            "clearance": 0.3,
            "rotation": [0.0, 0.0, 15.0],
            "translation": [0.5, -0.5, 0.0],
            "goal_bias": 0.1,
            "include_start": True,
            "seed": 0,
            "log_level": "debug"
        }
    logger = Logger(handlers=['logging'], level=params.get('log_level', 'info'))
    obstacles = column_obstacles(center=(4.0, 0.0), radius=1.0, height=6.0)

    search = RRTSearch.from_params(params, obstacles=obstacles, logger=logger)
    result = search.plan()
    if result.success:
        # Path is goal first.
        for point in reversed(result.path):
            logger.info("  {}".format(np.round(point, 3)))
        logger.info("Saved to {}".format(dump_path(result.path, "./results", params=params)))
    else:
        logger.warn("No path: {}".format(result.status.value))


if __name__ == "__main__":
    main()
