from rrt_planning.planners.rrt import RRTSearch, PlanningResult, PlanningStatus, SearchState
from rrt_planning.spatial.index import SpatialIndex
from rrt_planning.collisions.collision import segment_clear

__version__ = '0.1'
