from rrt_planning.spatial.index import SpatialIndex, RadiusQueryResult
