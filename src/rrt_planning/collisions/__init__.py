from rrt_planning.collisions.collision import segment_clear, PointCloudCollisionChecker
