def extract_path(tree, goal_idx, include_start=False):
    """
    Collects node positions along the tree path from the goal back toward the root, goal first.

    The vertex path is taken from an igraph export of the tree. The root's own position is not emitted unless
    include_start is set. Callers wanting start-first order must reverse the result.

    Args:
        tree (SearchTree): The grown tree.
        goal_idx (int): Index of the goal node, which must have a parent.
        include_start (bool, optional): Append the root position after the walk. Defaults to False.

    Returns:
        list: Positions from the goal toward the start.
    """
    if tree.parent(goal_idx) is None:
        raise ValueError("Goal node {} is not attached to the tree.".format(goal_idx))
    graph = tree.to_graph()
    vertices = graph.get_shortest_paths(tree.root, to=goal_idx, mode='OUT')[0]
    if not include_start:
        vertices = vertices[1:]
    return [graph.vs[idx]['position'] for idx in reversed(vertices)]
