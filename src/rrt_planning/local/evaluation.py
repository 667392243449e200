def incremental_evaluate(eval_fn, local_path):
    """
    Incrementally evaluates a discrete local path i.e. 1-2-3-4-5-6-7-8, stopping at the first failure.

    Args:
        eval_fn (func): Evaluating function, returns True when a point is acceptable.
        local_path (iterable): Points to evaluate in order.

    Returns:
        bool: True if every point passed.
    """
    for point in local_path:
        if not eval_fn(point):
            return False
    return True
