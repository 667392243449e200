"""
Interfaces for candidate validity checking.
"""

__all__ = ['CandidateValidityChecker']


class CandidateValidityChecker():

    """
    This CandidateValidityChecker class expects a list of point validity functions (no-fly filters etc,.) and an
    edge collision checking function. It is up to the developer to inject these functions as deemed appropriate.

    Attributes:
        validity_funcs (list): Functions of a single candidate point, True when the point is acceptable.
        col_func (func): Function of (parent, candidate), True when the edge between them is collision free.
    """

    def __init__(self, validity_funcs=None, col_func=None):
        if col_func is None and validity_funcs is None:
            raise ValueError("Candidate validity checking cannot be performed if no validity functions of any kind are given.")
        self.validity_funcs = validity_funcs if validity_funcs is not None else []
        self.col_func = col_func

    def validate_point(self, candidate):
        return all(func(candidate) for func in self.validity_funcs)

    def validate_edge(self, parent, candidate):
        if self.col_func is None:
            return True
        return self.col_func(parent, candidate)

    def validate(self, parent, candidate):
        """
        Validates a candidate and the edge from its parent. Point checks run first and short-circuit the edge check.

        Args:
            parent (ndarray): Position the candidate was stepped from.
            candidate (ndarray): Candidate position.

        Returns:
            bool: Whether or not the candidate is valid.
        """
        if not self.validate_point(candidate):
            return False
        return self.validate_edge(parent, candidate)
