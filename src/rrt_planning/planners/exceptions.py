class PlanningException(Exception):
    pass


class ConfigurationException(PlanningException):
    pass


class NotConfiguredException(PlanningException):
    pass


class PlanningTimeoutException(PlanningException):
    pass


class MaxItersException(PlanningException):
    pass
