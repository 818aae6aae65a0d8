"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AssociationLookupError(DomainException):
    """Plan association store is missing or unavailable"""

    pass


class ItemNotFoundError(DomainException):
    """Product or combo does not exist, is inactive, or is out of its validity window"""

    pass


class PlanNotFoundError(DomainException):
    """Financing plan does not exist or is inactive"""

    pass
