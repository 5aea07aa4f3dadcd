"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold comment-tree logic that doesn't belong to a single
    comment: ordering, card state derivation and reconciliation.
    """

    pass
