"""Exceptions raised by the valuation engine."""


class ValuationError(Exception):
    """Base exception for valuation errors."""

    pass


class ParseError(ValuationError, ValueError):
    """
    Raised when a price or numeric feature string is malformed.

    This can happen when:
    - The price is not digits followed by a two character currency suffix
    - A numeric feature (rooms, area, floors) is not a number
    """

    pass


class EmptyInputError(ValuationError):
    """Raised when the reference set is empty."""

    pass


class MissingFeatureError(ValuationError):
    """
    Raised when a feature without a defined default is missing.

    Only the built-in year has no default; see MISSING_YEAR_POLICY.
    """

    def __init__(self, feature: str, detail: str = ""):
        self.feature = feature
        message = f"Missing feature: {feature}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InterpolationError(ValuationError):
    """Raised when no adjacent curve pair brackets the query point."""

    pass
