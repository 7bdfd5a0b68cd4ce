class UnknownCalculationMode(ValueError):
    """Raised when a surcharge rule carries a calculation mode the calculator
    does not implement."""


class MissingScheduleContext(Exception):
    """Raised when carrier rules are requested for a quotation that has no
    selected carrier or port of discharge."""
