"""Pagination errors and actionable rejection messages."""
from pydantic import ValidationError


class InvalidPaginationParameter(ValueError):
    """A bound pagination parameter is missing or is not a whole number.

    Raised while a pagination context is being built. The query plan is
    rejected; no degraded pagination is attempted.
    """

    def __init__(self, parameter_index: int, reason: str):
        self.parameter_index = parameter_index
        self.reason = reason
        super().__init__(
            f"Invalid pagination parameter at index {parameter_index}: {reason}"
        )


def handle_error(e: Exception) -> str:
    """Return a human-readable, actionable message for a rejected query.

    Distinguishes between:
    - Bound LIMIT/OFFSET parameters that are missing or not whole numbers
    - Malformed pagination descriptors handed over by the parser
    """
    if isinstance(e, InvalidPaginationParameter):
        return (
            f"Error: Query rejected. Pagination parameter #{e.parameter_index} "
            f"{e.reason}. Bind a whole-number value for every LIMIT/OFFSET "
            "placeholder and try again."
        )

    if isinstance(e, ValidationError):
        fields = sorted(
            {".".join(str(p) for p in err["loc"]) for err in e.errors() if err["loc"]}
        )
        return (
            "Error: Malformed pagination descriptor"
            + (f" (fields: {', '.join(fields)})" if fields else "")
            + ". Check the parser output for LIMIT/OFFSET/ROWNUM/TOP clauses."
        )

    return f"Error: {type(e).__name__}: {str(e)}"
