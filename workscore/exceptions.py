"""Exceptions raised by the Work Score engine."""


class ScoringInputError(ValueError):
    """Raised when scoring input is malformed.

    Missing data is never an error; this is reserved for inputs that would
    otherwise produce a misleading score (mixed spot ids, duplicate provider
    records, out-of-range reliability arguments).
    """
