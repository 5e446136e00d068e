from scoring.exceptions import MalformedInputError


class DatabaseError(Exception):
    """Base for all database errors."""


class RowConversionError(DatabaseError, MalformedInputError):
    """A stored row does not convert into a valid model (bad JSON column, out-of-range value).

    Stored data is input to the scoring engine, so this is also a MalformedInputError.
    """
