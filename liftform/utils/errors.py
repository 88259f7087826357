# liftform/utils/errors.py
class DatasetReadError(IOError):
    """
    Raised when an input file is missing, unreadable,
    or not valid delimited text.
    """


class SchemaError(ValueError):
    """
    Raised when a table does not carry the columns the run requires
    (label / id / fitted feature columns).
    """


class ModelFitError(RuntimeError):
    """
    Raised when a forest cannot be fitted on the given rows:
    degenerate label distribution, too few rows per fold,
    or a feature column that cannot be made numeric.
    """
