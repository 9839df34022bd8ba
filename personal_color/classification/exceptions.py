class ClassificationError(Exception):
    """Raised when a classifier cannot produce a result for a stored file."""
