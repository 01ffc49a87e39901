"""
Custom exception hierarchy for the photo grouper.

The grouping passes catch these and degrade to "skip and continue".
"""


class PhotoGrouperError(Exception):
    """Base exception for all photo grouper errors."""
    pass


class MalformedFilenameError(PhotoGrouperError):
    """Raised when a filename carries no usable numeric counter."""
    pass


class MetadataExtractionError(PhotoGrouperError):
    """Raised when metadata cannot be extracted from a file."""
    pass
