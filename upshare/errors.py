"""Errors raised while serving uploads.

Request-level errors are werkzeug HTTP exceptions so Flask answers them with
the right status code; ``ConfigCorrupt`` is only raised at startup.
"""

from werkzeug.exceptions import BadRequest, InternalServerError, NotFound


class UpshareError(Exception):
    """Base class for every error raised by upshare."""


class ConfigCorrupt(UpshareError):
    """The persisted configuration could not be parsed."""


class ValidationError(UpshareError, BadRequest):
    """A required form field is missing or invalid."""


class MissingFile(ValidationError):
    description = 'No file uploaded.'


class FileMissing(UpshareError, NotFound):
    description = 'File not found.'


class ListingError(UpshareError, InternalServerError):
    description = 'Unable to read uploaded files.'
