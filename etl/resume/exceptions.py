"""
Resume pipeline errors.

Every failure that reaches the request boundary derives from
ResumeProcessingError so callers can catch the whole family at once.
"""


class ResumeProcessingError(Exception):
    """Base class for resume pipeline failures."""
    pass


class ExtractionError(ResumeProcessingError):
    """The uploaded document could not be decoded into text."""
    pass


class ConfigurationError(ResumeProcessingError):
    """Full-structure parsing was requested without a configured model."""
    pass


class ModelCallError(ResumeProcessingError):
    """The generative model call failed or returned nothing usable."""
    pass


class ParseFailure(ResumeProcessingError):
    """The model answered but its output could not become a valid resume.

    Attributes:
        reason: 'unparseable', 'missing_jobs' or 'no_jobs'
    """

    UNPARSEABLE = 'unparseable'
    MISSING_JOBS = 'missing_jobs'
    NO_JOBS = 'no_jobs'

    _MESSAGES = {
        UNPARSEABLE: 'could not parse resume structure',
        MISSING_JOBS: 'missing jobs array',
        NO_JOBS: 'no jobs found in resume',
    }

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self._MESSAGES.get(reason, reason))
