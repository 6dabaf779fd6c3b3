"""
EligEX Exceptions

The engine does not raise for data-shape problems. These exceptions cover
invalid calls, configuration and catalog loading only.
"""


class EligibilityError(Exception):
    """Base class for EligEX errors"""
    pass


class InvalidEvaluationCallError(EligibilityError, ValueError):
    """Raised when an evaluation is called without a usable exam document or profile"""
    pass


class ConfigurationError(EligibilityError):
    """Raised when configuration cannot be loaded or validated"""
    pass


class CatalogError(EligibilityError):
    """Raised when an exam document on disk cannot be read or parsed"""
    pass
