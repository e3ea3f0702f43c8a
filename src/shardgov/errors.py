"""Errors raised by governance operations."""


class GovernanceError(Exception):
    """Base class for governance failures."""


class StoreUnavailable(GovernanceError):
    """The coordination store could not be read, listed or written."""


class PreconditionViolation(GovernanceError):
    """Configuration data broke a structural guarantee.

    Raised when a replica-query rule document parses without yielding a
    replica-query rule.
    """


class MalformedConfiguration(GovernanceError):
    """Raw rule configuration text could not be parsed."""
