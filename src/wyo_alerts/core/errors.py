"""Error taxonomy shared by the library, service, and API layers.

User-correctable problems derive from :class:`ValueError` (via
:class:`RequestError`) so the application's ``ValueError`` handler maps them
to HTTP 400.  Persistence failures are :class:`RuntimeError` subclasses and
map to HTTP 500; callers may retry them.

An unrecognized ZIP code or city is *not* an error: the resolver reports it
through empty result sets and an explanation string.
"""


class RequestError(ValueError):
    """Base class for input the caller can correct and resubmit."""


class InvalidRequestError(RequestError):
    """Required fields are missing or malformed."""


class InvalidRegionError(RequestError):
    """Lookup input does not look like a Wyoming address or ZIP code."""


class UnsupportedRegionError(RequestError):
    """Contact details fall outside the supported (Wyoming) region."""


class MissingContactError(RequestError):
    """Neither an email address nor a phone number was supplied."""


class ConsentRequiredError(RequestError):
    """The subscriber did not consent to receive alerts."""


class NoDistrictsSelectedError(RequestError):
    """A subscription must name at least one district."""


class SubscriptionFailedError(RuntimeError):
    """Subscriber or membership rows could not be persisted.

    Raised after the partial write has been rolled back, so no subscriber
    is left visible without its memberships.
    """


class LegislatorImportError(RuntimeError):
    """The legislator roster could not be replaced."""
