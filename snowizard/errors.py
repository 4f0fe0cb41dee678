"""Error types raised by the Snowizard client."""


class SnowizardError(RuntimeError):
    """Base class for failures when obtaining an ID from Snowizard."""


class NoServersError(SnowizardError):
    """Every configured host failed, or no hosts were configured."""


class MalformedResponseError(SnowizardError):
    """A server answered 200 but the body could not be decoded into an ID."""
