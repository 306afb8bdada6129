"""Error kinds raised by the short link engine."""


class ShortLinkError(ValueError):
    """Base class for caller-recoverable short link failures."""


class InvalidUrlError(ShortLinkError):
    """The original URL is not a well-formed absolute URL."""


class InvalidFormatError(ShortLinkError):
    """A custom short code contains non-alphanumeric characters."""


class InvalidLengthError(ShortLinkError):
    """A custom short code is too short or too long."""


class CodeTakenError(ShortLinkError):
    """A custom short code is already in use."""


class InvalidValidityPeriodError(ShortLinkError):
    """The validity period is outside the allowed range of minutes."""


class CodeGenerationError(ShortLinkError):
    """No free short code could be found."""
