"""nosyn error types."""


class NosynError(Exception):
    """Base error for all nosyn failures."""


class NosynVersionError(NosynError):
    """Manifest version mismatch."""


class NosynChecksumError(NosynError):
    """File checksum verification failed."""


class NosynConfigError(NosynError):
    """Unknown or malformed rule option."""
