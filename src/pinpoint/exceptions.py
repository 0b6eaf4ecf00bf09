"""Pinpoint exception hierarchy.

All public exceptions inherit from PinpointError, giving callers a single
base class to catch when they want to handle any resolution failure
without swallowing unrelated errors.
"""


class PinpointError(Exception):
    """Base exception for all Pinpoint errors."""


class InvalidVersionFormat(PinpointError, ValueError):
    """Raised when a string is not a valid version or requirement.

    Covers anything other than a strict ``major.minor.patch`` triple,
    empty requirement strings and unknown comparison operators.
    """


class ConflictingVersionOptions(InvalidVersionFormat):
    """Raised when a package version and a platform version are both given."""


class NoMatchingVersion(PinpointError):
    """Raised when a well-formed request has no candidate in the searched catalogs."""


class UnknownPlatformRelease(PinpointError):
    """Raised when a platform release has no entry in the release-train table."""


class CatalogUnavailable(PinpointError):
    """Raised when the remote release index cannot be fetched.

    Covers transport errors, non-success HTTP statuses and undecodable
    payloads. Fetches are never retried internally.
    """


class MetadataError(PinpointError):
    """Raised when a module descriptor exists but cannot be read."""


class ConfigError(PinpointError):
    """Raised for invalid configuration files or environment overrides."""
