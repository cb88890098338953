"""
Errors raised while reconciling media with sidecar descriptors.

Everything derives from SidecarOrganizerError so the CLI can report any
of them with the offending path and exit non-zero.
"""


class SidecarOrganizerError(Exception):
    """Base exception for all sidecar organizer errors."""
    pass


class ConfigurationError(SidecarOrganizerError):
    """Raised when library roots are missing or a path falls outside them."""
    pass


class DescriptorParseError(SidecarOrganizerError):
    """Raised when a sidecar descriptor cannot be loaded or is missing required fields."""
    pass


class FileOperationError(SidecarOrganizerError):
    """Raised when mkdir/rename/read operations fail."""
    pass


class UnhandledChoiceError(SidecarOrganizerError):
    """Raised when the confirmation prompt returns an unknown choice."""
    pass
