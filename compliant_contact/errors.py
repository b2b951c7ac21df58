from __future__ import annotations


class ContactForceError(Exception):
    """Base class for errors raised by the compliant contact package."""


class ConfigurationError(ContactForceError):
    """No generator, specific or default, can respond to a contact type."""


class UnimplementedAlgorithmError(ContactForceError, NotImplementedError):
    """A generator that deliberately has no algorithm was invoked."""


class InvalidStateError(ContactForceError, RuntimeError):
    """A value was requested before the state reached the stage that owns it."""


class InvalidArgumentError(ContactForceError, ValueError):
    """An argument is outside the domain the operation accepts."""
