"""
Exception types raised by the provisioning steps.
"""


class DevSetupError(Exception):
    """Base class for all devsetup errors."""


class FatalStepError(DevSetupError):
    """A condition that must halt the whole provisioning run."""


class ConfigError(DevSetupError):
    """The configuration file could not be read or validated."""
