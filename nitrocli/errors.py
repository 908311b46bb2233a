"""Error types raised by nitrocli."""


class NitrocliError(RuntimeError):
    """Base class for errors reported to the user by nitrocli."""


class ArgparseError(NitrocliError):
    """Raised when a subcommand's arguments could not be parsed."""

    def __init__(self, msg: str = 'Could not parse arguments') -> None:
        super().__init__(msg)


class NitrocliConfigError(NitrocliError):
    """Raised when the nitrocli configuration is invalid."""


class DeviceError(NitrocliError):
    """Raised when the device backend reports a failure."""


class WrongPassphraseError(DeviceError):
    """Raised when the device rejects the supplied passphrase."""


class PinentryError(NitrocliError):
    """Raised when gpg-agent could not provide or clear a passphrase."""
