"""Interface to the backend that talks to the Nitrokey Storage."""

import importlib
from collections.abc import Callable
from typing import Protocol

from nitrocli.errors import DeviceError
from nitrocli.logging import get_logger
from nitrocli.models import StorageStatus

logger = get_logger(__name__)


class Device(Protocol):
    """A connected Nitrokey Storage.

    Implementations raise DeviceError (or WrongPassphraseError for a rejected
    user PIN) when the device reports a failure.
    """

    def status(self) -> StorageStatus: ...

    def enable_encrypted_volume(self, passphrase: str) -> None: ...

    def disable_encrypted_volume(self) -> None: ...


DeviceFactory = Callable[[], Device]


def load_device_factory(spec: str | None) -> DeviceFactory:
    """Resolve a ``package.module:callable`` backend specification."""
    if not spec:
        msg = 'no Nitrokey device backend configured'
        raise DeviceError(msg)

    module_name, sep, attr = spec.partition(':')
    if not sep or not module_name or not attr:
        msg = f'invalid device backend specification: {spec}'
        raise DeviceError(msg)

    logger.debug('loading_device_backend', module=module_name, attribute=attr)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f'failed to import device backend {module_name}: {exc}'
        raise DeviceError(msg) from exc

    factory = getattr(module, attr, None)
    if not callable(factory):
        msg = f'device backend {spec} is not callable'
        raise DeviceError(msg)
    return factory
