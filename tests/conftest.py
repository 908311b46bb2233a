import pytest

from nitrocli.errors import WrongPassphraseError
from nitrocli.logging import configure_logging
from nitrocli.models import StorageStatus


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Keep structlog output off stdout unless a test asks for it."""
    configure_logging(verbose=False)


@pytest.fixture
def storage_status() -> StorageStatus:
    return StorageStatus(
        sd_card_id=0x05DCAD1D,
        firmware_version_major=0,
        firmware_version_minor=49,
        firmware_locked=False,
        stored_keys=True,
        user_retry_count=3,
        admin_retry_count=3,
        unencrypted_volume='active',
        encrypted_volume='inactive',
        hidden_volume='inactive',
    )


class FakeDevice:
    """In-memory stand-in for a Nitrokey Storage backend."""

    def __init__(
        self,
        status: StorageStatus,
        passphrase: str = '123456',
    ) -> None:
        self._status = status
        self.passphrase = passphrase
        self.attempts: list[str] = []
        self.encrypted_open = False

    def status(self) -> StorageStatus:
        return self._status

    def enable_encrypted_volume(self, passphrase: str) -> None:
        self.attempts.append(passphrase)
        if passphrase != self.passphrase:
            msg = 'Wrong password'
            raise WrongPassphraseError(msg)
        self.encrypted_open = True

    def disable_encrypted_volume(self) -> None:
        self.encrypted_open = False


@pytest.fixture
def fake_device(storage_status: StorageStatus) -> FakeDevice:
    return FakeDevice(storage_status)
