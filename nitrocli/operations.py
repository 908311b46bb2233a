"""The operations nitrocli performs on a Nitrokey Storage."""

import os
import sys
from pathlib import Path

from nitrocli.config import NitrocliConfig, load_config
from nitrocli.device import Device, DeviceFactory, load_device_factory
from nitrocli.errors import WrongPassphraseError
from nitrocli.logging import get_logger
from nitrocli.models import StorageStatus
from nitrocli.pinentry import PassphraseCache

logger = get_logger(__name__)


def format_status(status: StorageStatus) -> str:
    """Render the device status the way ``nitrocli status`` prints it."""
    return (
        'Status:\n'
        f'  SD card ID:        {status.sd_card_id:#x}\n'
        f'  firmware version:  {status.firmware_version}\n'
        f'  firmware:          {"locked" if status.firmware_locked else "unlocked"}\n'
        f'  storage keys:      {"created" if status.stored_keys else "not created"}\n'
        f'  user retry count:  {status.user_retry_count}\n'
        f'  admin retry count: {status.admin_retry_count}\n'
        '  volumes:\n'
        f'    unencrypted:     {status.unencrypted_volume}\n'
        f'    encrypted:       {status.encrypted_volume}\n'
        f'    hidden:          {status.hidden_volume}\n'
    )


class DeviceOperations:
    """Device operations invoked by the nitrocli commands.

    The configuration is read and the device connected only when an
    operation needs them. Showing a command's help therefore never touches
    either, and clearing the cached passphrase works without a configured
    backend.
    """

    def __init__(
        self,
        config: NitrocliConfig | None = None,
        device_factory: DeviceFactory | None = None,
        agent: PassphraseCache | None = None,
        config_path: Path | None = None,
    ) -> None:
        self._config = config
        self._config_path = config_path
        self._device_factory = device_factory
        self._agent = agent

    @property
    def config(self) -> NitrocliConfig:
        if self._config is None:
            self._config = load_config(self._config_path)
        return self._config

    @property
    def agent(self) -> PassphraseCache:
        if self._agent is None:
            self._agent = PassphraseCache(self.config.gpg_connect_agent)
        return self._agent

    def connect(self) -> Device:
        """Connect to the Nitrokey Storage through the configured backend."""
        if self._device_factory is None:
            self._device_factory = load_device_factory(self.config.backend)
        logger.debug('connecting_device', backend=self.config.backend)
        return self._device_factory()

    def query_status(self) -> None:
        """Print the status of the connected Nitrokey Storage."""
        status = self.connect().status()
        logger.debug('status_received', _verbose_status=status.model_dump())
        sys.stdout.write(format_status(status))

    def open_volume(self) -> None:
        """Open the encrypted volume, asking gpg-agent for the user PIN."""
        device = self.connect()
        retries = self.config.open_retries
        while True:
            passphrase = self.agent.inquire_passphrase()
            try:
                device.enable_encrypted_volume(passphrase)
            except WrongPassphraseError:
                # Do not keep a rejected passphrase around.
                self.agent.clear_passphrase()
                retries -= 1
                if retries <= 0:
                    raise
                logger.warning('wrong_passphrase', retries_left=retries)
                continue
            logger.info('volume_opened')
            return

    def close_volume(self) -> None:
        """Close the encrypted volume after flushing pending writes."""
        os.sync()
        self.connect().disable_encrypted_volume()
        logger.info('volume_closed')

    def clear_cached_passphrase(self) -> None:
        """Clear the user PIN cached by gpg-agent."""
        self.agent.clear_passphrase()
