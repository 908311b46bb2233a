import os
import stat
import sys
from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import BaseModel

from nitrocli.cli.main import main as nitrocli_main
from nitrocli.config import CONFIG_ENV_VAR

BACKEND_MODULE = 'nitrocli_integration_backend'

BACKEND_SOURCE = '''
from nitrocli.errors import DeviceError, WrongPassphraseError
from nitrocli.models import StorageStatus

STATE = {'connected': True, 'encrypted': 'inactive', 'attempts': []}


class Storage:
    def status(self):
        return StorageStatus(
            sd_card_id=0x1234,
            firmware_version_major=0,
            firmware_version_minor=49,
            firmware_locked=False,
            stored_keys=True,
            user_retry_count=3,
            admin_retry_count=3,
            unencrypted_volume='active',
            encrypted_volume=STATE['encrypted'],
        )

    def enable_encrypted_volume(self, passphrase):
        STATE['attempts'].append(passphrase)
        if passphrase != '123456':
            raise WrongPassphraseError('Wrong password')
        STATE['encrypted'] = 'active'

    def disable_encrypted_volume(self):
        STATE['encrypted'] = 'inactive'


def open_device():
    if not STATE['connected']:
        raise DeviceError('Nitrokey device not connected')
    return Storage()
'''

AGENT_SCRIPT = '''\
#!/bin/sh
echo "$1" >> "{log}"
case "$1" in
  GET_PASSPHRASE*) printf 'D %s\\nOK\\n' "$(cat "{pin}")" ;;
  CLEAR_PASSPHRASE*) printf 'OK\\n' ;;
  *) printf 'ERR 1 unknown command\\n' ;;
esac
'''


class Result(BaseModel):
    returncode: int
    stdout: str
    stderr: str


class Environment(BaseModel):
    root: Path
    agent_log: Path
    pin_file: Path

    @property
    def agent_requests(self) -> list[str]:
        if not self.agent_log.exists():
            return []
        return self.agent_log.read_text().splitlines()


CliCommand = Callable[[list[str]], Result]


@pytest.fixture
def environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Environment:
    """Set up a device backend, a fake gpg-connect-agent and a config file."""
    (tmp_path / f'{BACKEND_MODULE}.py').write_text(BACKEND_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, BACKEND_MODULE, raising=False)

    env = Environment(
        root=tmp_path,
        agent_log=tmp_path / 'agent.log',
        pin_file=tmp_path / 'pin',
    )
    env.pin_file.write_text('123456')

    agent = tmp_path / 'gpg-connect-agent'
    agent.write_text(AGENT_SCRIPT.format(log=env.agent_log, pin=env.pin_file))
    agent.chmod(agent.stat().st_mode | stat.S_IXUSR)

    config = tmp_path / 'config.yaml'
    config.write_text(
        dedent(
            f"""
            backend: {BACKEND_MODULE}:open_device
            gpg_connect_agent: {agent}
            open_retries: 2
            """,
        ),
    )
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
    return env


@pytest.fixture
def backend_state(environment: Environment) -> dict:
    __import__(BACKEND_MODULE)
    return sys.modules[BACKEND_MODULE].STATE


@pytest.fixture
def run_nitrocli(capsys: pytest.CaptureFixture, environment: Environment) -> CliCommand:
    def _run(args: list[str]) -> Result:
        try:
            exit_code = nitrocli_main(args)
        except SystemExit as e:
            exit_code = e.code if isinstance(e.code, int) else 1
        captured = capsys.readouterr()
        return Result(returncode=exit_code, stdout=captured.out, stderr=captured.err)

    return _run


def assert_contains_all(output: str, snippets: list[str], context: str = '') -> None:
    missing = [s for s in snippets if s not in output]
    if missing:
        pytest.fail(
            f'Missing expected snippet(s) in {context}: {missing}\nActual output:\n{output}',
        )


@pytest.fixture(autouse=True)
def _require_posix_shell() -> None:
    if os.name != 'posix':
        pytest.skip('fake gpg-connect-agent needs a POSIX shell')
