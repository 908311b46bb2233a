"""Passphrase handling through gpg-agent's pinentry.

nitrocli never reads a passphrase from the terminal itself. It asks
gpg-agent (via ``gpg-connect-agent``) which shows a pinentry dialog and
caches the result under ``CACHE_ID``.
"""

import subprocess

from nitrocli.errors import PinentryError
from nitrocli.logging import get_logger

logger = get_logger(__name__)

CACHE_ID = 'nitrocli:user'
PINENTRY_DESCR = '+'
PINENTRY_TITLE = 'Please+enter+user+PIN'
PINENTRY_PASSWD = 'PIN'


class PassphraseCache:
    """Client for the passphrase cache of a running gpg-agent."""

    def __init__(self, gpg_connect_agent: str = 'gpg-connect-agent') -> None:
        self.gpg_connect_agent = gpg_connect_agent

    def _run(self, command: str) -> str:
        cmd = [self.gpg_connect_agent, command, '/bye']
        logger.debug('running_gpg_connect_agent', request=command.split(' ', 1)[0])
        try:
            result = subprocess.run(  # noqa: S603 - binary comes from configuration
                cmd,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as exc:
            msg = f'{self.gpg_connect_agent} not found'
            raise PinentryError(msg) from exc
        except subprocess.CalledProcessError as exc:
            msg = f'{self.gpg_connect_agent} failed: {exc.stderr.strip()}'
            raise PinentryError(msg) from exc
        return result.stdout

    def inquire_passphrase(self) -> str:
        """Ask gpg-agent for the user PIN, prompting if it is not cached."""
        args = ' '.join([CACHE_ID, PINENTRY_DESCR, PINENTRY_PASSWD, PINENTRY_TITLE])
        # gpg-connect-agent exits successfully even if GET_PASSPHRASE
        # failed, only the response tells.
        return parse_passphrase_response(self._run(f'GET_PASSPHRASE --data {args}'))

    def clear_passphrase(self) -> None:
        """Remove the cached user PIN from gpg-agent."""
        parse_ok_response(self._run(f'CLEAR_PASSPHRASE {CACHE_ID}'))
        logger.info('passphrase_cleared', cache_id=CACHE_ID)


def parse_passphrase_response(response: str) -> str:
    """Extract the passphrase from a GET_PASSPHRASE response.

    The only accepted answer is a ``D <passphrase>`` line followed by ``OK``.
    """
    lines = response.splitlines()
    if len(lines) == 2 and lines[1] == 'OK' and lines[0].startswith('D '):
        return lines[0][2:]
    if lines and lines[0].startswith('ERR '):
        raise PinentryError(lines[0][4:])
    msg = f'Unexpected response: {response!r}'
    raise PinentryError(msg)


def parse_ok_response(response: str) -> None:
    """Check that gpg-agent answered with a plain ``OK``."""
    lines = response.splitlines()
    if lines == ['OK']:
        return
    if lines and lines[0].startswith('ERR '):
        raise PinentryError(lines[0][4:])
    msg = f'Unexpected response: {response!r}'
    raise PinentryError(msg)
