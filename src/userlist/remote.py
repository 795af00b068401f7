"""SSH command execution against fleet hosts."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import paramiko

from .errors import ConfigError, RemoteError

logger = logging.getLogger(__name__)


def parse_timeout(value: str) -> float:
    """Turn ``"10"``, ``"10s"`` or ``"2m"`` into seconds."""
    text = str(value).strip().lower()
    scale = 1.0
    if text.endswith("ms"):
        text, scale = text[:-2], 0.001
    elif text.endswith("s"):
        text = text[:-1]
    elif text.endswith("m"):
        text, scale = text[:-1], 60.0
    try:
        seconds = float(text) * scale
    except ValueError as exc:
        raise ConfigError(f"Invalid ssh_timeout: {value!r}") from exc
    if seconds <= 0:
        raise ConfigError(f"ssh_timeout must be positive: {value!r}")
    return seconds


class HostSession:
    """An authenticated connection to one host."""

    def __init__(self, hostname: str, client: paramiko.SSHClient, timeout: float):
        self.hostname = hostname
        self.client = client
        self.timeout = timeout

    def run(self, command: str) -> str:
        try:
            _stdin, stdout, stderr = self.client.exec_command(command, timeout=self.timeout)
            out = stdout.read().decode("utf-8", errors="replace")
            status = stdout.channel.recv_exit_status()
            err = stderr.read().decode("utf-8", errors="replace").strip()
        except (paramiko.SSHException, OSError) as exc:
            raise RemoteError(self.hostname, str(exc) or type(exc).__name__, command) from exc
        if status != 0:
            raise RemoteError(self.hostname, f"exit status {status}: {err}", command)
        return out


class SSHRunner:
    """Opens key-authenticated sessions as a single remote user."""

    def __init__(self, user: str, timeout: float = 10.0, port: int = 22):
        self.user = user
        self.timeout = timeout
        self.port = port
        self.keys: list[paramiko.PKey] = []

    def add_key(self, path: str | Path) -> None:
        """Load a private key. Raises ConfigError if it can't be read or parsed."""
        try:
            self.keys.append(paramiko.PKey.from_path(Path(path).expanduser()))
        except (OSError, paramiko.SSHException, ValueError) as exc:
            raise ConfigError(f"{path}: {exc}") from exc

    def _connect(self, hostname: str) -> paramiko.SSHClient:
        if not self.keys:
            raise RemoteError(hostname, "no private keys loaded")
        last_exc: Exception | None = None
        for key in self.keys:
            client = paramiko.SSHClient()
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
            try:
                client.connect(
                    hostname,
                    port=self.port,
                    username=self.user,
                    pkey=key,
                    timeout=self.timeout,
                    banner_timeout=self.timeout,
                    auth_timeout=self.timeout,
                    look_for_keys=False,
                    allow_agent=False,
                )
                return client
            except paramiko.AuthenticationException as exc:
                client.close()
                last_exc = exc
            except (paramiko.SSHException, OSError) as exc:
                client.close()
                raise RemoteError(hostname, f"Failed to connect: {exc}") from exc
        raise RemoteError(hostname, f"Authentication failed: {last_exc}")

    @contextmanager
    def session(self, hostname: str) -> Iterator[HostSession]:
        client = self._connect(hostname)
        logger.debug("Connected to %s as %s", hostname, self.user)
        try:
            yield HostSession(hostname, client, self.timeout)
        finally:
            client.close()
