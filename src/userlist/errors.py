"""Exception types raised by userlist."""


class UserlistError(Exception):
    """Base class for errors the CLI reports without a traceback."""


class ConfigError(UserlistError):
    pass


class HostListError(UserlistError):
    pass


class RemoteError(UserlistError):
    """A connection, authentication or command failure on one host."""

    def __init__(self, hostname: str, message: str, command: str | None = None):
        self.hostname = hostname
        self.command = command
        where = f"{hostname}: {command}" if command else hostname
        super().__init__(f"{where}: {message}")
