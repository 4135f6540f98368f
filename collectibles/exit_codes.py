"""
exit_codes.py - process exit codes
Single responsibility: map failures to stable exit codes with user hints.
"""
from enum import IntEnum

TOR_HINT = """\
Unable to connect to the Tor control port.

Please check that you have the Tor proxy running and
that access to the Tor control port is turned on.

If you are unsure of what to do, use the following command to start the Tor proxy:
tor --allow-missing-torrc --ignore-missing-torrc --clientonly 1 --socksport 9050 \\
  --controlport 127.0.0.1:9051 --log "notice stdout" --clientuseipv6 1
"""


class ExitCode(IntEnum):
    CONFIG_ERROR = 101
    UNKNOWN_ERROR = 102
    INTERFACE_ERROR = 103
    WALLET_ERROR = 104
    GRPC_ERROR = 105
    INPUT_ERROR = 106
    COMMAND_ERROR = 107
    IO_ERROR = 108
    RECOVERY_ERROR = 109
    NETWORK_ERROR = 110
    CONVERSION_ERROR = 111
    INCORRECT_OR_EMPTY_PASSWORD = 112
    TOR_OFFLINE = 113
    DB_INCONSISTENT_STATE = 115

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def hint(self) -> str:
        return TOR_HINT if self is ExitCode.TOR_OFFLINE else ""


_DESCRIPTIONS = {
    ExitCode.CONFIG_ERROR: "There is an error in the configuration.",
    ExitCode.UNKNOWN_ERROR: "The application exited because an unknown error occurred. Check the logs for more details.",
    ExitCode.INTERFACE_ERROR: "The application exited because an interface error occurred. Check the logs for details.",
    ExitCode.WALLET_ERROR: "The application exited.",
    ExitCode.GRPC_ERROR: "The wallet was not able to start the GRPC server.",
    ExitCode.INPUT_ERROR: "The application did not accept the command input.",
    ExitCode.COMMAND_ERROR: "Invalid command.",
    ExitCode.IO_ERROR: "IO error.",
    ExitCode.RECOVERY_ERROR: "Recovery failed.",
    ExitCode.NETWORK_ERROR: "The wallet exited because of an internal network error.",
    ExitCode.CONVERSION_ERROR: "The wallet exited because it received a message it could not interpret.",
    ExitCode.INCORRECT_OR_EMPTY_PASSWORD: "Your password was incorrect or empty.",
    ExitCode.TOR_OFFLINE: "Tor connection is offline.",
    ExitCode.DB_INCONSISTENT_STATE: "Database is in inconsistent state.",
}


class ExitError(Exception):
    def __init__(self, exit_code: ExitCode, details: str | None = None):
        super().__init__(exit_code, details)
        self.exit_code = exit_code
        self.details = details

    @classmethod
    def config(cls, err) -> "ExitError":
        return cls(ExitCode.CONFIG_ERROR, str(err))

    def __str__(self) -> str:
        return f"{int(self.exit_code)} {self.details or ''}"
