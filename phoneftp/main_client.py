#!/usr/bin/env python3
"""
Phone FTP Client - Command Dispatcher

Parses the command line, opens the FTP session, runs one command and
turns its outcome into the process exit status.

Usage:
    phoneftp list
    phoneftp download <remote> [local]
    phoneftp downloadDir <remote> [local]
    phoneftp upload <local> [remote]
    phoneftp help
"""

import argparse
import asyncio
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from phoneftp.common.constants import EXIT_FAILURE, EXIT_OK, HELP_TEXT
from phoneftp.common.exceptions import ConnectionFailedError, UsageError, ValidationError
from phoneftp.files.file_client import FileClient
from phoneftp.files.ftp_session import FtpSession
from phoneftp.utils.config import ClientConfig
from phoneftp.utils.logger import logger


class Command(Enum):
    LIST = 'list'
    DOWNLOAD = 'download'
    DOWNLOAD_DIR = 'downloadDir'
    UPLOAD = 'upload'
    HELP = 'help'


@dataclass(frozen=True)
class ArgumentSchema:
    """Positional arguments a command accepts; the first ``required`` are mandatory."""
    params: Tuple[str, ...] = ()
    required: int = 0
    missing_message: str = ''


COMMAND_SCHEMAS: Dict[Command, ArgumentSchema] = {
    Command.LIST: ArgumentSchema(),
    Command.DOWNLOAD: ArgumentSchema(('remote', 'local'), 1, 'missing path to a file'),
    Command.UPLOAD: ArgumentSchema(('local', 'remote'), 1, 'missing path to a file'),
    Command.DOWNLOAD_DIR: ArgumentSchema(('remote', 'local'), 1, 'missing path to a directory'),
    Command.HELP: ArgumentSchema(),
}


class Outcome(Enum):
    OK = 'ok'
    TRANSFER_FAILED = 'transfer_failed'
    HELP = 'help'
    USAGE_ERROR = 'usage_error'
    VALIDATION_ERROR = 'validation_error'
    CONNECTION_ERROR = 'connection_error'
    COMMAND_ERROR = 'command_error'


# A transfer that fails after validation passed is only logged; the command
# still completes with status 0.
EXIT_POLICY: Dict[Outcome, int] = {
    Outcome.OK: EXIT_OK,
    Outcome.TRANSFER_FAILED: EXIT_OK,
    Outcome.HELP: EXIT_FAILURE,
    Outcome.USAGE_ERROR: EXIT_FAILURE,
    Outcome.VALIDATION_ERROR: EXIT_FAILURE,
    Outcome.CONNECTION_ERROR: EXIT_FAILURE,
    Outcome.COMMAND_ERROR: EXIT_FAILURE,
}


@dataclass
class Invocation:
    """A parsed and validated command line."""
    command: Command
    arguments: Dict[str, str] = field(default_factory=dict)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog='phoneftp', add_help=False)
    parser.add_argument('-h', '--help', action='store_true', dest='help')
    parser.add_argument('command', nargs='?')
    parser.add_argument('args', nargs='*')
    return parser


def parse_invocation(argv: Sequence[str]) -> Invocation:
    """Turn raw arguments into an Invocation, raising UsageError on bad input."""
    namespace = build_parser().parse_args(list(argv))

    if namespace.help or namespace.command == Command.HELP.value:
        return Invocation(Command.HELP)

    if not namespace.command:
        raise UsageError("missing command")

    try:
        command = Command(namespace.command)
    except ValueError:
        raise UsageError("unknown command") from None

    schema = COMMAND_SCHEMAS[command]
    args = namespace.args
    if len(args) < schema.required:
        raise UsageError(schema.missing_message)

    # Arguments beyond the schema are ignored
    return Invocation(command, dict(zip(schema.params, args)))


class CommandDispatcher:
    """Runs one command against a freshly opened FTP session."""

    def __init__(self, config: ClientConfig,
                 session_factory: Callable[[ClientConfig], FtpSession] = FtpSession,
                 output=None, errors=None):
        self.config = config
        self.session_factory = session_factory
        self.output = output if output is not None else sys.stdout
        self.errors = errors if errors is not None else sys.stderr

    def print_help(self):
        self.output.write(HELP_TEXT + '\n')

    def _report_error(self, error: BaseException):
        self.errors.write(f"{error}\n")
        self.output.write('\n')
        self.print_help()

    async def run(self, argv: Sequence[str]) -> int:
        """Run the command line and return the process exit status."""
        try:
            invocation = parse_invocation(argv)
        except UsageError as e:
            self._report_error(e)
            return EXIT_POLICY[Outcome.USAGE_ERROR]

        if invocation.command is Command.HELP:
            self.print_help()
            return EXIT_POLICY[Outcome.HELP]

        session = self.session_factory(self.config)
        try:
            await session.connect()
        except ConnectionFailedError as e:
            self.errors.write(f"{e}\n")
            return EXIT_POLICY[Outcome.CONNECTION_ERROR]

        error: Optional[BaseException] = None
        try:
            outcome = await self.dispatch(session, invocation)
        except ValidationError as e:
            error, outcome = e, Outcome.VALIDATION_ERROR
        except Exception as e:
            logger.debug(f"{invocation.command.value} failed: {e!r}")
            error, outcome = e, Outcome.COMMAND_ERROR
        finally:
            await session.close()

        if error is not None:
            self._report_error(error)
        elif outcome is Outcome.TRANSFER_FAILED:
            logger.warning(f"{invocation.command.value} did not complete")
        return EXIT_POLICY[outcome]

    async def dispatch(self, session: FtpSession, invocation: Invocation) -> Outcome:
        """Route an invocation to its file operation."""
        files = FileClient(session, self.config.downloads_dir, self.output)

        if invocation.command is Command.LIST:
            await files.list_remote()
            return Outcome.OK

        handlers = {
            Command.DOWNLOAD: files.download,
            Command.DOWNLOAD_DIR: files.download_dir,
            Command.UPLOAD: files.upload,
        }
        result = await handlers[invocation.command](**invocation.arguments)
        return Outcome.OK if result.ok else Outcome.TRANSFER_FAILED


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    config = ClientConfig.from_env()
    logger.set_level(config.log_level)

    dispatcher = CommandDispatcher(config)
    try:
        status = asyncio.run(dispatcher.run(sys.argv[1:] if argv is None else argv))
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
        status = EXIT_FAILURE
    sys.exit(status)


if __name__ == "__main__":
    main()
