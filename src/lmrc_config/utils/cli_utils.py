"""
Command registration and parser building for the ``lmrc-config`` tool.

Commands are plain functions taking a ``CLIContext`` and returning an exit
status. They register themselves with ``CommandRegistry.register`` together
with their argparse options, written as dicts whose ``name`` key is the flag
or positional name and whose remaining keys go to ``add_argument``.
"""

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


Handler = Callable[['CLIContext'], int]


@dataclass
class CLIContext:
    """Everything a command handler gets."""
    args: argparse.Namespace
    logger: logging.Logger
    parser: argparse.ArgumentParser

class CommandCategory(Enum):
    """Command groups, shown as sections in the help epilog."""
    PROFILE = 'Club profile'
    RUNTIME = 'Runtime configuration'
    DATABASE = 'Session database'

@dataclass
class CommandMetadata:
    name: str
    help_text: str
    category: CommandCategory
    handler: Handler
    options: list[dict[str, Any]] = field(default_factory=list)
    parent_command: str | None = None

    @property
    def key(self) -> str:
        """``db list`` for subcommands, ``validate`` otherwise."""
        return f"{self.parent_command} {self.name}" if self.parent_command else self.name

class CLIOptionFactory:
    """Options shared by several commands."""

    @staticmethod
    def create_format_option() -> dict[str, Any]:
        return {
            'name': '--format',
            'choices': ['text', 'json'],
            'default': 'text',
            'help': 'Report as a text table or as JSON (default: text)'
        }

    @staticmethod
    def create_profile_option() -> dict[str, Any]:
        return {
            'name': 'profile',
            'help': 'Club profile file (.json, .yaml or .yml)'
        }

    @staticmethod
    def create_database_option() -> dict[str, Any]:
        return {
            'name': '--db',
            'default': 'data/sessions.db',
            'help': 'SQLite session database (default: data/sessions.db)'
        }

class CommandRegistry:
    """Class-level registry filled by the command decorators at import time."""

    _commands: dict[str, CommandMetadata] = {}

    @classmethod
    def register(
        cls,
        name: str,
        help_text: str,
        category: CommandCategory,
        options: list[dict[str, Any]] | None = None,
        parent_command: str | None = None
    ) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            metadata = CommandMetadata(name, help_text, category, handler, list(options or []), parent_command)
            cls._commands[metadata.key] = metadata
            return handler
        return decorator

    @classmethod
    def commands(cls) -> list[CommandMetadata]:
        return list(cls._commands.values())

    @classmethod
    def get_command(cls, name: str, parent_command: str | None = None) -> CommandMetadata | None:
        return cls._commands.get(f"{parent_command} {name}" if parent_command else name)

def add_common_options(parser: argparse.ArgumentParser) -> None:
    """Global flags accepted before the command name."""
    parser.add_argument('-v', '--verbose', action='store_true', help='Log at DEBUG level')
    parser.add_argument('--log-file', help='Also write JSON log lines to this file (default: LMRC_LOG_FILE)')

class CLIBuilder:
    """Builds the argparse tree from registered commands.

    Commands with a ``parent_command`` are nested one level, e.g.
    ``db init``; the parent's own subcommand is required.
    """

    def __init__(self, description: str):
        self.parser = argparse.ArgumentParser(
            description=description,
            formatter_class=argparse.RawDescriptionHelpFormatter
        )
        add_common_options(self.parser)
        self.subparsers = self.parser.add_subparsers(dest='command', metavar='COMMAND')
        self._groups: dict[str, Any] = {}
        self._added: list[CommandMetadata] = []

    def _group(self, parent: str) -> Any:
        if parent not in self._groups:
            group_parser = self.subparsers.add_parser(parent, help=f"{parent} subcommands")
            self._groups[parent] = group_parser.add_subparsers(
                dest=f"{parent}_subcommand",
                metavar='SUBCOMMAND',
                required=True
            )
        return self._groups[parent]

    def add_command(self, command: CommandMetadata) -> None:
        target = self._group(command.parent_command) if command.parent_command else self.subparsers
        parser = target.add_parser(command.name, help=command.help_text, description=command.help_text)
        for option in command.options:
            kwargs = dict(option)
            parser.add_argument(kwargs.pop('name'), **kwargs)
        parser.set_defaults(func=command.handler)
        self._added.append(command)

    def build(self) -> argparse.ArgumentParser:
        """Finish the parser, listing the commands by category in the epilog."""
        sections = []
        for category in CommandCategory:
            names = [c.key for c in self._added if c.category is category]
            if names:
                sections.append(f"{category.value}: {', '.join(names)}")
        self.parser.epilog = "\n".join(sections)
        return self.parser
