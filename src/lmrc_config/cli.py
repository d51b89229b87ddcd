"""
Command line interface for the club configuration tool.
"""

import argparse
import json
from collections.abc import Sequence

from tabulate import tabulate

from lmrc_config.config.env import (
    ChainedSource,
    ConfigSource,
    DotenvFileSource,
    EnvConfig,
    EnvironmentSource,
    YamlFileSource,
)
from lmrc_config.config.logging import setup_logging
from lmrc_config.config.settings import ConfigurationManager
from lmrc_config.defaults import complete_profile, create_default_profile
from lmrc_config.exceptions import ConfigError, LmrcConfigError, ValidationError
from lmrc_config.models.club_profile import profile_violations
from lmrc_config.models.session import format_days, format_session
from lmrc_config.session_slots import check_consistency
from lmrc_config.store.profile_store import ProfileStore
from lmrc_config.store.session_database import SessionDatabase
from lmrc_config.utils.cli_utils import (
    CLIBuilder,
    CLIContext,
    CLIOptionFactory,
    CommandCategory,
    CommandRegistry,
)
from lmrc_config.utils.logging_utils import get_logger


class ProfileCommands:
    """Club profile command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='init',
        help_text='Write a default club profile',
        category=CommandCategory.PROFILE,
        options=[
            {'name': '--club-id', 'required': True, 'help': 'Club identifier, e.g. "lmrc"'},
            {'name': '--name', 'required': True, 'help': 'Club display name'},
            {'name': '--base-url', 'help': 'RevSport base URL; without it a draft profile is written'},
            {'name': '--logo-url', 'help': 'Logo URL replacing the placeholder'},
            {'name': '--output', 'default': 'club-profile.json', 'help': 'Output file (default: club-profile.json)'},
            {'name': '--force', 'action': 'store_true', 'help': 'Overwrite an existing file'},
        ]
    )
    def init_profile(ctx: CLIContext) -> int:
        """Create a profile from the default template."""
        store = ProfileStore(ctx.args.output)
        if store.exists() and not ctx.args.force:
            ctx.logger.error(f"{store.path} already exists (use --force to overwrite)")
            return 1

        draft = create_default_profile(ctx.args.club_id, ctx.args.name)
        if ctx.args.base_url:
            try:
                store.save(complete_profile(draft, ctx.args.base_url, ctx.args.logo_url))
            except ValidationError as e:
                ctx.logger.error(str(e))
                return 1
            print(f"Wrote club profile to {store.path}")
        else:
            store.write_draft(draft)
            print(f"Wrote draft club profile to {store.path}; set revSport.baseUrl before use")
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='validate',
        help_text='Validate a club profile file',
        category=CommandCategory.PROFILE,
        options=[
            CLIOptionFactory.create_profile_option(),
            CLIOptionFactory.create_format_option(),
        ]
    )
    def validate_profile(ctx: CLIContext) -> int:
        """Report every violation in a profile file."""
        try:
            raw = ProfileStore(ctx.args.profile).read_raw()
        except ConfigError as e:
            ctx.logger.error(e.message)
            return 1

        violations = profile_violations(raw)
        if ctx.args.format == 'json':
            print(json.dumps({
                'valid': not violations,
                'violations': [violation.to_dict() for violation in violations]
            }, indent=2))
        elif violations:
            print(f"{ctx.args.profile}: {len(violations)} problem(s)")
            print(tabulate(
                [(v.path, type(v).__name__, v.message) for v in violations],
                headers=['Field', 'Error', 'Message']
            ))
        else:
            print(f"{ctx.args.profile}: valid")
        return 1 if violations else 0

    @staticmethod
    @CommandRegistry.register(
        name='sessions',
        help_text='List the sessions of a club profile',
        category=CommandCategory.PROFILE,
        options=[
            CLIOptionFactory.create_profile_option(),
            {
                'name': '--day',
                'type': int,
                'choices': range(7),
                'help': 'Only sessions running on this weekday (0=Sunday .. 6=Saturday)'
            },
        ]
    )
    def list_sessions(ctx: CLIContext) -> int:
        """Print the profile's sessions as a table."""
        try:
            profile = ProfileStore(ctx.args.profile).load()
        except LmrcConfigError as e:
            ctx.logger.error(str(e))
            return 1

        sessions = profile.sessions if ctx.args.day is None else profile.sessions_for_day(ctx.args.day)
        print(tabulate(
            [(s.id, format_session(s), format_days(s.days_of_week), s.priority) for s in sessions],
            headers=['ID', 'Session', 'Days', 'Priority']
        ))
        return 0

class RuntimeCommands:
    """Runtime configuration command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='check-config',
        help_text='Load and validate the runtime configuration from the environment',
        category=CommandCategory.RUNTIME,
        options=[
            {'name': '--env-file', 'help': '.env file (KEY=value lines) used where the environment has no value'},
            {'name': '--yaml-file', 'help': 'YAML mapping of the same variables, consulted after --env-file'},
            {'name': '--profile', 'help': 'Club profile to check the session slots against'},
            {'name': '--club', 'action': 'store_true', 'help': 'Also load the CLUB_* branding settings'},
        ]
    )
    def check_config(ctx: CLIContext) -> int:
        """Validate the environment-driven configuration, exit 1 if invalid."""
        try:
            sources: list[ConfigSource] = [EnvironmentSource()]
            if ctx.args.env_file:
                sources.append(DotenvFileSource(ctx.args.env_file))
            if ctx.args.yaml_file:
                sources.append(YamlFileSource(ctx.args.yaml_file))
            manager = ConfigurationManager(ChainedSource(*sources))
            config = manager.load()
            output = {'config': config.to_dict()}
            if ctx.args.club:
                settings = manager.club_settings
                output['club'] = {
                    'name': settings.name,
                    'shortName': settings.short_name,
                    'timezone': settings.timezone,
                    'primaryColor': settings.primary_color,
                    'secondaryColor': settings.secondary_color,
                    'logoUrl': settings.logo_url,
                }
            if ctx.args.profile:
                mismatches = check_consistency(ProfileStore(ctx.args.profile).load(), config)
                for mismatch in mismatches:
                    ctx.logger.warning(str(mismatch))
                output['profileConsistent'] = not mismatches
        except LmrcConfigError as e:
            ctx.logger.error(e.message)
            return 1

        print(json.dumps(output, indent=2))
        return 0

class DatabaseCommands:
    """Session database command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='init',
        help_text='Create the session database with the default sessions',
        category=CommandCategory.DATABASE,
        options=[CLIOptionFactory.create_database_option()],
        parent_command='db'
    )
    def init_database(ctx: CLIContext) -> int:
        database = SessionDatabase(ctx.args.db)
        metadata = database.get_metadata()
        print(f"Session database ready at {database.db_file} (version {metadata.version})")
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='list',
        help_text='List sessions stored in the database',
        category=CommandCategory.DATABASE,
        options=[
            CLIOptionFactory.create_database_option(),
            {'name': '--enabled-only', 'action': 'store_true', 'help': 'Hide disabled sessions'},
        ],
        parent_command='db'
    )
    def list_database(ctx: CLIContext) -> int:
        database = SessionDatabase(ctx.args.db, seed_defaults=False)
        rows = database.list_sessions(enabled_only=ctx.args.enabled_only)
        metadata = database.get_metadata()
        print(tabulate(
            [(r.id, r.label, r.display, 'yes' if r.enabled else 'no', r.sort_order) for r in rows],
            headers=['ID', 'Label', 'Window', 'Enabled', 'Order']
        ))
        print(f"\nversion {metadata.version}, last modified {metadata.last_modified} by {metadata.modified_by}")
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='import',
        help_text="Replace the database sessions with a profile's sessions",
        category=CommandCategory.DATABASE,
        options=[
            CLIOptionFactory.create_profile_option(),
            CLIOptionFactory.create_database_option(),
            {'name': '--modified-by', 'default': 'admin', 'help': 'Name recorded in the metadata'},
        ],
        parent_command='db'
    )
    def import_profile(ctx: CLIContext) -> int:
        try:
            profile = ProfileStore(ctx.args.profile).load()
            database = SessionDatabase(ctx.args.db, seed_defaults=False)
            metadata = database.import_profile_sessions(profile.sessions, ctx.args.modified_by)
        except LmrcConfigError as e:
            ctx.logger.error(str(e))
            return 1
        print(f"Imported {len(profile.sessions)} session(s); database version {metadata.version}")
        return 0

def create_parser() -> argparse.ArgumentParser:
    """Create argument parser from the registered commands."""
    builder = CLIBuilder(
        description='Rowing club configuration: profiles, booking sessions and runtime settings'
    )
    for command in CommandRegistry.commands():
        builder.add_command(command)
    return builder.build()

def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help()
        return 1

    logging_config = EnvConfig.get_logging_config(EnvironmentSource())
    setup_logging(
        verbose=args.verbose,
        log_file=args.log_file or logging_config['file'],
        level=logging_config['level']
    )
    logger = get_logger(__name__)
    ctx = CLIContext(args=args, logger=logger, parser=parser)

    try:
        return args.func(ctx)
    except Exception:
        logger.exception("Unhandled exception")
        return 1

if __name__ == '__main__':
    raise SystemExit(main())
