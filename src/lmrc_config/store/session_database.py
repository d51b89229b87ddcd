"""SQLite-backed session store.

An alternate persistence backend for booking sessions. The session
invariants (unique id, HH:MM times, start before end) are declared as table
constraints so they hold even for rows written by other tools; the
application-level validation in ``session_row_violations`` runs first to
give a complete, readable report.
"""

import sqlite3
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from lmrc_config.exceptions import (
    DuplicateSessionId,
    FieldViolation,
    FormatError,
    InvalidTimeWindow,
    RequiredFieldError,
    StorageError,
    raise_if_violations,
)
from lmrc_config.models.fields import check_string, field_path, require_mapping
from lmrc_config.models.session import Session
from lmrc_config.utils.logging_utils import LoggerMixin, log_execution
from lmrc_config.validators import format_time_12h, is_integer, is_non_empty, is_valid_time_string


TIME_CHECK = "{column} GLOB '[0-2][0-9]:[0-5][0-9]' AND {column} < '24:00'"

SCHEMA = {
    'sessions': [
        "id TEXT PRIMARY KEY CHECK (length(trim(id)) > 0)",
        "label TEXT NOT NULL CHECK (length(trim(label)) > 0)",
        f"start_time TEXT NOT NULL CHECK ({TIME_CHECK.format(column='start_time')})",
        f"end_time TEXT NOT NULL CHECK ({TIME_CHECK.format(column='end_time')})",
        "display TEXT NOT NULL CHECK (length(trim(display)) > 0)",
        "enabled INTEGER NOT NULL DEFAULT 1 CHECK (enabled IN (0, 1))",
        "sort_order INTEGER NOT NULL DEFAULT 0",
        "created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "CHECK (start_time < end_time)",
    ],
    'metadata': [
        "key TEXT PRIMARY KEY",
        "value TEXT NOT NULL",
        "updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP",
    ],
}

TRIGGERS = [
    """
    CREATE TRIGGER IF NOT EXISTS update_sessions_updated_at
    AFTER UPDATE ON sessions FOR EACH ROW
    WHEN NEW.updated_at = OLD.updated_at
    BEGIN
        UPDATE sessions SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS update_metadata_updated_at
    AFTER UPDATE ON metadata FOR EACH ROW
    WHEN NEW.updated_at = OLD.updated_at
    BEGIN
        UPDATE metadata SET updated_at = CURRENT_TIMESTAMP WHERE key = NEW.key;
    END
    """,
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_sessions_enabled ON sessions(enabled)",
    "CREATE INDEX IF NOT EXISTS idx_sessions_sort ON sessions(sort_order)",
]


@dataclass(frozen=True)
class StoredSession:
    """One row of the sessions table."""
    id: str
    label: str
    start_time: str
    end_time: str
    display: str
    enabled: bool = True
    sort_order: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'StoredSession':
        return cls(
            id=data['id'],
            label=data['label'],
            start_time=data['startTime'],
            end_time=data['endTime'],
            display=data['display'],
            enabled=data['enabled'],
            sort_order=data.get('sortOrder') or 0
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'label': self.label,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'display': self.display,
            'enabled': self.enabled,
            'sortOrder': self.sort_order,
        }

@dataclass(frozen=True)
class SessionMetadata:
    """Change tracking for the sessions table."""
    last_modified: str
    modified_by: str
    version: int


DEFAULT_ROWS = (
    StoredSession('session-1', 'Morning Session 1', '06:30', '07:30', '6:30 AM - 7:30 AM', True, 1),
    StoredSession('session-2', 'Morning Session 2', '07:30', '08:30', '7:30 AM - 8:30 AM', True, 2),
)


def display_window(start_time: str, end_time: str) -> str:
    """Display text stored with a row, e.g. ``6:30 AM - 7:30 AM``."""
    return f"{format_time_12h(start_time)} - {format_time_12h(end_time)}"

def from_session(session: Session, enabled: bool = True, sort_order: int | None = None) -> StoredSession:
    """Map a profile session onto a table row (sort order defaults to priority, or 0)."""
    return StoredSession(
        id=session.id,
        label=session.name,
        start_time=session.start_time,
        end_time=session.end_time,
        display=display_window(session.start_time, session.end_time),
        enabled=enabled,
        sort_order=(session.priority or 0) if sort_order is None else sort_order
    )

def to_session(
    row: StoredSession,
    days_of_week: tuple[int, ...] = (1, 2, 3, 4, 5),
    color: str = '#3b82f6'
) -> Session:
    """Map a table row onto a profile session.

    The table has no weekday or colour columns, so those come from the
    caller.
    """
    return Session(
        id=row.id,
        name=row.label,
        start_time=row.start_time,
        end_time=row.end_time,
        days_of_week=days_of_week,
        color=color,
        priority=row.sort_order
    )

def session_row_violations(sessions: Any) -> list[FieldViolation]:
    """Validate a full replacement set of session rows (serialized form).

    The set must be non-empty, have at least one enabled session, unique ids
    and a valid time window on every row.
    """
    if sessions is None:
        return [RequiredFieldError('sessions')]
    if not isinstance(sessions, (list, tuple)):
        return [FormatError('sessions', "must be a list of sessions")]
    if not sessions:
        return [RequiredFieldError('sessions', "must contain at least one session")]

    violations: list[FieldViolation] = []
    if not any(isinstance(s, Mapping) and s.get('enabled') is True for s in sessions):
        violations.append(RequiredFieldError('sessions', "at least one session must be enabled"))

    seen: set[str] = set()
    for index, data in enumerate(sessions):
        path = field_path('sessions', index)
        row = require_mapping(data, path, violations)
        if row is None:
            continue
        check_string(row, 'id', path, violations)
        check_string(row, 'label', path, violations)
        check_string(row, 'startTime', path, violations, is_valid_time_string, "a valid HH:MM time")
        check_string(row, 'endTime', path, violations, is_valid_time_string, "a valid HH:MM time")
        start, end = row.get('startTime'), row.get('endTime')
        if is_valid_time_string(start) and is_valid_time_string(end) and start >= end:
            violations.append(InvalidTimeWindow(field_path(path, 'endTime'), start, end))
        check_string(row, 'display', path, violations)
        if not isinstance(row.get('enabled'), bool):
            violations.append(FormatError(field_path(path, 'enabled'), "must be a boolean"))
        sort_order = row.get('sortOrder')
        if sort_order is not None and not is_integer(sort_order):
            violations.append(FormatError(field_path(path, 'sortOrder'), "must be an integer"))

        session_id = row.get('id')
        if isinstance(session_id, str) and is_non_empty(session_id):
            if session_id in seen:
                violations.append(DuplicateSessionId(field_path(path, 'id'), session_id))
            seen.add(session_id)
    return violations


class SessionDatabase(LoggerMixin):
    """Manages booking sessions and their change metadata in SQLite."""

    def __init__(self, db_file: str | Path, seed_defaults: bool = True):
        """Initialize database, creating tables and constraints if needed.

        Args:
            db_file: Path to the SQLite database file
            seed_defaults: Insert the two default morning sessions into an
                empty table
        """
        LoggerMixin.__init__(self)
        self.db_file = Path(db_file)
        self.set_log_context(db_file=str(self.db_file))
        self._init_db(seed_defaults)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and always closes."""
        conn = sqlite3.connect(self.db_file)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_db(self, seed_defaults: bool) -> None:
        try:
            self.db_file.parent.mkdir(parents=True, exist_ok=True)
            with self._connect() as conn:
                cursor = conn.cursor()
                for table_name, columns in SCHEMA.items():
                    self.debug(f"Creating table if not exists: {table_name}")
                    cursor.execute(f'''
                        CREATE TABLE IF NOT EXISTS {table_name} (
                            {", ".join(columns)}
                        )
                    ''')
                for statement in INDEXES + TRIGGERS:
                    cursor.execute(statement)

                count = cursor.execute("SELECT COUNT(*) FROM sessions").fetchone()[0]
                if seed_defaults and count == 0:
                    self.debug("Seeding default sessions")
                    self._insert_rows(cursor, DEFAULT_ROWS)
                    self._write_metadata(cursor, modified_by='system', version=1)
        except sqlite3.Error as e:
            self.error(f"Failed to initialize database: {e}", exc_info=True)
            raise StorageError(f"Failed to initialize database: {e}", {"db_file": str(self.db_file)}) from e

    @staticmethod
    def _insert_rows(cursor: sqlite3.Cursor, rows: Sequence[StoredSession]) -> None:
        cursor.executemany(
            """
            INSERT INTO sessions (id, label, start_time, end_time, display, enabled, sort_order)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (row.id, row.label, row.start_time, row.end_time, row.display, int(row.enabled), row.sort_order)
                for row in rows
            ]
        )

    @staticmethod
    def _write_metadata(cursor: sqlite3.Cursor, modified_by: str, version: int) -> None:
        values = {
            'last_modified': datetime.now(timezone.utc).isoformat(),
            'modified_by': modified_by,
            'version': str(version),
        }
        cursor.executemany(
            """
            INSERT INTO metadata (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
            list(values.items())
        )

    def list_sessions(self, enabled_only: bool = False) -> list[StoredSession]:
        """Return sessions ordered by sort order."""
        query = """
            SELECT id, label, start_time, end_time, display, enabled, sort_order
            FROM sessions
        """
        if enabled_only:
            query += " WHERE enabled = 1"
        query += " ORDER BY sort_order ASC, start_time ASC"

        with self._connect() as conn:
            rows = conn.execute(query).fetchall()

        sessions = [
            StoredSession(
                id=row[0],
                label=row[1],
                start_time=row[2],
                end_time=row[3],
                display=row[4],
                enabled=bool(row[5]),
                sort_order=row[6]
            )
            for row in rows
        ]
        self.debug("Retrieved sessions", count=len(sessions))
        return sessions

    def get_metadata(self) -> SessionMetadata:
        """Return change tracking values (version 0 if never written)."""
        with self._connect() as conn:
            metadata = dict(conn.execute("SELECT key, value FROM metadata").fetchall())
        return SessionMetadata(
            last_modified=metadata.get('last_modified', ''),
            modified_by=metadata.get('modified_by', ''),
            version=int(metadata.get('version', '0'))
        )

    @log_execution(level='DEBUG')
    def replace_sessions(
        self,
        sessions: Sequence[StoredSession | Mapping[str, Any]],
        modified_by: str = 'admin'
    ) -> SessionMetadata:
        """Validate and atomically replace every session row.

        Args:
            sessions: New rows, as StoredSession or serialized mappings
            modified_by: Recorded in metadata

        Returns:
            Updated metadata (version incremented)

        Raises:
            ValidationError: If the new set is invalid (nothing written)
            StorageError: If the database rejects the write
        """
        serialized = [s.to_dict() if isinstance(s, StoredSession) else dict(s) for s in sessions]
        raise_if_violations(session_row_violations(serialized), "session set")
        rows = [StoredSession.from_dict(data) for data in serialized]

        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                current = cursor.execute("SELECT value FROM metadata WHERE key = 'version'").fetchone()
                version = int(current[0]) + 1 if current else 1
                cursor.execute("DELETE FROM sessions")
                self._insert_rows(cursor, rows)
                self._write_metadata(cursor, modified_by=modified_by, version=version)
        except sqlite3.IntegrityError as e:
            self.error(f"Session constraints rejected update: {e}")
            raise StorageError(f"Session constraints rejected update: {e}", {"db_file": str(self.db_file)}) from e

        self.info("Sessions updated", count=len(rows), version=version, modified_by=modified_by)
        return self.get_metadata()

    def import_profile_sessions(self, sessions: Sequence[Session], modified_by: str = 'admin') -> SessionMetadata:
        """Replace the table contents with a profile's sessions."""
        return self.replace_sessions([from_session(session) for session in sessions], modified_by)
