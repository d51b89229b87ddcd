"""Logging filters that keep RevSport credentials out of log output."""

import logging
import re
from typing import Any


MASK = '***MASKED***'

CREDENTIAL_FIELDS = frozenset({
    'password', 'revsport_password', 'token', 'apikey', 'api_key',
    'secret', 'credentials', 'auth', 'cookie'
})

# KEY=value pairs for credential variables, as in a logged environment dump
CREDENTIAL_ASSIGNMENT = re.compile(
    r'(?P<key>\b(?:REVSPORT_PASSWORD|password|token|secret)\s*=\s*)(?P<value>[^\s,;}]+)',
    re.IGNORECASE
)


class SensitiveDataFilter(logging.Filter):
    """Mask credential values in structured fields and in message text.

    Structured fields arrive in ``record.extra_fields``; any key whose
    lowercase name is a credential field is replaced by ``MASK`` at every
    nesting level. Message text is scanned for ``password=...``
    assignments.
    """

    def __init__(self, sensitive_fields: set[str] | frozenset[str] | None = None):
        super().__init__()
        self.sensitive_fields = frozenset(sensitive_fields or CREDENTIAL_FIELDS)

    def mask(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: MASK if str(key).lower() in self.sensitive_fields else self.mask(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self.mask(item) for item in value]
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            record.extra_fields = self.mask(extra_fields)

        message = record.getMessage()
        masked = CREDENTIAL_ASSIGNMENT.sub(lambda m: m.group('key') + MASK, message)
        if masked != message:
            record.msg, record.args = masked, None
        return True
