"""Custom log formatters for hemo-visits.

This module provides specialized formatters for logging, including PII redaction.
"""

import logging
import re
from typing import List, Tuple


class PIIRedactingFormatter(logging.Formatter):
    """Formatter that redacts patient identifying information from log messages.

    Patient labels ("Full Name - NATIONALID"), national id fields and
    name fields are masked when redaction is enabled.

    Attributes:
        redact_pii: Whether to enable PII redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = PIIRedactingFormatter(redact_pii=True)
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_pii: bool = False,
    ) -> None:
        """Initialize the PIIRedactingFormatter.

        Args:
            fmt: Log message format string
            datefmt: Date format string (optional)
            redact_pii: Whether to enable PII redaction
        """
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_pii = redact_pii

        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # national_id=123456789, nationalIdNumber: "A1234"
            (re.compile(r'\b(national_?id(?:_?number)?["\']?\s*[=:]\s*)["\']?[\w-]+["\']?',
                        re.IGNORECASE),
             r'\1[ID-REDACTED]'),

            # full_name="Amna Hassan", name='Omar Ali'
            (re.compile(r'\b((?:full_?)?name\s*=\s*)["\']?([^"\'|,]+)["\']?', re.IGNORECASE),
             r'\1[NAME-REDACTED]'),

            # Patient labels: "Patient: Amna Hassan - 123456"
            (re.compile(r'(Patient:\s+)[A-Z][\w\'-]*(?:\s+[A-Z][\w\'-]*)*(?:\s+-\s+[\w-]+)?'),
             r'\1[NAME-REDACTED]'),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional PII redaction.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with PII redacted if enabled
        """
        original = super().format(record)

        if self.redact_pii:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
