"""
Exception hierarchy for scano.

Recoverable conditions (unparsable files, untracked features) are not
exceptions; they travel as ScanResult diagnostics and degraded verdicts.
Everything raised from here aborts the run.
"""


class ScanoError(Exception):
    """Base class for fatal scano errors."""


class RegistryError(ScanoError):
    """Feature registry file is missing, unreadable or not a JSON object."""


class KeywordIndexError(ScanoError):
    """Keyword index lacks a keyword the script detector depends on."""


class SummError(ScanoError):
    """Report summarization upload failed."""
