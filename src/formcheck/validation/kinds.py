"""Constraint kinds — the bit flags a field rule combines.

Kinds are combined with ``|`` and each one set on a rule is evaluated
independently::

    rule = Check.REQUIRED | Check.ALNUM | Check.LENGTH

The ``CH_*`` aliases keep the flat-constant spelling available::

    {"username": CH_REQUIRED | CH_ALNUM}
"""

from enum import IntFlag


class Check(IntFlag):
    """Closed set of constraint kinds."""

    REQUIRED = 1
    LENGTH = 2
    EMAIL = 4
    URL = 8
    ALNUM = 16
    UNSIGNED = 32
    FILE = 64
    REGEXP = 128
    CUSTOM = 256
    CONFIRM = 512


ALL_CHECKS = Check(sum(Check))

CH_REQUIRED = Check.REQUIRED
CH_LENGTH = Check.LENGTH
CH_EMAIL = Check.EMAIL
CH_URL = Check.URL
CH_ALNUM = Check.ALNUM
CH_UNSIGNED = Check.UNSIGNED
CH_FILE = Check.FILE
CH_REGEXP = Check.REGEXP
CH_CUSTOM = Check.CUSTOM
CH_CONFIRM = Check.CONFIRM
