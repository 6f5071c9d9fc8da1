# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:40:08
# @Author : Kariko Lin


class PreconditionError(Exception):
    """Raised before any reading or writing starts.

    e.g. the input is missing, is not an INI, or the output
    already exists and neither overwriting nor appending is allowed.
    """
    pass


class NotFoundError(PreconditionError, FileNotFoundError):
    """The INI to read does not exist, or is not an `.ini` at all."""
    pass


class InvalidIniEntry(ValueError):
    """A section name, key or value that INI text can't carry,
    i.e. it would not be read back as the same entry."""
    pass
