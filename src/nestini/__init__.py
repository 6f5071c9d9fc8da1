# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Kariko Lin

from .errors import InvalidIniEntry, NotFoundError, PreconditionError
from .ini import (
    IniComment,
    IniDocument,
    IniParser,
    IniYamlParser,
    InvalidYamlDocument,
    is_comment_key
)

__all__ = [
    'IniComment', 'IniDocument', 'IniParser', 'is_comment_key',
    'IniYamlParser', 'InvalidYamlDocument',
    'InvalidIniEntry', 'NotFoundError', 'PreconditionError',
    'loads', 'dumps', 'read_ini', 'write_ini'
]

loads = IniParser.loads
dumps = IniParser.dumps


def read_ini(filename, encoding=None, **kwargs) -> IniDocument:
    """Shortcut of `IniParser(filename, encoding, **kwargs).read()`."""
    return IniParser(filename, encoding, **kwargs).read()


def write_ini(doc, filename, encoding='utf-8', **kwargs):
    """Shortcut of `IniParser(filename, encoding).write(doc, **kwargs)`."""
    return IniParser(filename, encoding).write(doc, **kwargs)
