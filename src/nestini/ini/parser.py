# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Read and write INI files with nested sections.

Lines are classified in this order:
1. section header, like `[name]`, `[[name]]`. The bracket counts
on both sides must be equal, which is also the section depth;
2. comment, the first non-blank char is `;` (configurable);
3. `key = value`, split at the first `=`.

Anything else (unbalanced headers included) is silently ignored.
"""

import logging
from collections.abc import Iterable, Mapping
from io import StringIO, TextIOBase
from os import PathLike
from pathlib import Path
from re import compile as regex
from warnings import warn

import chardet

from ..abstract import FileHandler
from ..errors import InvalidIniEntry, NotFoundError, PreconditionError
from .model import COMMENT_KEY, IniComment, IniDocument, is_comment_key

INI_SUFFIX = '.ini'
_COMMENT_CHARS = ';'
_HEADER = regex(r'^\s*(\[+)([^\[\]]+)(\]+)\s*$')

logger = logging.getLogger(__name__)


def _match_header(line: str) -> tuple[int, str] | None:
    m = _HEADER.match(line)
    if m is None or len(m.group(1)) != len(m.group(3)):
        return None
    if not m.group(2).strip():
        return None
    return len(m.group(1)), m.group(2)


def _has_newline(text: str) -> bool:
    return '\n' in text or '\r' in text


def _check_header(name: str, depth: int) -> str:
    line = f'{"[" * depth}{name}{"]" * depth}'
    if _has_newline(name) or _match_header(line) != (depth, name):
        raise InvalidIniEntry(f'bad section name: {name!r}')
    return line


def _check_comment(key: str, text: str) -> str:
    if _has_newline(text):
        raise InvalidIniEntry(f'{key}: comment spans lines: {text!r}')
    return text


def _check_pair(key: str, value: str, delimiter: str) -> str:
    # the key is cut at the first `=`, both sides get trimmed.
    if (not key or key != key.strip() or '=' in key
            or _has_newline(key) or key[0] in _COMMENT_CHARS):
        raise InvalidIniEntry(f'bad key: {key!r}')
    if value != value.strip() or _has_newline(value):
        raise InvalidIniEntry(f'{key}: bad value: {value!r}')
    line = f'{key}{delimiter}{value}'
    if _match_header(line) is not None:
        raise InvalidIniEntry(f'{key}: would be read as a header: {line!r}')
    return line


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None, *,
        comment_chars: str = _COMMENT_CHARS,
        ignore_comments: bool = False
    ) -> None:
        super().__init__(filename, encoding)
        self._comment_chars = comment_chars
        self._ignore_comments = ignore_comments

    @staticmethod
    def readstream(
        buf: TextIOBase | Iterable[str], *,
        comment_chars: str = _COMMENT_CHARS,
        ignore_comments: bool = False
    ) -> IniDocument:
        """Read a decoded chars stream (or any lines iterable).

        If nothing special, just call `self.read()`.
        """
        ret = IniDocument()
        # stack[depth] is the section currently open at that depth.
        stack: list[IniDocument] = [ret]
        comments = 0
        for lineno, i in enumerate(buf):
            i = i.rstrip('\r\n')
            if lineno == 0:
                i = i.lstrip('\ufeff')
            if (header := _match_header(i)) is not None:
                depth, name = header
                if depth > len(stack):
                    logger.debug(
                        'line %d: [%s] at depth %d has no parent, '
                        'clamped to %d.', lineno + 1, name, depth, len(stack))
                    depth = len(stack)
                del stack[depth:]
                section = IniDocument()
                stack[-1][name] = section
                stack.append(section)
                continue

            stripped = i.lstrip()
            if stripped and stripped[0] in comment_chars:
                if not ignore_comments:
                    stack[-1][COMMENT_KEY.format(comments)] = IniComment(i)
                    comments += 1
            elif '=' in i:
                key, val = i.split('=', 1)
                if key := key.strip():
                    stack[-1][key] = val.strip()
                else:
                    logger.debug('line %d: no key before "=", ignored.',
                                 lineno + 1)
            elif stripped:
                logger.debug('line %d: unrecognized, ignored: %r',
                             lineno + 1, i)
        return ret

    @classmethod
    def loads(cls, text: str, **kwargs) -> IniDocument:
        """Parse INI text. Keywords go to `readstream()`."""
        # newline=None splits lines the same way as `open()` in text mode.
        return cls.readstream(StringIO(text, newline=None), **kwargs)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}
        logger.info('decoding %s as %s', filename, codec['encoding'])

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('gbk')
        return StringIO(buf, newline=None)

    def read(self) -> IniDocument:
        """Read the file `IniParser` instance specified.

        Raises:
            NotFoundError: if the file is missing, or not an `.ini`.
        """
        path = self.path
        if not path.is_file():
            raise NotFoundError(f'"{path}" does not exist.')
        if path.suffix.lower() != INI_SUFFIX:
            raise NotFoundError(f'"{path}" is not an INI file.')

        opts = {
            'comment_chars': self._comment_chars,
            'ignore_comments': self._ignore_comments
        }
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, **opts)
        except UnicodeDecodeError:
            logger.info('%s is not in %s, guessing.', self._fn, self._codec)
            return self.readstream(self._decode_file(self._fn), **opts)

    @staticmethod
    def _lines(
        doc: Mapping[str, object], depth: int = 0, delimiter: str = '='
    ) -> Iterable[tuple[bool, str]]:
        """Yields `(is_header, line)`, DFS pre-order.

        Raises `InvalidIniEntry` on entries that wouldn't be read back as is.
        """
        # within a document the tag decides, plain mappings go by key.
        keyed_comments = not isinstance(doc, IniDocument)
        # pairs first, or they would be read back into the last sub section.
        children: list[tuple[str, Mapping[str, object]]] = []
        for k, v in doc.items():
            if isinstance(v, Mapping):
                children.append((k, v))
            elif isinstance(v, IniComment) or (
                    keyed_comments and is_comment_key(k)):
                yield False, _check_comment(k, str(v))
            else:
                yield False, _check_pair(
                    k, '' if v is None else str(v), delimiter)
        for k, v in children:
            yield True, _check_header(k, depth + 1)
            yield from IniParser._lines(v, depth + 1, delimiter)

    @classmethod
    def writestream(
        cls, doc: Mapping[str, object], buf: TextIOBase, *,
        delimiter: str = '=',
        blank_lines: int = 0
    ) -> None:
        """Write `doc` into a text stream.

        Args:
            delimiter: how to connect key with value?
            blank_lines: how many lines before each section header?
        """
        written = False
        for is_header, line in cls._lines(doc, 0, delimiter):
            if written and blank_lines and is_header:
                buf.write('\n' * blank_lines)
            buf.write(line)
            buf.write('\n')
            written = True

    @classmethod
    def dumps(cls, doc: Mapping[str, object], **kwargs) -> str:
        buf = StringIO()
        cls.writestream(doc, buf, **kwargs)
        return buf.getvalue()

    def write(
        self, instance: Mapping[str, object], *,
        force: bool = False,
        append: bool = False,
        passthru: bool = False,
        delimiter: str = '=',
        blank_lines: int = 0
    ) -> Path | None:
        """Save to the file `IniParser` instance specified.

        Note:
        1. An existing file is only touched with `force=True` (overwrite)
        or `append=True`, otherwise `PreconditionError` is raised.
        2. Non-`.ini` names are warned about, but still written.

        Returns:
            the written path if `passthru`, otherwise `None`.
        """
        path = self.path
        if path.exists() and not (force or append):
            raise PreconditionError(
                f'"{path}" already exists. '
                'Use force=True to overwrite, or append=True.')
        if path.suffix.lower() != INI_SUFFIX:
            logger.warning('%s is not named as %s.', path, INI_SUFFIX)
            warn(f'"{path}" does not end with {INI_SUFFIX}.')

        # fails on bad entries before the file is touched.
        text = self.dumps(
            instance, delimiter=delimiter, blank_lines=blank_lines)
        codec = self._codec or 'utf-8'
        # keep appended lines off the last line of the old file.
        needs_newline = False
        if append and path.is_file() and path.stat().st_size:
            with open(path, 'rb') as fp:
                fp.seek(-1, 2)
                needs_newline = fp.read(1) not in b'\r\n'

        with open(path, 'a' if append else 'w', encoding=codec) as fp:
            if needs_newline:
                fp.write('\n')
            fp.write(text)
        logger.debug('%s written (%s).', path, 'appended' if append else codec)
        return path if passthru else None

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
