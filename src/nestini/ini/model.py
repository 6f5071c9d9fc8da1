# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure with nested sections and comments kept.

```ini
key = val    ; root pairs live in the document itself.
; comments are kept as `Comment-N` entries.
[section]
key233 = val666
[[sub]]      ; nested into [section], depth = bracket count.
key233 = val114514
```

As for reading and writing files, just see `ini.parser`.
"""

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from re import compile as regex
from typing import Generator, Union

COMMENT_KEY = 'Comment-{}'
_COMMENT_KEY = regex(r'^Comment-(\d+)$')


def is_comment_key(key: object) -> bool:
    """Whether `key` looks like a synthetic comment key, i.e. `Comment-N`."""
    return isinstance(key, str) and _COMMENT_KEY.match(key) is not None


class IniComment(str):
    """A whole comment line, replayed verbatim on writing."""

    def __repr__(self) -> str:
        return f'IniComment({super().__repr__()})'


IniValue = Union[str, IniComment, 'IniDocument']


def _kind(value: object) -> int:
    if isinstance(value, IniDocument):
        return 2
    return 1 if isinstance(value, IniComment) else 0


class IniDocument(MutableMapping[str, IniValue]):
    """An ordered, nestable group of INI entries.

    Each value is one of:
    - a plain `str`, for `key=value` pairs;
    - an `IniComment`, for comment lines;
    - another `IniDocument`, for a sub section.

    The root document represents a whole file,
    also the implicit section without a name (pairs before any header).
    Plain mappings assigned in are converted into documents recursively,
    while the scalars are converted into `str` (`None` becomes empty).
    """

    def __init__(
        self,
        pairs: Mapping[str, object] | Iterable[tuple[str, object]] | None = None
    ) -> None:
        self.__raw: dict[str, IniValue] = {}
        if pairs:
            self.update(pairs)

    def __getitem__(self, key: str) -> IniValue:
        return self.__raw[key]

    # keeps the first-seen position, as dict does.
    def __setitem__(self, key: str, value: object) -> None:
        if isinstance(value, (IniDocument, IniComment)):
            self.__raw[key] = value
        elif isinstance(value, Mapping):
            self.__raw[key] = IniDocument(value)
        else:
            self.__raw[key] = '' if value is None else str(value)

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __eq__(self, other: object) -> bool:
        # order (and comment tagging) matters between documents.
        if isinstance(other, IniDocument):
            if list(self.__raw) != list(other.__raw):
                return False
            return all(
                _kind(v) == _kind(other.__raw[k]) and v == other.__raw[k]
                for k, v in self.__raw.items())
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'IniDocument({self.__raw!r})'

    def sections(self) -> Iterator[tuple[str, 'IniDocument']]:
        """Direct sub sections, in order."""
        for k, v in self.__raw.items():
            if isinstance(v, IniDocument):
                yield k, v

    def pairs(self) -> Iterator[tuple[str, str]]:
        """`key=value` entries, in order. Comments are skipped."""
        for k, v in self.__raw.items():
            if _kind(v) == 0:
                yield k, v

    def comments(self) -> Iterator[tuple[str, IniComment]]:
        for k, v in self.__raw.items():
            if isinstance(v, IniComment):
                yield k, v

    def add_comment(self, text: str) -> str:
        """Append a comment line and return the synthetic key chosen.

        Note: `text` is kept as is, so it should start with a comment char
        (like `;`) if you'd like to read it back as a comment.
        """
        used = [int(m.group(1)) for m in map(_COMMENT_KEY.match, self)
                if m is not None]
        key = COMMENT_KEY.format(max(used, default=-1) + 1)
        self.__raw[key] = IniComment(text)
        return key

    def setdefault_section(self, name: str) -> 'IniDocument':
        """Get the sub section `name`, create an empty one if missing.

        Raises:
            TypeError: if `name` is already taken by a non-section entry.
        """
        if name not in self.__raw:
            self.__raw[name] = IniDocument()
        section = self.__raw[name]
        if not isinstance(section, IniDocument):
            raise TypeError(f'"{name}" is not a section: {section!r}')
        return section

    def find(self, *path: str) -> 'IniDocument':
        """Resolve a section path like `doc.find('foo', 'bar')`.

        Raises `KeyError` if any part is missing or not a section.
        """
        cur = self
        for name in path:
            nxt = cur.__raw.get(name)
            if not isinstance(nxt, IniDocument):
                raise KeyError(name)
            cur = nxt
        return cur

    def walk(self) -> Generator[
        tuple[tuple[str, ...], int, 'IniDocument'], None, None
    ]:
        """DFS (pre-order) over self and all sub sections.

        Yields `(path, depth, document)`, starting with `((), 0, self)`.
        """
        stack: list[tuple[tuple[str, ...], IniDocument]] = [((), self)]
        while stack:
            path, doc = stack.pop()
            yield path, len(path), doc
            stack.extend(reversed(
                [(path + (k,), v) for k, v in doc.sections()]))

    def to_dict(self) -> dict[str, object]:
        """Plain nested dicts. Comments turn into plain strings."""
        return {
            k: v.to_dict() if isinstance(v, IniDocument) else str(v)
            for k, v in self.__raw.items()
        }

    def copy(self) -> 'IniDocument':
        """Deep copy, comments still tagged."""
        ret = IniDocument()
        for k, v in self.__raw.items():
            ret[k] = v.copy() if isinstance(v, IniDocument) else v
        return ret
