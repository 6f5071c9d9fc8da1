# -*- encoding: utf-8 -*-
# @File   : yamlio.py
# @Time   : 2024/10/13 16:22:51
# @Author : Kariko Lin

"""INI <-> YAML, for reviewing (or diffing) an INI tree in a friendlier view.

```yaml
key: val
Comment-0: ; hello
section:
  key233: val666
  sub:
    key233: val114514
```

Sections become nested mappings in the same order.
Comments are kept under their `Comment-N` keys and tagged back on reading.
"""

from collections.abc import Mapping
from os import PathLike
from pathlib import Path

import yaml

from ..abstract import FileHandler
from ..errors import NotFoundError, PreconditionError
from .model import IniComment, IniDocument, is_comment_key


class InvalidYamlDocument(ValueError):
    """The YAML top level is not a mapping."""
    pass


class IniYamlParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename, encoding)

    @classmethod
    def _to_doc(cls, data: Mapping[object, object]) -> IniDocument:
        ret = IniDocument()
        for k, v in data.items():
            k = str(k)
            if isinstance(v, Mapping):
                ret[k] = cls._to_doc(v)
            elif isinstance(v, list):
                # like the type lists, `0 = A,B,C`.
                ret[k] = ','.join('' if i is None else str(i) for i in v)
            elif is_comment_key(k):
                ret[k] = IniComment('' if v is None else v)
            else:
                ret[k] = v
        return ret

    @classmethod
    def loads(cls, text: str) -> IniDocument:
        data = yaml.safe_load(text)
        if data is None:
            return IniDocument()
        if not isinstance(data, Mapping):
            raise InvalidYamlDocument(
                f'expect a mapping at top level, got {type(data).__name__}.')
        return cls._to_doc(data)

    @staticmethod
    def dumps(doc: IniDocument, indent: int = 2) -> str:
        return yaml.safe_dump(
            doc.to_dict(), allow_unicode=True,
            sort_keys=False, indent=indent)

    def read(self) -> IniDocument:
        if not self.path.is_file():
            raise NotFoundError(f'"{self.path}" does not exist.')
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self.loads(fp.read())

    def write(
        self, instance: IniDocument, *,
        force: bool = False, indent: int = 2
    ) -> Path:
        """Convert to yaml file."""
        if self.path.exists() and not force:
            raise PreconditionError(
                f'"{self.path}" already exists. Use force=True to overwrite.')
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(self.dumps(instance, indent))
        return self.path
