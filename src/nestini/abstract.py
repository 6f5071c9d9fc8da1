# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from pathlib import Path
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        self._fn = fspath(filename)
        self._codec = encoding

    @property
    def path(self) -> Path:
        return Path(self._fn)

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> Path | None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
