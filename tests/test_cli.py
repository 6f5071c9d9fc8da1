# -*- encoding: utf-8 -*-
# @File   : test_cli.py
# @Time   : 2024/10/15 00:40:19
# @Author : Kariko Lin

from pathlib import Path

import pytest

from nestini import IniYamlParser, read_ini
from nestini.__main__ import main


@pytest.fixture
def ini_file(tmp_path: Path) -> Path:
    path = tmp_path / 'tools.ini'
    path.write_text(
        "[foo]\nname=value\n[[bar]]\nname=value2\n", encoding='utf-8')
    return path


def test_show(ini_file: Path, capsys):
    assert main(['show', str(ini_file)]) == 0
    assert capsys.readouterr().out == (
        "[foo]\nname=value\n[[bar]]\nname=value2\n")

    assert main(['show', str(ini_file), 'foo', 'bar']) == 0
    assert capsys.readouterr().out == "name=value2\n"


def test_get(ini_file: Path, capsys):
    assert main(['get', str(ini_file), 'foo', 'bar', 'name']) == 0
    assert capsys.readouterr().out == "value2\n"

    assert main(['get', str(ini_file), 'foo', 'missing']) == 1
    assert main(['get', str(ini_file), 'foo', 'bar']) == 1


def test_set(ini_file: Path):
    assert main(['set', str(ini_file), 'foo', 'new', 'k', 'v=1']) == 0
    doc = read_ini(ini_file, 'utf-8')
    assert doc['foo']['new']['k'] == 'v=1'
    assert doc['foo']['bar']['name'] == 'value2'


def test_yaml_export(ini_file: Path, tmp_path: Path, capsys):
    out = tmp_path / 'tools.yaml'
    assert main(['yaml', str(ini_file), '-o', str(out)]) == 0
    assert IniYamlParser(out).read() == read_ini(ini_file, 'utf-8')

    assert main(['yaml', str(ini_file), '-o', str(out)]) == 2
    assert 'already exists' in capsys.readouterr().err


def test_missing_file_exits_with_2(tmp_path: Path, capsys):
    assert main(['show', str(tmp_path / 'nope.ini')]) == 2
    assert 'does not exist' in capsys.readouterr().err


def test_set_refuses_multiline_value(ini_file: Path, capsys):
    before = ini_file.read_text(encoding='utf-8')
    assert main(['set', str(ini_file), 'foo', 'k', 'a\nb']) == 2
    assert 'bad value' in capsys.readouterr().err
    assert ini_file.read_text(encoding='utf-8') == before
