# -*- encoding: utf-8 -*-
# @File   : __main__.py
# @Time   : 2024/10/13 17:05:29
# @Author : Kariko Lin

import argparse
import logging
import sys

from .errors import InvalidIniEntry, PreconditionError
from .ini import IniDocument, IniParser, IniYamlParser


def _section(doc: IniDocument, path: list[str]) -> IniDocument:
    try:
        return doc.find(*path)
    except KeyError as e:
        raise SystemExit(f'section not found: {e.args[0]}')


def cmd_show(args: argparse.Namespace) -> int:
    doc = IniParser(args.file, args.encoding).read()
    sys.stdout.write(IniParser.dumps(_section(doc, args.section)))
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    *path, key = args.path
    section = _section(IniParser(args.file, args.encoding).read(), path)
    value = section.get(key)
    if value is None or isinstance(value, IniDocument):
        print(f'key not found: {key}', file=sys.stderr)
        return 1
    print(value)
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    *path, key = args.path
    parser = IniParser(args.file, args.encoding)
    doc = parser.read()
    section = doc
    for name in path:
        section = section.setdefault_section(name)
    section[key] = args.value
    parser.write(doc, force=True)
    logging.info('[%s] %s = %s', '.'.join(path), key, args.value)
    return 0


def cmd_yaml(args: argparse.Namespace) -> int:
    doc = IniParser(args.file, args.encoding).read()
    if args.output is None:
        sys.stdout.write(IniYamlParser.dumps(doc))
    else:
        IniYamlParser(args.output).write(doc, force=args.force)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='nestini', description='Inspect and edit nested INI files.')
    p.add_argument('--encoding', default=None,
                   help='text encoding of FILE (guessed when wrong)')
    p.add_argument('-v', '--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)

    sp = sub.add_parser('show', help='Print a file (or a section) as INI')
    sp.add_argument('file')
    sp.add_argument('section', nargs='*')
    sp.set_defaults(func=cmd_show)

    sp = sub.add_parser('get', help='Print a single value')
    sp.add_argument('file')
    sp.add_argument('path', nargs='+', metavar='SECTION... KEY')
    sp.set_defaults(func=cmd_get)

    sp = sub.add_parser('set', help='Set a value and save in place')
    sp.add_argument('file')
    sp.add_argument('path', nargs='+', metavar='SECTION... KEY')
    sp.add_argument('value')
    sp.set_defaults(func=cmd_set)

    sp = sub.add_parser('yaml', help='Export as YAML')
    sp.add_argument('file')
    sp.add_argument('-o', '--output', default=None)
    sp.add_argument('--force', action='store_true')
    sp.set_defaults(func=cmd_yaml)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(asctime)s] %(levelname)s: %(message)s')
    try:
        return args.func(args)
    except (PreconditionError, InvalidIniEntry) as e:
        print(f'nestini: {e}', file=sys.stderr)
        return 2


if __name__ == '__main__':
    raise SystemExit(main())
