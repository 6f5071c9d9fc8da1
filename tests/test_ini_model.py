# -*- encoding: utf-8 -*-
# @File   : test_ini_model.py
# @Time   : 2024/10/14 21:33:02
# @Author : Kariko Lin

import pytest

from nestini import IniComment, IniDocument, is_comment_key, loads


def test_assigned_values_are_normalized():
    doc = IniDocument()
    doc['a'] = {'b': {'c': 1}}
    doc['n'] = None
    doc['i'] = 42
    assert isinstance(doc['a'], IniDocument)
    assert isinstance(doc['a']['b'], IniDocument)
    assert doc['a']['b']['c'] == '1'
    assert doc['n'] == ''
    assert doc['i'] == '42'


def test_reassignment_keeps_first_position():
    doc = IniDocument()
    doc['a'] = '1'
    doc['b'] = '2'
    doc['a'] = {'x': 'y'}
    assert list(doc) == ['a', 'b']
    assert isinstance(doc['a'], IniDocument)


def test_equality_is_order_sensitive_between_documents():
    assert IniDocument({'a': '1', 'b': '2'}) != IniDocument({'b': '2', 'a': '1'})
    assert IniDocument({'a': '1', 'b': '2'}) == IniDocument([('a', '1'), ('b', '2')])
    # plain mappings compare as dict does.
    assert IniDocument({'a': '1', 'b': '2'}) == {'b': '2', 'a': '1'}


def test_equality_minds_comment_tags():
    tagged = IniDocument({'Comment-0': IniComment(';x')})
    plain = IniDocument({'Comment-0': ';x'})
    assert tagged != plain
    assert tagged == IniDocument({'Comment-0': IniComment(';x')})


def test_add_comment_takes_next_free_key():
    doc = IniDocument({'Comment-3': IniComment('; old'), 'k': 'v'})
    assert doc.add_comment('; new') == 'Comment-4'
    assert isinstance(doc['Comment-4'], IniComment)
    assert IniDocument().add_comment(';') == 'Comment-0'


def test_is_comment_key():
    assert is_comment_key('Comment-0')
    assert is_comment_key('Comment-12')
    assert not is_comment_key('Comment-')
    assert not is_comment_key('comment-1')
    assert not is_comment_key(3)


def test_entry_kinds():
    doc = loads("; c\nk=v\n[a]\n[b]")
    assert [k for k, _ in doc.sections()] == ['a', 'b']
    assert list(doc.pairs()) == [('k', 'v')]
    assert list(doc.comments()) == [('Comment-0', '; c')]


def test_setdefault_section():
    doc = IniDocument({'k': 'v'})
    sub = doc.setdefault_section('a')
    sub['x'] = '1'
    assert doc.setdefault_section('a') is sub
    assert doc['a']['x'] == '1'
    with pytest.raises(TypeError):
        doc.setdefault_section('k')


def test_find():
    doc = loads("[a]\nk=v\n[[b]]\nx=1")
    assert doc.find('a', 'b')['x'] == '1'
    assert doc.find() is doc
    with pytest.raises(KeyError):
        doc.find('a', 'missing')
    with pytest.raises(KeyError):
        doc.find('a', 'k')


def test_walk_is_preorder():
    doc = loads("[a]\n[[b]]\n[c]")
    walked = [(path, depth) for path, depth, _ in doc.walk()]
    assert walked == [((), 0), (('a',), 1), (('a', 'b'), 2), (('c',), 1)]


def test_to_dict_and_copy():
    doc = loads("; c\n[a]\nk=v")
    assert doc.to_dict() == {'Comment-0': '; c', 'a': {'k': 'v'}}
    assert type(doc.to_dict()['Comment-0']) is str

    dup = doc.copy()
    assert dup == doc
    dup['a']['k'] = 'changed'
    assert doc['a']['k'] == 'v'
    assert isinstance(dup['Comment-0'], IniComment)


def test_delete():
    doc = loads("[a]\nk=v")
    del doc['a']['k']
    assert len(doc['a']) == 0
    del doc['a']
    assert 'a' not in doc
