import os
import pytest
from notetagger.api import NoteTagger
from notetagger.conf import NoteTaggerConf, JsonRepoConf
from notetagger.repos.jsonfile import JsonFileRepo


def test_defaults(fs):
    fs.create_dir('/work')
    os.chdir('/work')
    conf = NoteTaggerConf.for_user()
    assert conf == NoteTaggerConf()
    assert conf.standardize().repo_conf.path == '/work/notes.json'
    nt = conf.instantiate()
    assert isinstance(nt, NoteTagger)
    assert isinstance(nt.repo, JsonFileRepo)
    assert nt.repo.conf.path == '/work/notes.json'


def test_for_user(fs):
    confpy = """from notetagger.conf import *
conf = NoteTaggerConf(repo_conf=JsonRepoConf(path='~/my-notes.json'), date_format='%Y-%m-%d')"""
    fs.create_file(os.path.expanduser('~/.notetagger.conf.py'), contents=confpy)
    conf = NoteTaggerConf.for_user()
    assert conf.date_format == '%Y-%m-%d'
    assert conf.standardize().repo_conf.path == os.path.expanduser('~/my-notes.json')


def test_for_user_without_conf(fs):
    fs.create_file(os.path.expanduser('~/.notetagger.conf.py'), contents='x = 1')
    with pytest.raises(Exception, match=r'You need to assign an instance of NoteTaggerConf'):
        NoteTaggerConf.for_user()


def test_standardize_keeps_absolute_paths():
    assert JsonRepoConf(path='/a/b.json').standardize().path == '/a/b.json'


def test_empty_path_rejected():
    with pytest.raises(ValueError):
        JsonFileRepo(JsonRepoConf(path=''))
