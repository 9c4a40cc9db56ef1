import os.path

import pytest

from .tokenizer import TokenizerFile

_dir = os.path.abspath(os.path.dirname(__file__))
_testdata = os.path.join(_dir, "testdata")
_tokenizer = os.path.join(_testdata, "tokenizer")


def pytest_configure(config):
    if not os.path.exists(_testdata):
        pytest.exit("testdata not available! The testdata doesn't appear to be "
                    "included with this package.")


def pytest_collect_file(file_path, parent):
    dir = os.path.abspath(str(file_path.parent))
    dir_and_parents = set()
    while dir not in dir_and_parents:
        dir_and_parents.add(dir)
        dir = os.path.dirname(dir)

    if _tokenizer in dir_and_parents:
        if file_path.suffix == ".test":
            return TokenizerFile.from_parent(parent, path=file_path)
