"""Shared fixtures for the class map tests"""

import pytest

from classmap.config import ResolverConfig
from tests.helpers import RecordingRuntime, write_tree


@pytest.fixture
def php_project(tmp_path):
    """A small source tree with namespaced and global classes"""
    root = tmp_path / "project"
    root.mkdir()
    return write_tree(root, {
        "A.php": "<?php\nclass Widget {\n}\n",
        "lib/Foo/Baz.php": "<?php\nnamespace Foo\\Bar;\n\nclass Baz\n{\n}\n",
        "lib/Contracts.php": "<?php\ninterface Renderable {}\ntrait Greets {}\n",
        "vendor/Skip.php": "<?php\nclass Skipped {}\n",
        "notes.txt": "class NotPhp {}\n",
        ".hidden/Secret.php": "<?php\nclass Secret {}\n",
    })


@pytest.fixture
def config(php_project):
    return ResolverConfig(root=php_project)


@pytest.fixture
def runtime():
    return RecordingRuntime()
