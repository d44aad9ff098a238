"""Tests for the host runtime collaborators"""

import pytest

from classmap.core.errors import LoadFailure
from classmap.core.runtime import AutoloaderChain, IncludeRuntime


def test_include_runtime_registers_declared_symbols(tmp_path):
    path = tmp_path / "Models.php"
    path.write_text("<?php\nnamespace App;\nclass User {}\ninterface Entity {}\n")
    runtime = IncludeRuntime()

    assert runtime.load_file(path) is True
    assert runtime.is_loaded("App\\User")
    assert runtime.is_loaded("entity")
    assert not runtime.is_loaded("Other")
    assert runtime.included_files == [path]


def test_include_runtime_missing_file(tmp_path):
    with pytest.raises(LoadFailure):
        IncludeRuntime().load_file(tmp_path / "missing.php")


def test_chain_dispatches_in_order():
    calls = []

    def first(name):
        calls.append(("first", name))
        return False

    def second(name):
        calls.append(("second", name))
        return True

    chain = AutoloaderChain()
    chain.register(first)
    chain.register(second)

    assert chain.dispatch("Foo") is True
    assert calls == [("first", "Foo"), ("second", "Foo")]


def test_chain_prepend_and_unregister():
    chain = AutoloaderChain()
    calls = []

    def a(name):
        calls.append("a")
        return True

    def b(name):
        calls.append("b")
        return True

    chain.register(a)
    chain.register(b, prepend=True)
    chain.dispatch("X")
    assert calls == ["b"]

    assert chain.unregister(b) is True
    assert chain.unregister(b) is False
    assert b not in chain
    chain.dispatch("X")
    assert calls == ["b", "a"]


def test_chain_register_twice_is_noop():
    chain = AutoloaderChain()

    def loader(name):
        return False

    chain.register(loader)
    chain.register(loader)
    assert len(chain) == 1


def test_chain_exhausted_returns_false():
    chain = AutoloaderChain()
    chain.register(lambda name: False)

    assert chain.dispatch("Nope") is False
    assert AutoloaderChain().dispatch("Nope") is False
