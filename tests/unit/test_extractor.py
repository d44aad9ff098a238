"""Tests for declaration extraction"""

import inspect

from classmap.core import extractor
from classmap.core.errors import TokenizeError
from classmap.core.extractor import extract_symbols


def names(source, **kwargs):
    return [d.name for d in extract_symbols(source, **kwargs)]


def test_global_class():
    assert names("<?php\nclass Widget {\n}\n") == ["Widget"]


def test_namespace_composition():
    source = "<?php\nnamespace Foo\\Bar;\n\nclass Baz\n{\n}\n"
    assert names(source) == ["Foo\\Bar\\Baz"]


def test_braced_namespace():
    source = "<?php\nnamespace Foo {\n    class Bar {}\n}\n"
    assert names(source) == ["Foo\\Bar"]


def test_global_namespace_block():
    source = "<?php\nnamespace {\n    class Plain {}\n}\n"
    assert names(source) == ["Plain"]


def test_interface_and_trait():
    source = "<?php\ninterface Renderable {}\ntrait Greets {}\n"
    declarations = list(extract_symbols(source))

    assert [d.name for d in declarations] == ["Renderable", "Greets"]
    assert [d.kind for d in declarations] == ["interface", "trait"]


def test_keywords_are_configurable():
    source = "<?php\ninterface Renderable {}\nclass Page {}\n"
    assert names(source, keywords=("class",)) == ["Page"]


def test_keywords_are_case_insensitive():
    assert names("<?php\nClass Widget {}\n") == ["Widget"]


def test_namespace_applies_to_first_declaration_only():
    source = "<?php\nnamespace App;\n\nclass First {}\nclass Second {}\n"
    assert names(source) == ["App\\First", "Second"]


def test_declarations_in_comments_and_strings_are_ignored():
    source = (
        "<?php\n"
        "// class Ghost\n"
        "/* interface Spook */\n"
        "$x = 'class Phantom';\n"
    )
    assert names(source) == []


def test_anonymous_class_and_class_constant_are_ignored():
    source = "<?php\n$a = new class {};\n$b = Foo::class;\n"
    assert names(source) == []


def test_declaration_offset():
    source = "<?php\nnamespace Foo\\Bar;\n\nclass Baz {}\n"
    declaration = next(extract_symbols(source))
    assert declaration.offset == source.encode("utf-8").index(b"Baz")


def test_extraction_is_lazy():
    assert inspect.isgenerator(extract_symbols("<?php\nclass A {}\n"))


def test_malformed_source_does_not_raise():
    result = list(extract_symbols("<?php\nclass {{{ ]]] namespace ;;; interface"))
    assert isinstance(result, list)


def test_tokenize_failure_yields_nothing(monkeypatch):
    def broken(source):
        raise TokenizeError("boom")

    monkeypatch.setattr(extractor, "tokenize", broken)
    assert names("<?php\nclass A {}\n") == []


def test_enum_is_a_default_declaration():
    source = "<?php\nnamespace App;\n\nenum Suit: string\n{\n    case Hearts = 'H';\n}\n"
    declarations = list(extract_symbols(source))

    assert [d.name for d in declarations] == ["App\\Suit"]
    assert declarations[0].kind == "enum"


def test_long_expression_does_not_hide_class():
    body = " . ".join(["'x'"] * 1000)
    source = "<?php\nclass Template {\n  const BODY = " + body + ";\n}\n"

    assert names(source) == ["Template"]


def test_deeply_nested_expression_does_not_hide_class():
    source = "<?php\n$v = " + "(" * 5000 + "1" + ")" * 5000 + ";\nclass Deep {}\n"

    assert names(source) == ["Deep"]
