"""
Core data types shared by the tokenizer, extractor, scanner and resolver.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple


NAMESPACE_SEPARATOR = "\\"

# normalized symbol name -> file path relative to the scan root
SymbolTable = Dict[str, str]


class TokenKind(Enum):
    """Token categories the extractor cares about"""
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    WHITESPACE = "whitespace"
    STRING = "string"
    COMMENT = "comment"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    """One token of a source file"""
    kind: TokenKind
    text: str
    offset: int  # byte offset into the UTF-8 encoded source

    def is_keyword(self, *words: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text.lower() in words


class Declaration(NamedTuple):
    """A declared symbol found by the extractor"""
    name: str
    offset: int
    kind: str = "class"


class RebuildState(Enum):
    """One-shot rebuild guard"""
    NOT_REBUILT = "not_rebuilt"
    REBUILT = "rebuilt"


def qualify(namespace: str, name: str) -> str:
    """Join a namespace and a bare name with the namespace separator"""
    if namespace:
        return f"{namespace}{NAMESPACE_SEPARATOR}{name}"
    return name


def normalize_name(name: str) -> str:
    """Case-fold a symbol name and drop a leading global-namespace separator"""
    return name.lstrip(NAMESPACE_SEPARATOR).lower()
