"""
Declaration extractor.

A small forward-scanning state machine over the token stream that recognises
``namespace <path> ;`` and ``class|interface|trait|enum <identifier>``. It is a
best-effort syntactic scan, not a parser: symbols created at runtime
(``class_alias``, ``eval``) are invisible to it.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import TokenizeError
from .schema import Declaration, NAMESPACE_SEPARATOR, Token, TokenKind, qualify
from .tokenizer import tokenize


logger = logging.getLogger(__name__)

DECLARATION_KEYWORDS = ('class', 'interface', 'trait', 'enum')

# Tokens that end a namespace path
_PATH_TERMINATORS = {';', '{'}


def _read_namespace_path(tokens: List[Token], start: int) -> Tuple[str, int]:
    """Glue tokens from ``start`` until whitespace or a terminator"""
    parts = []
    i = start
    while i < len(tokens):
        token = tokens[i]
        if token.kind in (TokenKind.WHITESPACE, TokenKind.COMMENT) or token.text in _PATH_TERMINATORS:
            break
        parts.append(token.text)
        i += 1
    return ''.join(parts).lstrip(NAMESPACE_SEPARATOR), i


def _declared_name(tokens: List[Token], i: int, keywords: Tuple[str, ...]) -> Optional[Token]:
    """Return the identifier token if ``tokens[i]`` opens a declaration"""
    if i + 2 >= len(tokens) or not tokens[i].is_keyword(*keywords):
        return None
    if tokens[i + 1].kind is not TokenKind.WHITESPACE:
        return None
    if tokens[i + 2].kind is not TokenKind.IDENTIFIER:
        return None
    return tokens[i + 2]


def iter_declarations(tokens: List[Token],
                      keywords: Iterable[str] = DECLARATION_KEYWORDS) -> Iterator[Declaration]:
    """Scan a token list and yield each declared symbol"""
    keywords = tuple(k.lower() for k in keywords)
    namespace = ''
    i = 0
    while i < len(tokens):
        token = tokens[i]

        if (token.is_keyword('namespace')
                and i + 1 < len(tokens)
                and tokens[i + 1].kind is TokenKind.WHITESPACE):
            namespace, i = _read_namespace_path(tokens, i + 2)
            continue

        name_token = _declared_name(tokens, i, keywords)
        if name_token is not None:
            yield Declaration(
                name=qualify(namespace, name_token.text),
                offset=name_token.offset,
                kind=token.text.lower(),
            )
            # the namespace only applies to the first declaration after it
            namespace = ''
            i += 3
            continue

        i += 1


def extract_symbols(source: str,
                    keywords: Iterable[str] = DECLARATION_KEYWORDS) -> Iterator[Declaration]:
    """
    Yield the symbols declared in one source file.

    Source that cannot be tokenized yields nothing.
    """
    try:
        tokens = tokenize(source)
    except TokenizeError as e:
        logger.debug(f"Skipping untokenizable source: {e}")
        return
    yield from iter_declarations(tokens, keywords)
