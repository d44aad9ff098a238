"""
Typed token stream for PHP source.

tree-sitter-php does the lexing; the syntax tree is flattened back into its
leaves so the extractor can run a plain forward scan. Whitespace is not part
of the tree, so it is synthesized from the gaps between leaves.
"""

import logging
import re
from typing import Iterator, List

from tree_sitter import Language, Node, Parser
import tree_sitter_php

from .errors import TokenizeError
from .schema import Token, TokenKind


logger = logging.getLogger(__name__)

PHP_LANGUAGE = Language(tree_sitter_php.language_php())

# Nodes whose contents are never code, emitted as a single token
STRING_NODE_TYPES = {
    'string',
    'encapsed_string',
    'heredoc',
    'nowdoc',
    'shell_command_expression',
}
COMMENT_NODE_TYPES = {'comment'}
IDENTIFIER_NODE_TYPES = {'name'}

_KEYWORD_TYPE = re.compile(r'^[a-z_]+$')

_parser = None


def _get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(PHP_LANGUAGE)
    return _parser


def _classify(node: Node) -> TokenKind:
    if node.type in STRING_NODE_TYPES:
        return TokenKind.STRING
    if node.type in COMMENT_NODE_TYPES:
        return TokenKind.COMMENT
    if node.is_named:
        if node.type in IDENTIFIER_NODE_TYPES:
            return TokenKind.IDENTIFIER
        return TokenKind.OTHER
    if _KEYWORD_TYPE.match(node.type.lower()):
        return TokenKind.KEYWORD
    return TokenKind.OTHER


def _leaves(root: Node) -> Iterator[Node]:
    """Yield leaf nodes in source order, treating strings as leaves"""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.child_count == 0 or node.type in STRING_NODE_TYPES:
            yield node
        else:
            stack.extend(reversed(node.children))


def _gap_token(data: bytes, start: int, end: int) -> Token:
    text = data[start:end].decode('utf-8', errors='replace')
    kind = TokenKind.WHITESPACE if text.isspace() else TokenKind.OTHER
    return Token(kind, text, start)


def tokenize(source: str) -> List[Token]:
    """Split PHP source into typed tokens"""
    data = source.encode('utf-8', errors='replace')
    try:
        tree = _get_parser().parse(data)
        leaves = [leaf for leaf in _leaves(tree.root_node) if leaf.end_byte > leaf.start_byte]
    except ValueError as e:
        raise TokenizeError(f"Unable to tokenize source: {e}") from e

    tokens: List[Token] = []
    position = 0
    for leaf in leaves:
        if leaf.start_byte < position:
            # overlapping ranges only show up inside error recovery
            continue
        if leaf.start_byte > position:
            tokens.append(_gap_token(data, position, leaf.start_byte))
        text = data[leaf.start_byte:leaf.end_byte].decode('utf-8', errors='replace')
        tokens.append(Token(_classify(leaf), text, leaf.start_byte))
        position = leaf.end_byte

    if position < len(data):
        tokens.append(_gap_token(data, position, len(data)))

    if tree.root_node.has_error:
        logger.debug("Source contains syntax errors, tokens are best-effort")
    return tokens
