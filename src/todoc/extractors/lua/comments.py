"""
Comment associator.

Finds the comment block that documents a declaration: the maximal run of
comment tokens directly above the declaration's first token, with nothing
but whitespace between them. Any code token ends the run, so a comment
group separated from the declaration by code is never associated.
"""

from todoc.models import CommentBlock, FunctionDeclaration, Token, TokenKind


def associate_comment(
    tokens: list[Token], declaration: FunctionDeclaration | int
) -> CommentBlock | None:
    """Return the comment block immediately preceding a declaration.

    Walks backward from the declaration's first token over whitespace and
    comment tokens. Blank lines do not break contiguity; only a code token
    (or the start of the file) ends the walk. A comment that trails code on
    the same line (``x = 1 -- note``) belongs to that code and also ends the
    walk without being included.

    Args:
        tokens: Full token list of the file.
        declaration: Declaration, or the token index where it starts.

    Returns:
        CommentBlock with comments in source order, or None when no comment
        touches the declaration.

    Raises:
        No exceptions raised.

    Example:
        >>> block = associate_comment(tokens, declarations[0])
        >>> block.content_lines()[0].text
        ' @brief Adds two numbers'
    """
    start = declaration if isinstance(declaration, int) else declaration.start_token

    collected: list[int] = []
    i = start - 1
    while i >= 0:
        token = tokens[i]
        if token.kind is TokenKind.WHITESPACE:
            i -= 1
            continue
        if token.is_comment and not _trails_code(tokens, i):
            collected.append(i)
            i -= 1
            continue
        break

    if not collected:
        return None

    collected.reverse()
    return CommentBlock(
        tokens=tuple(tokens[k] for k in collected),
        first_token=collected[0],
        last_token=collected[-1],
    )


def _trails_code(tokens: list[Token], index: int) -> bool:
    """True when a code token precedes the comment at ``index`` on the same line."""
    j = index - 1
    while j >= 0:
        token = tokens[j]
        if token.kind is TokenKind.WHITESPACE or token.is_comment:
            if "\n" in token.text:
                return False
            j -= 1
            continue
        return token.kind is not TokenKind.SHEBANG
    return False
