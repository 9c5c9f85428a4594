"""
Lua block matcher.

Pairs block-opening keywords with their terminators using only KEYWORD
tokens. Comments and literals are separate token kinds, so text such as
``-- end`` inside a comment can never change the nesting depth.

Openers and terminators:
    function / do / if  ... end
    repeat              ... until

``while``/``for`` loops open through their ``do`` keyword and ``then``,
``elseif`` and ``else`` stay inside the enclosing ``if`` span.
"""

from todoc.errors import UnbalancedBlock
from todoc.models import BlockSpan, Token, TokenKind

BLOCK_OPENERS = frozenset({"function", "do", "if", "repeat"})
BLOCK_TERMINATORS = {"end": frozenset({"function", "do", "if"}), "until": frozenset({"repeat"})}


def match_blocks(tokens: list[Token]) -> tuple[BlockSpan, ...]:
    """Build the tree of block spans for a token stream.

    Maintains a stack of open blocks; each opener pushes a frame and each
    terminator pops one, attaching the closed span to its parent frame
    (or to the top-level result).

    Args:
        tokens: Full token list from the tokenizer.

    Returns:
        Top-level block spans in source order, each holding its nested
        children.

    Raises:
        UnbalancedBlock: If input ends with open blocks, a terminator has no
            opener, or ``until``/``end`` closes the wrong kind of block.

    Example:
        >>> spans = match_blocks(tokenize("function A.sub1() -- end\\nend"))
        >>> len(spans)
        1
    """
    stack: list[tuple[int, list[BlockSpan]]] = []
    top_level: list[BlockSpan] = []

    for index, token in enumerate(tokens):
        if token.kind is not TokenKind.KEYWORD:
            continue

        if token.text in BLOCK_OPENERS:
            stack.append((index, []))
            continue

        accepted = BLOCK_TERMINATORS.get(token.text)
        if accepted is None:
            continue

        if not stack:
            raise UnbalancedBlock(f"'{token.text}' without matching block opener", token.position)

        opener_index, children = stack.pop()
        opener = tokens[opener_index]
        if opener.text not in accepted:
            raise UnbalancedBlock(
                f"'{token.text}' cannot close '{opener.text}' opened at line "
                f"{opener.position.line}",
                token.position,
            )

        span = BlockSpan(
            opener_index=opener_index,
            terminator_index=index,
            opener=opener,
            terminator=token,
            children=tuple(children),
        )
        if stack:
            stack[-1][1].append(span)
        else:
            top_level.append(span)

    if stack:
        opener = tokens[stack[-1][0]]
        raise UnbalancedBlock(
            f"'{opener.text}' block is never closed ({len(stack)} open at end of input)",
            opener.position,
        )

    return tuple(top_level)
