"""Pattern compilation: ``Label(body)`` splitting, tokenising and regex building.

Grammar of a pattern body::

    body     := (literal | "*" | "**")*
    "*"      -> any run of characters except "/"
    "**"     -> any run of characters, "/" included

Three or more consecutive stars are rejected as ambiguous.

``*`` stops at every ``/``, including slashes inside command arguments.
A deny rule such as ``Bash(*--force*)`` therefore misses
``git push origin/main --force``; deny rules meant to cover whole command
lines should use ``**`` (``Bash(**--force**)``).
"""

from __future__ import annotations

import re

from permgate.errors import InvalidPatternError
from permgate.matcher.models import ANY_LABEL, Pattern, Token, TokenKind

_OPENS_LABEL_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]*\(")
_STAR_RUN_RE = re.compile(r"\*+")

_SEGMENT_RE = "[^/]*"
_ANY_RE = ".*"


def _closing_paren(source: str, open_at: int) -> int | None:
    """Index of the ``)`` balancing the ``(`` at *open_at*, if there is one."""
    depth = 0
    for i in range(open_at, len(source)):
        if source[i] == "(":
            depth += 1
        elif source[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return None


def split_label(source: str) -> tuple[str, str]:
    """Split ``Label(body)`` into ``(label, body)``.

    The wrapper counts only when the parenthesis after the label closes at
    the very end.  Anything else gets :data:`ANY_LABEL` and is returned
    whole, so ``file(1).txt`` stays a plain literal.

    Raises:
        InvalidPatternError: If the parenthesis after a label is never
            closed.
    """
    opened = _OPENS_LABEL_RE.match(source)
    if opened is None:
        return ANY_LABEL, source
    open_at = opened.end() - 1
    close_at = _closing_paren(source, open_at)
    if close_at is None:
        raise InvalidPatternError(source, "unbalanced parentheses in label wrapper")
    if close_at == len(source) - 1:
        return source[:open_at], source[open_at + 1 : close_at]
    return ANY_LABEL, source


def tokenize(body: str) -> tuple[Token, ...]:
    """Split *body* into literal, ``*`` and ``**`` tokens."""
    tokens: list[Token] = []
    pos = 0
    for m in _STAR_RUN_RE.finditer(body):
        if m.start() > pos:
            tokens.append(Token(TokenKind.LITERAL, body[pos : m.start()]))
        run = m.group()
        if len(run) > 2:
            raise InvalidPatternError(body, f"ambiguous wildcard {run!r} at offset {m.start()}")
        kind = TokenKind.GLOBSTAR if len(run) == 2 else TokenKind.STAR
        tokens.append(Token(kind, run))
        pos = m.end()
    if pos < len(body):
        tokens.append(Token(TokenKind.LITERAL, body[pos:]))
    return tuple(tokens)


def to_regex(tokens: tuple[Token, ...]) -> re.Pattern[str]:
    parts: list[str] = []
    for token in tokens:
        if token.kind is TokenKind.LITERAL:
            parts.append(re.escape(token.text))
        elif token.kind is TokenKind.STAR:
            parts.append(_SEGMENT_RE)
        else:
            parts.append(_ANY_RE)
    return re.compile("".join(parts), re.DOTALL)


def compile_pattern(source: object, *, allow_empty: bool = False) -> Pattern:
    """Compile one configured pattern string into a :class:`Pattern`.

    Raises:
        InvalidPatternError: If *source* is not a string, has an empty body
            while ``allow_empty`` is false, or is otherwise malformed.
    """
    if not isinstance(source, str):
        raise InvalidPatternError(source, f"expected a string, got {type(source).__name__}")

    label, body = split_label(source)
    if not body and not allow_empty:
        raise InvalidPatternError(source, "empty pattern")

    try:
        tokens = tokenize(body)
    except InvalidPatternError as exc:
        raise InvalidPatternError(source, exc.reason) from exc

    return Pattern(
        source=source,
        label=label,
        body=body,
        tokens=tokens,
        regex=to_regex(tokens),
    )
