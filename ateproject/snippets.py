"""Script snippets inserted by the project editor."""

from __future__ import annotations

from typing import Optional

OUTPUT_FUNCTION = "__ate.OutputRst"


def output_call(
    code: str,
    value: str,
    standard: str,
    value_is_expression: bool = False,
    standard_is_expression: bool = False,
    result: Optional[int] = None,
) -> str:
    """Build a call that reports one measured result.

    ``value`` and ``standard`` are quoted unless marked as expressions.
    Passing ``result`` selects the extended call with an explicit result index.
    """
    value_quote = "" if value_is_expression else '"'
    standard_quote = "" if standard_is_expression else '"'
    if result is None:
        opening = '("'
        tail = f"{standard_quote})"
    else:
        opening = 'Ex("'
        tail = f"{standard_quote}, {result})"
    return (
        f'{OUTPUT_FUNCTION}{opening}{code}", '
        f"{value_quote}{value}{value_quote}, "
        f"{standard_quote}{standard}{tail}"
    )