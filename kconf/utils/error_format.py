"""Safe error message formatting utilities.

Ensures exceptions always have useful display messages, even when
their str() representation is empty.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'

        >>> format_error_message(RuntimeError())
        'RuntimeError: (no additional details)'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    return f"{error_type}: (no additional details)"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Kubeconfig names and file paths may contain brackets that Rich would
    otherwise treat as markup tags.
    """
    return _escape_markup(str(value))
