"""Message template formatting for the logging facade.

Templates use positional replacement fields (``"{0} of {1}"``). A format
provider controls how each substituted value is rendered, which is how
culture-specific number formatting is applied.
"""

import string
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

from .core.exceptions import FormatError


class FormatProvider(Protocol):
    """Renders a single substituted value."""

    def format_value(self, value: Any, format_spec: str) -> str: ...


@dataclass(frozen=True)
class Culture:
    """Number formatting conventions for a locale.

    Numbers are rendered with Python's format mini-language and the decimal
    and group separators are then swapped for the culture's own.
    """

    name: str
    decimal_separator: str = "."
    group_separator: str = ","

    def format_value(self, value: Any, format_spec: str) -> str:
        rendered = format(value, format_spec)
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return rendered
        if (self.decimal_separator, self.group_separator) == (".", ","):
            return rendered

        # Placeholder keeps the two replacements from clobbering each other.
        return (
            rendered.replace(",", "\0")
            .replace(".", self.decimal_separator)
            .replace("\0", self.group_separator)
        )


INVARIANT_CULTURE = Culture("invariant")


class _ProviderFormatter(string.Formatter):
    def __init__(self, provider: FormatProvider):
        super().__init__()
        self._provider = provider

    def parse(self, format_string):
        # Only explicit argument indices: no "{}", "{name}", "{0.attr}" or "{0[key]}".
        for literal_text, field_name, format_spec, conversion in super().parse(format_string):
            if field_name is not None and not (field_name.isascii() and field_name.isdigit()):
                raise ValueError(f"replacement field {{{field_name}}} is not an argument index")
            yield literal_text, field_name, format_spec, conversion

    def format_field(self, value: Any, format_spec: str) -> str:
        return self._provider.format_value(value, format_spec)


def format_message(template: Any, *args: Any, provider: FormatProvider | None = None) -> str:
    """Substitute positional arguments into a message template.

    With no arguments and no provider the template is returned unchanged, so
    ``"{0}"`` and ``"{{"`` pass through as literal text. With a provider but
    no arguments the template itself is the value, rendered as ``"{0}"``
    would render it.

    Replacement fields must be explicit argument indices such as ``{0}`` or
    ``{1:.2f}``; automatic numbering, names and attribute or item lookups
    are rejected.

    Args:
        template: Message template, or the value to render when no arguments
            are given; non-string values are converted with ``str``
        *args: Positional arguments for the replacement fields
        provider: Optional format provider; defaults to the invariant culture

    Returns:
        The formatted message

    Raises:
        FormatError: If the template references an argument that was not
            supplied or is otherwise malformed
    """
    if not args:
        if provider is not None:
            return format_message("{0}", template, provider=provider)
        return template if isinstance(template, str) else str(template)

    text = template if isinstance(template, str) else str(template)
    formatter = _ProviderFormatter(provider or INVARIANT_CULTURE)
    try:
        return formatter.vformat(text, args, {})
    except (IndexError, KeyError, ValueError, AttributeError, TypeError) as e:
        raise FormatError(
            f"Cannot format message {text!r} with {len(args)} argument(s): {e}",
            template=text,
            arg_count=len(args),
        ) from e


def format_value(value: Any, provider: FormatProvider | None = None) -> str:
    """Render a single value the way a ``"{0}"`` template would."""
    return format_message("{0}", value, provider=provider)
