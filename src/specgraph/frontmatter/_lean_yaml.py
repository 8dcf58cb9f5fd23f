"""Indentation-driven parser for the restricted YAML dialect used in headers.

The dialect covers what spec frontmatter actually needs: ``key: value``
mappings, scalars (strings, numbers, booleans, null), block lists, inline
``[a, b]`` lists, and nested mappings. Anything outside that set is rejected
rather than guessed at. Indentation must be a multiple of ``INDENT_STEP`` and
every sibling at a level must share the same column.
"""

import re
from dataclasses import dataclass
from typing import Final

import orjson

from specgraph.exceptions import IndentationParseError, ParseError

type StructuredScalar = str | int | float | bool | None
type StructuredValue = (
    StructuredScalar | list[StructuredValue] | dict[str, StructuredValue]
)
type StructuredMapping = dict[str, StructuredValue]

INDENT_STEP: Final = 2

_NUMBER_PATTERN: Final = re.compile(r"^[+-]?(0|[1-9]\d*)(\.\d+)?$")
_NULL_TOKENS: Final = frozenset({"~", "null"})
_TRUE_TOKENS: Final = frozenset({"true"})
_FALSE_TOKENS: Final = frozenset({"false"})


@dataclass(slots=True)
class _Line:
    number: int
    indent: int
    content: str
    raw: str

    @property
    def is_list_item(self) -> bool:
        return self.content == "-" or self.content.startswith("- ")


def _tokenize(text: str) -> list[_Line]:
    """Split text into significant lines, validating indentation columns."""
    lines: list[_Line] = []
    for number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue

        leading = raw[: len(raw) - len(raw.lstrip())]
        if "\t" in leading:
            msg = f"Invalid indentation on line {number}: tabs are not allowed"
            raise IndentationParseError(msg, line=number, line_content=raw)

        indent = len(leading)
        if indent % INDENT_STEP != 0:
            msg = (
                f"Invalid indentation on line {number}: expected a multiple of "
                f"{INDENT_STEP} spaces, found {indent}"
            )
            raise IndentationParseError(msg, line=number, line_content=raw)

        lines.append(_Line(number, indent, raw.rstrip()[indent:], raw))
    return lines


def _find_closing_quote(text: str, start: int) -> int:
    """Return the index of the quote closing the one at ``start``, or -1."""
    quote = text[start]
    index = start + 1
    while index < len(text):
        char = text[index]
        if quote == '"' and char == "\\":
            index += 2
            continue
        if char == quote:
            # '' is an escaped quote inside single-quoted strings
            if quote == "'" and text[index + 1 : index + 2] == "'":
                index += 2
                continue
            return index
        index += 1
    return -1


def _strip_comment(text: str) -> str:
    """Drop a trailing `` # comment`` from an unquoted value."""
    match = re.search(r"\s#", text)
    if match is None:
        return text
    return text[: match.start()].rstrip()


def _split_key_value(line: _Line) -> tuple[str, str] | None:
    """Split a mapping line into its key and raw value text.

    A colon ends the key only when followed by whitespace or the end of the
    line; colons inside a quoted key never do.

    Returns:
        ``(key, value)`` or None if the line holds no mapping separator.
    """
    content = line.content
    if content[:1] in {"'", '"'}:
        end = _find_closing_quote(content, 0)
        if end == -1:
            return None
        rest = content[end + 1 :].lstrip()
        if not (rest == ":" or rest.startswith(": ")):
            return None
        key = _parse_scalar(content[: end + 1], line=line)
        return str(key), rest[1:].strip()

    match = re.search(r":(\s|$)", content)
    if match is None:
        return None
    key = content[: match.start()].strip()
    if not key:
        return None
    return key, content[match.end() :].strip()


def _split_flow_items(body: str, line: _Line) -> list[str]:
    items: list[str] = []
    current: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char in {"'", '"'}:
            end = _find_closing_quote(body, index)
            if end == -1:
                msg = f"Unterminated quoted string on line {line.number}"
                raise ParseError(msg, line=line.number, line_content=line.raw)
            current.append(body[index : end + 1])
            index = end + 1
            continue
        if char == ",":
            items.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1
    items.append("".join(current).strip())

    if items == [""]:
        return []
    if any(item == "" for item in items):
        msg = f"Empty item in inline list on line {line.number}"
        raise ParseError(msg, line=line.number, line_content=line.raw)
    return items


def _parse_scalar(text: str, *, line: _Line) -> StructuredValue:
    """Interpret a single value token.

    Args:
        text: The raw value text, already stripped of surrounding whitespace.
        line: The source line, used for error context.

    Returns:
        The typed value. Unquoted text that is not null, a boolean, or a
        number stays a string.

    Raises:
        ParseError: If a quoted string is unterminated or malformed.
    """
    number = line.number
    raw = line.raw

    if text[:1] in {"'", '"'}:
        end = _find_closing_quote(text, 0)
        if end != len(text) - 1:
            trailing = text[end + 1 :].strip() if end != -1 else ""
            if end == -1 or (trailing and not trailing.startswith("#")):
                msg = f"Unterminated quoted string on line {number}"
                raise ParseError(msg, line=number, line_content=raw)
            text = text[: end + 1]
        if text[0] == "'":
            return text[1:-1].replace("''", "'")
        try:
            return str(orjson.loads(text))
        except orjson.JSONDecodeError as e:
            msg = f"Invalid escape in quoted string on line {number}"
            raise ParseError(msg, line=number, line_content=raw) from e

    value = _strip_comment(text)
    if value.startswith("[") and value.endswith("]"):
        items = _split_flow_items(value[1:-1], line)
        return [_parse_scalar(item, line=line) for item in items]
    if value == "{}":
        return {}

    lowered = value.lower()
    if lowered in _NULL_TOKENS or not value:
        return None
    if lowered in _TRUE_TOKENS:
        return True
    if lowered in _FALSE_TOKENS:
        return False
    if _NUMBER_PATTERN.match(value):
        return float(value) if "." in value else int(value)
    return value


class StructuredTextParser:
    """Recursive-descent parser keyed on indentation depth.

    Instances are single-use: create one per text, or call
    :func:`parse_structured_text`.
    """

    def __init__(self, text: str) -> None:
        self._lines: list[_Line] = _tokenize(text)
        self._position: int = 0

    def parse(self) -> StructuredMapping:
        """Parse the whole text into a mapping.

        Returns:
            The parsed mapping. Empty or comment-only input, and plain prose
            with no key on any line, yields ``{}``.

        Raises:
            IndentationParseError: If a line is indented inconsistently.
            ParseError: If a line is not valid in this dialect.
        """
        if not self._lines:
            return {}
        if not any(line.is_list_item or _split_key_value(line) for line in self._lines):
            return {}

        first = self._lines[0]
        if first.indent != 0:
            msg = f"Invalid indentation on line {first.number}: top-level keys must not be indented"
            raise IndentationParseError(msg, line=first.number, line_content=first.raw)
        if first.is_list_item:
            msg = f"Expected a key on line {first.number}, found a list item"
            raise ParseError(msg, line=first.number, line_content=first.raw)

        result = self._parse_mapping(0)
        if self._position < len(self._lines):
            line = self._lines[self._position]
            msg = f"Unable to parse near line {line.number}"
            raise ParseError(msg, line=line.number, line_content=line.raw)
        return result

    def _peek(self) -> _Line | None:
        if self._position < len(self._lines):
            return self._lines[self._position]
        return None

    def _unexpected_indent(self, line: _Line) -> IndentationParseError:
        msg = f"Invalid indentation on line {line.number}: unexpected indent of {line.indent}"
        return IndentationParseError(msg, line=line.number, line_content=line.raw)

    def _parse_block(self, indent: int) -> StructuredValue:
        line = self._peek()
        assert line is not None
        if line.is_list_item:
            return self._parse_list(indent)
        return self._parse_mapping(indent)

    def _parse_nested(self, parent_indent: int, *, allow_compact_list: bool) -> StructuredValue:
        """Parse the block under a key or list item that had no inline value."""
        line = self._peek()
        if line is None or line.indent < parent_indent:
            return None
        if line.indent == parent_indent:
            # A list may sit at the key's own column ("compact" sequences)
            if allow_compact_list and line.is_list_item:
                return self._parse_list(parent_indent)
            return None
        if line.indent != parent_indent + INDENT_STEP:
            raise self._unexpected_indent(line)
        return self._parse_block(line.indent)

    def _parse_mapping(self, indent: int) -> StructuredMapping:
        result: StructuredMapping = {}
        while (line := self._peek()) is not None:
            if line.indent < indent:
                break
            if line.indent > indent:
                raise self._unexpected_indent(line)
            if line.is_list_item:
                if result and indent == 0:
                    msg = f"Expected a key on line {line.number}, found a list item"
                    raise ParseError(msg, line=line.number, line_content=line.raw)
                break

            pair = _split_key_value(line)
            if pair is None:
                msg = f"Expected ':' in mapping on line {line.number}"
                raise ParseError(msg, line=line.number, line_content=line.raw)
            key, value_text = pair
            if key in result:
                msg = f"Duplicate key '{key}' on line {line.number}"
                raise ParseError(msg, line=line.number, line_content=line.raw)

            self._position += 1
            if value_text:
                result[key] = _parse_scalar(value_text, line=line)
                following = self._peek()
                if following is not None and following.indent > indent:
                    raise self._unexpected_indent(following)
            else:
                result[key] = self._parse_nested(indent, allow_compact_list=True)
        return result

    def _parse_list(self, indent: int) -> list[StructuredValue]:
        items: list[StructuredValue] = []
        while (line := self._peek()) is not None:
            if line.indent < indent:
                break
            if line.indent > indent:
                raise self._unexpected_indent(line)
            if not line.is_list_item:
                break

            item_text = line.content[1:].strip()
            if not item_text:
                self._position += 1
                items.append(self._parse_nested(indent, allow_compact_list=False))
                continue

            probe = _Line(line.number, indent + INDENT_STEP, item_text, line.raw)
            if not item_text.startswith(("[", "'", '"')) and _split_key_value(probe):
                # "- key: value" opens a mapping aligned after the dash
                self._lines[self._position] = probe
                items.append(self._parse_mapping(indent + INDENT_STEP))
                continue

            self._position += 1
            items.append(_parse_scalar(item_text, line=line))
            following = self._peek()
            if following is not None and following.indent > indent:
                raise self._unexpected_indent(following)
        return items


def parse_structured_text(text: str) -> StructuredMapping:
    """Parse a restricted-YAML block into a mapping.

    Args:
        text: The header block, without ``---`` delimiters.

    Returns:
        The parsed mapping; ``{}`` for empty input.

    Raises:
        IndentationParseError: If list items or keys are indented
            inconsistently.
        ParseError: For any other malformed line.

    Example:
        >>> parse_structured_text("status: planned\\ntags:\\n  - api\\n")
        {'status': 'planned', 'tags': ['api']}
    """
    return StructuredTextParser(text).parse()
