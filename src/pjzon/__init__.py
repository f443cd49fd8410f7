"""
Partial JSON parsing for streamed and truncated documents.

Parses text that may stop anywhere inside a JSON document, such as the
incremental output of a streaming text-generation API, and returns the value
that the available prefix determines. Complete documents are handed to the
standard library json decoder and come back exactly as it decodes them.
"""

import json
import logging
import os
import re
import time
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO
from typing import Any

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)
Position = int

# Called with (original text, parsed value, leftover text)
ExtraTokenHook = Callable[[str, JsonValue, str], None] | None

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "PJZON_PROFILE" in os.environ

_WHITESPACE = " \t\n\r"
_DIGITS = "0123456789"

# A truncated string made of nothing but the start of an escape
_INCOMPLETE_ESCAPE = re.compile(r"\\(?:u[0-9a-fA-F]{0,3})?")


@dataclass
class HotPathStats:
    """
    Counters for one kind of sub-parser, collected while profiling is on.

    truncated_count tracks how often the input ran out inside this kind of
    value, which is what separates partial parses from complete ones.
    """

    kind: str
    call_count: int = 0
    truncated_count: int = 0
    total_time_ns: int = 0
    chars_seen: int = 0

    def record(self, duration_ns: int, chars: int, truncated: bool) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_seen += chars
        if truncated:
            self.truncated_count += 1


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Times one sub-parser call; set truncated when input runs out."""

        def __init__(self, kind: str, chars: int = 0) -> None:
            self.kind = kind
            self.chars = chars
            self.truncated = False
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.setdefault(
                self.kind, HotPathStats(self.kind)
            )
            stats.record(duration, self.chars, self.truncated)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the counters, keyed by sub-parser kind."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, kind: str, chars: int = 0) -> None:
            self.truncated = False

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class JSONDecodeError(ValueError):
    """
    Reports input that cannot be parsed even as a truncated document.

    Raised for genuine syntax errors only: an unknown leading character, an
    object member without its colon, a malformed escape in a complete string
    or an unconvertible number. Running out of input is never reported
    through this error.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures partial parsing behavior with immutable settings.

    strict decodes escapes in strings through the json decoder and drops a
    truncated string whose escapes cannot be resolved; non-strict returns
    string contents raw. on_extra_token is called when text is left over after
    the top-level value. strict_literals makes the keyword lexers check the
    whole keyword instead of trusting its first character.
    """

    strict: bool = True
    on_extra_token: ExtraTokenHook = None
    strict_literals: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")
        if not isinstance(self.strict_literals, bool):
            raise TypeError("strict_literals must be a boolean")
        if self.on_extra_token is not None and not callable(
            self.on_extra_token
        ):
            raise TypeError("on_extra_token must be callable")


@dataclass(frozen=True)
class ParseResult:
    """Value produced by one parsing step and the input it left unconsumed."""

    value: JsonValue
    remaining: str


@dataclass(frozen=True)
class PartialResult:
    """
    Outcome of a top-level partial parse.

    Carries the original text next to the value and the leftover suffix, so
    callers can inspect extra tokens without registering a hook.
    """

    text: str
    value: JsonValue
    remaining: str = ""

    @property
    def extra_token(self) -> tuple[str, JsonValue, str] | None:
        """The (text, value, remaining) triple a hook would receive, if any."""
        if not self.remaining:
            return None
        return self.text, self.value, self.remaining


def _find_closing_quote(s: str) -> int:
    """Returns the index of the first unescaped quote after s[0], or -1."""
    end = s.find('"', 1)
    while end != -1:
        backslashes = 0
        while s[end - 1 - backslashes] == "\\":
            backslashes += 1
        if backslashes % 2 == 0:
            return end
        end = s.find('"', end + 1)
    return -1


def _skip_digits(s: str, i: int) -> int:
    while i < len(s) and s[i] in _DIGITS:
        i += 1
    return i


def _key_text(key: JsonValue) -> str:
    """Member name for a parsed key; non-string tokens keep their JSON text."""
    return key if isinstance(key, str) else json.dumps(key)


def _number_value(
    lexeme: str, has_point: bool, has_exponent: bool, doc: str, pos: Position
) -> int | float:
    """Converts a lexed number, reading a trailing decimal point as an int."""
    try:
        if lexeme.endswith(".") and not has_exponent:
            return int(lexeme[:-1])
        if has_point or has_exponent:
            return float(lexeme)
        return int(lexeme)
    except ValueError as e:
        # Python's int conversion limit
        if "Exceeds the limit" in str(e):
            raise JSONDecodeError("Number too large", doc, pos) from e
        raise JSONDecodeError("Invalid number", doc, pos) from e


class PartialParser:
    """
    Recursive descent parser for possibly truncated JSON text.

    Every step takes the remaining input, consumes a prefix of it and returns
    a ParseResult with the value and the unconsumed suffix. Running out of
    input closes whatever is open with the content read so far; only genuine
    syntax errors raise JSONDecodeError.

    An instance remembers the leftover text of its last top-level call and
    holds a reassignable hook, so it must not be shared between threads.
    """

    def __init__(
        self, config: ParseConfig | None = None, **kwargs: Any
    ) -> None:
        if config is None:
            config = ParseConfig(**kwargs)
        elif kwargs:
            raise TypeError("pass a ParseConfig or keyword options, not both")

        self.config = config
        self.on_extra_token: ExtraTokenHook = config.on_extra_token
        self._last_parse_remaining = ""

    @property
    def last_parse_remaining(self) -> str:
        """Unconsumed text left by the most recent top-level parse."""
        return self._last_parse_remaining

    def parse(self, s: str) -> JsonValue:
        """
        Parses a possibly incomplete document and returns its value.

        Calls on_extra_token once when text is left after the top-level value.
        """
        result = self.parse_partial(s)
        if self.on_extra_token is not None and result.remaining:
            self.on_extra_token(s, result.value, result.remaining)
        return result.value

    def parse_partial(self, s: str) -> PartialResult:
        """Parses like parse(), returning leftover text instead of calling the hook."""
        if not isinstance(s, str):
            raise TypeError(
                f"the JSON object must be str, not {type(s).__name__}"
            )

        self._last_parse_remaining = ""
        if not s:
            return PartialResult(s, {})

        with ProfileContext("document", len(s)) as profile:
            try:
                value = json.loads(s)
            except json.JSONDecodeError as e:
                error = e
            except ValueError as e:
                # int() digit limit, raised outside the decoder's error type
                error = json.JSONDecodeError(str(e), s, 0)
            else:
                return PartialResult(s, value)

            profile.truncated = True
            logger.debug(
                "Full decode failed (%s), parsing as partial input", error.msg
            )
            result = self._parse_any(s, error)

        if result.remaining:
            logger.debug(
                "Partial parse left %d unconsumed characters",
                len(result.remaining),
            )
        self._last_parse_remaining = result.remaining
        return PartialResult(s, result.value, result.remaining)

    @staticmethod
    def _decode_error(error: json.JSONDecodeError) -> JSONDecodeError:
        """Turns the full decoder's failure into the error raised to callers."""
        return JSONDecodeError(error.msg, error.doc, error.pos)

    def _parse_any(self, s: str, error: json.JSONDecodeError) -> ParseResult:
        """Routes to the sub-parser selected by the first character of s."""
        if not s:
            raise self._decode_error(error) from error

        char = s[0]
        if char in _WHITESPACE:
            return self._parse_any(s.lstrip(_WHITESPACE), error)
        elif char == "[":
            return self._parse_array(s, error)
        elif char == "{":
            return self._parse_object(s, error)
        elif char == '"':
            return self._parse_string(s, error)
        elif char in "tT":
            return self._parse_literal(s, "true", True, error)
        elif char in "fF":
            return self._parse_literal(s, "false", False, error)
        elif char == "n":
            return self._parse_literal(s, "null", None, error)
        elif char in _DIGITS or char in "-.":
            return self._parse_number(s, error)
        else:
            raise self._decode_error(error) from error

    def _parse_array(self, s: str, error: json.JSONDecodeError) -> ParseResult:
        """
        Parses an array, ending it quietly if the input runs out.

        Elements are read one after another; a comma between two of them is
        consumed when present.
        """
        with ProfileContext("array", len(s)) as profile:
            s = s[1:].lstrip(_WHITESPACE)
            values: list[JsonValue] = []

            while s:
                if s[0] == "]":
                    return ParseResult(values, s[1:])

                element = self._parse_any(s, error)
                values.append(element.value)

                s = element.remaining.lstrip(_WHITESPACE)
                if s.startswith(","):
                    s = s[1:].lstrip(_WHITESPACE)

            profile.truncated = True
            return ParseResult(values, s)

    def _parse_object(self, s: str, error: json.JSONDecodeError) -> ParseResult:
        """
        Parses an object, ending it quietly if the input runs out.

        A key whose colon or value never arrived is kept with a None value.
        A bare key ends the object without consuming a following "}", and so
        does a member value followed by anything but "," or "}".
        """
        with ProfileContext("object", len(s)) as profile:
            s = s[1:].lstrip(_WHITESPACE)
            members: dict[str, JsonValue] = {}

            while s:
                if s[0] == "}":
                    return ParseResult(members, s[1:])

                key = self._parse_any(s, error)
                name = _key_text(key.value)

                s = key.remaining.lstrip(_WHITESPACE)
                if not s or s[0] == "}":
                    members[name] = None
                    profile.truncated = not s
                    return ParseResult(members, s)

                if s[0] != ":":
                    raise self._decode_error(error) from error

                s = s[1:].lstrip(_WHITESPACE)
                if not s or s[0] in ",}":
                    members[name] = None
                    if s.startswith(","):
                        s = s[1:].lstrip(_WHITESPACE)
                    continue

                member = self._parse_any(s, error)
                members[name] = member.value

                s = member.remaining.lstrip(_WHITESPACE)
                if s.startswith(","):
                    s = s[1:].lstrip(_WHITESPACE)
                elif s and s[0] != "}":
                    return ParseResult(members, s)

            profile.truncated = True
            return ParseResult(members, s)

    def _parse_string(self, s: str, error: json.JSONDecodeError) -> ParseResult:
        """Parses a string; a truncated string always consumes the rest of s."""
        with ProfileContext("string", len(s)) as profile:
            end = _find_closing_quote(s)
            if end == -1:
                profile.truncated = True
                return ParseResult(self._truncated_string(s[1:]), "")

            if not self.config.strict:
                return ParseResult(s[1:end], s[end + 1 :])

            try:
                value = json.loads(s[: end + 1])
            except json.JSONDecodeError:
                raise self._decode_error(error) from error
            return ParseResult(value, s[end + 1 :])

    def _truncated_string(self, content: str) -> str:
        """Value of a string whose closing quote has not arrived yet."""
        if not self.config.strict:
            return content

        if _INCOMPLETE_ESCAPE.fullmatch(content):
            return ""

        try:
            return json.loads(f'"{content}"')
        except json.JSONDecodeError:
            # An unresolved escape drops the whole string, not just its tail
            return ""

    def _parse_number(self, s: str, error: json.JSONDecodeError) -> ParseResult:
        """
        Lexes the longest number prefix of s and converts it.

        A lone "-" or "." is returned as a string until more input arrives.
        A number cut off inside its exponent keeps the mantissa as a float,
        and a trailing decimal point yields the integer part.
        """
        with ProfileContext("number", len(s)) as profile:
            i = 1 if s.startswith("-") else 0
            i = _skip_digits(s, i)

            has_point = False
            if i < len(s) and s[i] == ".":
                has_point = True
                i = _skip_digits(s, i + 1)

            exponent = -1
            if i < len(s) and s[i] in "eE":
                exponent = i
                i += 1
                if i < len(s) and s[i] in "+-":
                    i += 1
                i = _skip_digits(s, i)

            lexeme, rest = s[:i], s[i:]
            profile.truncated = not rest
            if exponent != -1 and not rest and lexeme[-1] in "eE+-":
                lexeme = lexeme[:exponent]

            if lexeme in ("", "-", "."):
                return ParseResult(lexeme, "")

            pos = len(error.doc) - len(s)
            value = _number_value(
                lexeme, has_point, exponent != -1, error.doc, pos
            )
            return ParseResult(value, rest)

    def _parse_literal(
        self,
        s: str,
        keyword: str,
        value: JsonValue,
        error: json.JSONDecodeError,
    ) -> ParseResult:
        """
        Parses true, false or null from its first character.

        Without strict_literals the characters after the first are consumed
        unchecked, and a shorter input is taken as the truncated keyword.
        """
        with ProfileContext(keyword, len(s)) as profile:
            if self.config.strict_literals and not keyword.startswith(
                s[: len(keyword)]
            ):
                raise self._decode_error(error) from error

            if len(s) < len(keyword):
                profile.truncated = True
                return ParseResult(value, "")
            return ParseResult(value, s[len(keyword) :])


def loads(s: str, **kwargs: Any) -> JsonValue:
    """
    Parses a possibly truncated JSON string into Python objects.

    Keyword arguments are ParseConfig options.
    """
    return PartialParser(**kwargs).parse(s)


def loads_partial(s: str, **kwargs: Any) -> PartialResult:
    """Parses s and returns the value together with any leftover text."""
    return PartialParser(**kwargs).parse_partial(s)


def load(fp: IO[str], **kwargs: Any) -> JsonValue:
    """
    Parses the possibly truncated JSON held by a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


def iter_loads(chunks: Iterable[str], **kwargs: Any) -> Iterator[JsonValue]:
    """
    Yields the value of the accumulated text after each streamed chunk.

    One parser serves the whole stream, so on_extra_token and
    last_parse_remaining behave as for repeated parse() calls.
    """
    parser = PartialParser(**kwargs)
    buffer = ""
    for chunk in chunks:
        buffer += chunk
        yield parser.parse(buffer)


__all__ = [
    "ExtraTokenHook",
    "HotPathStats",
    "JSONDecodeError",
    "JsonValue",
    "ParseConfig",
    "ParseResult",
    "PartialParser",
    "PartialResult",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "iter_loads",
    "load",
    "loads",
    "loads_partial",
]
