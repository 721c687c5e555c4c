# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Java ``.properties`` file editing for moddeps.

This module reads and rewrites ``gradle.properties`` without disturbing the
parts of the file it does not change. Parsing follows
``java.util.Properties.load``:

- Natural lines end with ``\\n``, ``\\r`` or ``\\r\\n``
- Leading whitespace (space, tab, form feed) is ignored
- Blank lines and lines starting with ``#`` or ``!`` are comments
- A line ending in an odd number of backslashes continues on the next line;
  the continuation's leading whitespace is dropped
- The key ends at the first unescaped ``=``, ``:`` or whitespace; one
  separator surrounded by optional whitespace may follow
- Escapes: ``\\t \\n \\r \\f``, ``\\uXXXX``, and ``\\<char>`` for any other
  character
- When a key appears more than once the last occurrence wins

Writing Rules:

- Untouched entries, comments and blank lines keep their original text and
  line endings
- A changed entry is rewritten as ``key=value`` (Java escaping) at the
  position of its last occurrence
- New keys are appended at the end of the file

Files are read and written as ISO-8859-1, which is what Gradle uses for
``gradle.properties``; non-Latin-1 characters are written as ``\\uXXXX``.

Example:
    ```python
    from pathlib import Path
    from moddeps.state import PropertiesFile

    props = PropertiesFile.load(Path("gradle.properties"))
    props.get("minecraft_version")  # "1.20.1"
    props.set("minecraft_version", "1.20.4")
    props.save()
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
import string

from moddeps.exceptions import ConfigError

PROPERTIES_ENCODING = "iso-8859-1"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_NEWLINE = re.compile(r"(\r\n|\r|\n)")
_TERMINATOR = re.compile(r"(?:\r\n|\r|\n)\Z")
_LOAD_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SAVE_ESCAPES = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


@dataclass
class _Entry:
    """A run of natural lines (with terminators) and the key it defines."""

    text: str
    key: str | None = None


def _trailing_backslashes(line: str) -> int:
    return len(line) - len(line.rstrip("\\"))


def _unescape(text: str, line_number: int) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        c = text[i]
        i += 1
        if c != "\\":
            out.append(c)
            continue
        if i >= len(text):
            break
        c = text[i]
        i += 1
        if c == "u":
            digits = text[i : i + 4]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise ConfigError(
                    f"Malformed \\uxxxx encoding on line {line_number}: \\u{digits}"
                )
            out.append(chr(int(digits, 16)))
            i += 4
        else:
            out.append(_LOAD_ESCAPES.get(c, c))
    return "".join(out)


def _split_key_value(logical: str, line_number: int) -> tuple[str, str]:
    """Split a logical line into its unescaped key and value."""
    key_end = len(logical)
    value_start = len(logical)
    has_separator = False
    preceding_backslash = False
    for i, c in enumerate(logical):
        if preceding_backslash:
            preceding_backslash = False
        elif c == "\\":
            preceding_backslash = True
        elif c in _SEPARATORS or c in _WHITESPACE:
            key_end = i
            value_start = i + 1
            has_separator = c in _SEPARATORS
            break

    while value_start < len(logical):
        c = logical[value_start]
        if c not in _WHITESPACE:
            if has_separator or c not in _SEPARATORS:
                break
            has_separator = True
        value_start += 1

    return (
        _unescape(logical[:key_end], line_number),
        _unescape(logical[value_start:], line_number),
    )


def escape_text(text: str, *, is_key: bool) -> str:
    """Escape a key or value the way ``Properties.store`` does.

    Spaces are escaped everywhere in keys and only at the start of values.
    Characters outside printable ASCII become ``\\uXXXX``.
    """
    out: list[str] = []
    for i, c in enumerate(text):
        if c == " ":
            out.append("\\ " if is_key or i == 0 else " ")
        elif c in _SAVE_ESCAPES:
            out.append(_SAVE_ESCAPES[c])
        elif ord(c) < 0x20 or ord(c) > 0x7E:
            out.append(f"\\u{ord(c):04X}")
        else:
            out.append(c)
    return "".join(out)


def _parse_entries(text: str) -> tuple[list[_Entry], dict[str, str]]:
    pieces = _NEWLINE.split(text)
    lines = pieces[0::2]
    terminators = pieces[1::2] + [""]
    if lines and lines[-1] == "" and terminators[-1] == "":
        # Text ending with a newline leaves an empty tail, not a line
        lines.pop()
        terminators.pop()

    entries: list[_Entry] = []
    values: dict[str, str] = {}
    owner: dict[str, _Entry] = {}

    index = 0
    while index < len(lines):
        start = index
        natural = lines[index].lstrip(_WHITESPACE)
        index += 1
        if not natural or natural[0] in "#!":
            entries.append(_Entry(lines[start] + terminators[start]))
            continue

        logical = natural
        while _trailing_backslashes(natural) % 2 == 1:
            logical = logical[:-1]
            if index >= len(lines):
                break
            natural = lines[index].lstrip(_WHITESPACE)
            logical += natural
            index += 1

        raw = "".join(lines[i] + terminators[i] for i in range(start, index))
        if not logical:
            # Only whitespace and continuations: a blank line
            entries.append(_Entry(raw))
            continue
        key, value = _split_key_value(logical, start + 1)
        entry = _Entry(raw, key)
        if key in owner:
            owner[key].key = None
        owner[key] = entry
        values[key] = value
        entries.append(entry)

    return entries, values


class PropertiesFile:
    """An editable ``.properties`` document.

    Attributes:
        path: File the document was loaded from (None for in-memory text).

    Example:
        ```python
        props = PropertiesFile.loads("# build\\nmod_version = 1.0\\n")
        props.set("mod_version", "1.1")
        props.dumps()  # "# build\\nmod_version=1.1\\n"
        ```
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._entries: list[_Entry] = []
        self._original: dict[str, str] = {}
        self._values: dict[str, str] = {}

    @classmethod
    def loads(cls, text: str, path: Path | None = None) -> PropertiesFile:
        """Parse properties from text.

        Raises:
            ConfigError: On a malformed ``\\uXXXX`` escape.
        """
        props = cls(path)
        props._entries, props._original = _parse_entries(text)
        props._values = dict(props._original)
        return props

    @classmethod
    def load(cls, path: Path) -> PropertiesFile:
        """Read and parse a properties file.

        Raises:
            ConfigError: If the file does not exist or cannot be parsed.
        """
        if not path.exists():
            raise ConfigError(f"file not found: {path}")
        with path.open("r", encoding=PROPERTIES_ENCODING, newline="") as f:
            text = f.read()
        return cls.loads(text, path)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def keys(self) -> list[str]:
        return list(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def changed_keys(self) -> list[str]:
        """Keys whose value differs from the loaded text (new keys included)."""
        return [k for k, v in self._values.items() if self._original.get(k) != v]

    def dumps(self) -> str:
        """Render the document, rewriting only changed entries."""
        changed = set(self.changed_keys())
        parts: list[str] = []
        for entry in self._entries:
            if entry.key is None or entry.key not in changed:
                parts.append(entry.text)
                continue
            terminator = _TERMINATOR.search(entry.text)
            parts.append(
                self._render(entry.key) + (terminator.group(0) if terminator else "")
            )

        appended = [
            k for k in self._values if k in changed and k not in self._original
        ]
        if appended:
            text = "".join(parts)
            if text and not text.endswith(("\n", "\r")):
                parts.append("\n")
            parts.extend(self._render(k) + "\n" for k in appended)
        return "".join(parts)

    def _render(self, key: str) -> str:
        value = self._values[key]
        return f"{escape_text(key, is_key=True)}={escape_text(value, is_key=False)}"

    def save(self, path: Path | None = None) -> Path:
        """Write the document to ``path`` (default: the path it was loaded from).

        Returns:
            The path written.

        Raises:
            ValueError: If no path is given and the document has none.
        """
        target = path if path is not None else self.path
        if target is None:
            raise ValueError("No path to save properties to")
        with target.open("w", encoding=PROPERTIES_ENCODING, newline="") as f:
            f.write(self.dumps())
        return target


def load_properties(path: Path) -> PropertiesFile:
    """Load a properties file (shorthand for PropertiesFile.load)."""
    return PropertiesFile.load(path)


def save_properties(props: PropertiesFile, path: Path | None = None) -> Path:
    """Save a properties document (shorthand for PropertiesFile.save)."""
    return props.save(path)
