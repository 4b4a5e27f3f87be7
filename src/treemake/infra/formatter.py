from __future__ import annotations

"""
Makefile Text Formatter.

Line-oriented writer that tracks indentation across lines and renders the
make syntax used by the generator: variable assignments, variable
references, space-delimited lists and rule headers.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional, TextIO

from treemake.domain.errors import UnindentError

INDENT_CHAR = "\t"
LIST_DELIM = " "


# -----------------------------------------------------------------------------
# SYNTAX HELPERS
# -----------------------------------------------------------------------------

def use_var(name: str) -> str:
    """Return the expression dereferencing a make variable."""
    return f"$({name})"


def gen_list(elements: Iterable[str]) -> str:
    """Join elements with the list delimiter; empty input yields ''."""
    return LIST_DELIM.join(elements)


# -----------------------------------------------------------------------------
# FORMATTER
# -----------------------------------------------------------------------------

class MakeFormatter:
    """
    Indentation-aware sink for generated Makefile lines.

    Every non-empty line is prefixed with one tab per outstanding indent
    level. Empty lines are written bare.
    """

    def __init__(self, stream: TextIO, name: Optional[str] = None):
        self._stream = stream
        self._indentation = 0
        self.name = name or getattr(stream, "name", "<stream>")

    @classmethod
    def for_path(cls, path: str) -> "MakeFormatter":
        """
        Open a formatter writing to a file, truncating it.

        Raises:
            OSError: If the file cannot be created.
        """
        stream = open(path, "w", encoding="utf-8", newline="\n")
        return cls(stream, name=path)

    @property
    def indentation(self) -> int:
        return self._indentation

    # --- Context management ---

    def __enter__(self) -> "MakeFormatter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._stream.close()

    # --- Indentation ---

    def indent(self) -> None:
        self._indentation += 1

    def unindent(self) -> None:
        if self._indentation <= 0:
            raise UnindentError()
        self._indentation -= 1

    @contextmanager
    def indented(self) -> Iterator["MakeFormatter"]:
        """Scope one indentation level around a block of lines."""
        self.indent()
        try:
            yield self
        finally:
            self.unindent()

    # --- Writing ---

    def write_line(self, text: str = "") -> None:
        if text:
            self._stream.write(INDENT_CHAR * self._indentation + text)
        self._stream.write("\n")

    def assign_variable(self, name: str, value: str) -> None:
        self.write_line(f"{name}={value}")

    def write_rule_header(self, name: str, dependencies: Iterable[str] = ()) -> None:
        """Write 'name:' followed by the space-delimited dependencies, if any."""
        deps = gen_list(dependencies)
        if deps:
            self.write_line(f"{name}: {deps}")
        else:
            self.write_line(f"{name}:")
