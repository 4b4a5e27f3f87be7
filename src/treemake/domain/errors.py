from __future__ import annotations

"""
Domain Error Taxonomy.

All failures raised by the generator derive from TreemakeError so that the
interface layer can map them to exit codes. Write failures are not wrapped:
the underlying OSError propagates unchanged.
"""


class TreemakeError(Exception):
    """Base class for generator errors."""


class NotDirectoryError(TreemakeError, NotADirectoryError):
    """
    Raised when a path asserted to be a directory is not one.

    Attributes:
        path: The offending path, as given by the caller.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} is not a subdirectory.")


class NotDescendantError(TreemakeError, ValueError):
    """
    Raised when a relative path is requested for a node outside the tree.

    Attributes:
        descendant_path: Canonical path of the purported descendant.
        root_path: Canonical path of the tree root.
    """

    def __init__(self, descendant_path: str, root_path: str):
        self.descendant_path = descendant_path
        self.root_path = root_path
        super().__init__(f"{descendant_path} is not a descendant of {root_path}.")


class UnindentError(TreemakeError, RuntimeError):
    """Raised when the formatter is unindented with no outstanding indent."""

    def __init__(self) -> None:
        super().__init__("Attempted unindent while there was no indentation")


class ConfigError(TreemakeError, ValueError):
    """Raised when a toolchain configuration file cannot be used."""
