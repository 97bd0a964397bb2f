"""
Base Netlister Class and Error Modes
"""

import os
from enum import Enum
from typing import IO, List, Optional, Tuple, Union
from warnings import warn

from ..data import Subckt, IoError


class ErrorMode(Enum):
    """Error Handling Modes"""

    RAISE = "raise"  # Raise an exception on error
    WARN = "warn"  # Print a warning and continue
    IGNORE = "ignore"  # Ignore errors and continue
    STORE = "store"  # Store errors in a list


class Netlister:
    """
    # Abstract Base `Netlister` Class

    Writes a `Subckt` to the file at `dest`.
    Sub-classes implement `netlist`, using `open_dest` to (re-)open the destination
    and `write`/`writeln` to emit text into it.
    """

    def __init__(
        self,
        src: Subckt,
        dest: Union[str, os.PathLike],
        *,
        errormode: ErrorMode = ErrorMode.WARN,
    ) -> None:
        self.src = src
        self.dest = dest
        self.errormode = errormode
        self.errors = []
        self._warnings = []  # List of (message, context) tuples for log file
        self._stream: Optional[IO] = None

    def netlist(self) -> None:
        """Netlist the `Subckt` to the destination file"""
        raise NotImplementedError

    def open_dest(self, mode: str, **kwargs) -> IO:
        """Open the destination file in `mode`, raising `IoError` on failure."""
        try:
            return open(self.dest, mode, **kwargs)
        except OSError as e:
            raise IoError(e.errno, f'Could not create "{self.dest}": {e.strerror}', str(self.dest)) from e

    def write(self, s: str) -> None:
        """Write string `s` to the destination stream"""
        self._stream.write(s)

    def writeln(self, s: str) -> None:
        """Write string `s` plus a newline to the destination stream"""
        self.write(s + "\n")

    def handle_error(self, obj: object, msg: str) -> None:
        """Handle an error, based on the `ErrorMode`"""
        if self.errormode == ErrorMode.RAISE:
            raise IoError(f"{msg} in {obj}")
        if self.errormode == ErrorMode.WARN:
            self.log_warning(msg, context=str(obj))
        if self.errormode == ErrorMode.STORE:
            self.errors.append((obj, msg))
            self._warnings.append((msg, str(obj)))

    def log_warning(self, message: str, context: Optional[str] = None) -> None:
        """Log a warning message for inclusion in the warning log file.

        Args:
            message: The warning message
            context: Optional context information (e.g., the offending file path)
        """
        self._warnings.append((message, context))
        if context:
            warn(f"{message} (Context: {context})")
        else:
            warn(message)

    def get_warnings(self) -> List[Tuple[str, Optional[str]]]:
        """Get all collected warnings.

        Returns:
            List of (message, context) tuples
        """
        return self._warnings.copy()
