"""
JoSIM Netlists

Generating JoSIM sub-circuit decks from placed designs.
"""

__version__ = "0.1.0"

import warnings
from pathlib import Path

# Configure warning format to be more concise (single line, no source code repetition)
# This applies globally whenever the josim_netlist package is imported
def _warning_on_one_line(message, category, filename, lineno, file=None, line=None):
    return f'{Path(filename).name}:{lineno}: {category.__name__}: {message}\n'

warnings.formatwarning = _warning_on_one_line


from .data import *
from .write import *
