"""
# JoSIM Format Netlisting

JoSIM reads Spice-style decks, tokenizing each line on whitespace.
A generated deck comprises:

* A short generated-file comment header.
* Any number of library netlists (typically the gate-cell sub-circuits), copied in verbatim.
* A single `.SUBCKT` holding the placed design: one `X` line per component instance,
  one `T` line per passive transmission line (PTL), closed by `.ends`.

Column alignment is irrelevant to JoSIM itself, but the fixed field widths used here
are kept so that generated decks diff cleanly against previously generated ones.
"""

# Std-Lib Imports
import os
import shutil
from datetime import datetime
from typing import Optional, Sequence, Tuple, Union

# Local Imports
from ..data import Subckt, Component, TransmissionLine
from .base import Netlister, ErrorMode


# Propagation delay per unit length of a PTL, in ps/nm
SPEED_CONSTANT = 1e-5

# Width of the `=` rules in section banners
HEADER_WIDTH = 74

COMPONENTS_LABEL = "Components"
PTL_LABEL = "Passive Transmission Lines"
ENDS = ".ends Created_subckt"


def _join_left(fields: Sequence[Tuple[str, int]]) -> str:
    """Left-justify each `(token, width)` field.
    A token filling its whole field is still followed by a space, unless it is the last."""
    out = ""
    for i, (tok, width) in enumerate(fields):
        out += f"{tok:<{width}}"
        if len(tok) >= width and i < len(fields) - 1:
            out += " "
    return out


def _join_right(fields: Sequence[Tuple[str, int]]) -> str:
    """Right-justify each `(token, width)` field.
    A token filling its whole field is still preceded by a space, unless it is the first."""
    out = ""
    for i, (tok, width) in enumerate(fields):
        if len(tok) >= width and i > 0:
            out += " "
        out += f"{tok:>{width}}"
    return out


def make_header(name: str) -> str:
    """Section banner, framed by blank lines and `=` rules.
    Padding each side is `(74 - len(name)) // 2 - 1`, so odd-length slack is dropped on both sides."""
    rule = "* " + "=" * HEADER_WIDTH
    pad = "=" * max((HEADER_WIDTH - len(name)) // 2 - 1, 0)
    return f"\n\n{rule}\n* {pad} {name} {pad}\n{rule}\n\n"


def make_file_header(
    tool_name: str = "josim_netlist",
    author: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> str:
    """Generated-file comment header"""
    if timestamp is None:
        timestamp = datetime.now()
    header = f"* JoSIM file generated with {tool_name}, {timestamp.ctime()}\n"
    if author:
        header += f"\n* {author}"
    return header + "\n\n"


def render_component(comp: Component) -> str:
    """`X<name> <type> <nets...>` in 20/20/7-character fields"""
    fields = [("X" + comp.name, 20), (comp.type_name, 20)]
    fields += [(net, 7) for net in comp.nets]
    return _join_left(fields)


def render_line(ptl: TransmissionLine, speed_constant: float = SPEED_CONSTANT) -> str:
    """`T<name> <net>A 0 <net>B 0  LOSSLESS Z0=5.00  TD=<delay>p`"""
    fields = [
        ("T" + ptl.name, 7),
        (ptl.net_a, 6),
        ("0", 4),
        (ptl.net_b, 6),
        ("0", 4),
    ]
    delay = ptl.delay(speed_constant)
    return _join_right(fields) + f"  LOSSLESS Z0=5.00  TD={delay:.2f}p"


def render_port_header(subckt: Subckt) -> str:
    """Pad-name comment line, then the `.SUBCKT` declaration with the pad nets"""
    designators = "".join("\t" + des for des in subckt.port_designators)
    nets = "".join("\t" + net for net in subckt.port_nets)
    return f"* {designators}\n.SUBCKT {subckt.name}{nets}"


class JosimNetlister(Netlister):
    """
    # JoSIM Netlister

    Writes the file header, appends each library file, then the sub-circuit.
    Writing is sequential and not atomic: a failure part-way leaves a partial file.
    """

    def __init__(
        self,
        src: Subckt,
        dest: Union[str, os.PathLike],
        *,
        errormode: ErrorMode = ErrorMode.WARN,
        speed_constant: float = SPEED_CONSTANT,
        tool_name: str = "josim_netlist",
        author: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> None:
        super().__init__(src, dest, errormode=errormode)
        self.speed_constant = speed_constant
        self.tool_name = tool_name
        self.author = author
        self.timestamp = timestamp

    def netlist(self) -> None:
        """Netlist the `Subckt` to the destination file"""
        print(f"Creating JoSIM file -> {self.dest}")
        with self.open_dest("w", newline="") as self._stream:
            self.write(make_file_header(self.tool_name, self.author, self.timestamp))

        if self.src.import_files:
            print("Importing:")
        for i, path in enumerate(self.src.import_files):
            print(f"  [{i}]: {path}")
            self.write_import(path)

        with self.open_dest("a", newline="") as self._stream:
            self.write_subckt_header()
            self.write_components()
            self.write_lines()
            self.writeln(ENDS)
        self._stream = None
        print(f"Creating JoSIM file: \"{self.dest}\" done.")

    def write_import(self, path: str) -> None:
        """Append the content of library file `path`, byte for byte."""
        try:
            src = open(path, "rb")
        except OSError as e:
            return self.handle_error(path, f'Could not open "{path}" for copying: {e.strerror}')

        with src, self.open_dest("ab") as dest:
            shutil.copyfileobj(src, dest)

    def write_header(self, name: str) -> None:
        self.writeln(make_header(name))

    def write_subckt_header(self) -> None:
        self.write_header(self.src.name)
        self.writeln(render_port_header(self.src))

    def write_components(self) -> None:
        self.write_header(COMPONENTS_LABEL)
        for comp in self.src.components:
            self.writeln(render_component(comp))

    def write_lines(self) -> None:
        self.write_header(PTL_LABEL)
        for ptl in self.src.lines:
            line = render_line(ptl, self.speed_constant)
            if ptl.length > 0 and line.endswith("TD=0.00p"):
                self.log_warning(
                    f"Delay of {ptl.length} nm line rounds to 0.00 ps", context=f"T{ptl.name}"
                )
            self.writeln(line)
