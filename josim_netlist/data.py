"""

# JoSIM Netlist Data Model

The in-memory model of a single generated sub-circuit:
its component instances, its passive transmission lines,
the library files to be pulled in ahead of it,
and the port list derived from its pad components.

"""

# Std-Lib Imports
from enum import Enum
from dataclasses import field
from typing import Iterable, List, Optional, Sequence, Tuple

# PyPi Imports
from pydantic import ValidationError
from pydantic.dataclasses import dataclass


class JosimNetlistError(Exception):
    """Base class for all errors raised by `josim_netlist`"""


class InvalidArgument(JosimNetlistError, ValueError):
    """Malformed registration input, e.g. an empty net list or a negative line length."""

    @staticmethod
    def throw(*args, **kwargs):
        """Exception-raising debug wrapper. Breakpoint to catch `InvalidArgument`s."""
        raise InvalidArgument(*args, **kwargs)


class IoError(JosimNetlistError, OSError):
    """Output file cannot be created or written, or an import source cannot be read."""


# Component type-name which marks an instance as a port of the enclosing sub-circuit
PAD_TYPE = "PAD"


class ComponentKind(Enum):
    """Enumerated Component Kinds
    Decided once, when the component is created, from its type-name."""

    PAD = "pad"  # Exposes its last net as a port of the sub-circuit
    INSTANCE = "instance"  # Any other primitive or sub-circuit instance

    @staticmethod
    def of(type_name: str) -> "ComponentKind":
        """Get the kind of a component with type-name `type_name`.
        Only the exact, case-sensitive `PAD` type-name makes a pad."""
        if type_name == PAD_TYPE:
            return ComponentKind.PAD
        return ComponentKind.INSTANCE


@dataclass(frozen=True)
class Component:
    """Component / Sub-Circuit Instance"""

    name: str  # Unique instance name, without the `X` prefix
    type_name: str  # Primitive type or sub-circuit name
    nets: Tuple[str, ...]  # Pin-ordered net names
    kind: Optional[ComponentKind] = None  # Derived from `type_name` when not given

    def __post_init__(self):
        if self.kind is None:
            object.__setattr__(self, "kind", ComponentKind.of(self.type_name))

    @property
    def port_net(self) -> Optional[str]:
        """The net exposed as a sub-circuit port, or `None` for non-pads."""
        if self.kind is ComponentKind.PAD:
            return self.nets[-1]
        return None

    def to_cir(self) -> str:
        """Render as a JoSIM instance line"""
        from .write.josim import render_component

        return render_component(self)


@dataclass(frozen=True)
class TransmissionLine:
    """Passive Transmission Line (PTL)
    Splits net `net_name` into the two endpoints `<net_name>A` and `<net_name>B`."""

    name: str  # Unique line name, without the `T` prefix
    net_name: str  # Base name of the split net
    length: int  # Physical length in nanometers

    @property
    def net_a(self) -> str:
        return self.net_name + "A"

    @property
    def net_b(self) -> str:
        return self.net_name + "B"

    def delay(self, speed_constant: float) -> float:
        """Propagation delay in picoseconds, for `speed_constant` in ps/nm."""
        return self.length * speed_constant

    def to_cir(self, speed_constant: Optional[float] = None) -> str:
        """Render as a JoSIM transmission-line line"""
        from .write.josim import render_line, SPEED_CONSTANT

        if speed_constant is None:
            speed_constant = SPEED_CONSTANT
        return render_line(self, speed_constant)


def _check_name(what: str, name: str) -> None:
    if not isinstance(name, str) or not name:
        InvalidArgument.throw(f"{what} must be a non-empty string, got {name!r}")


@dataclass
class Subckt:
    """# Sub-Circuit Model

    Built up by the `register_*` calls, in the order the upstream placement supplies them,
    then rendered by a `JosimNetlister`. Nothing is ever removed or reordered.
    """

    name: str  # Name under which the sub-circuit is emitted
    components: List[Component] = field(default_factory=list)
    lines: List[TransmissionLine] = field(default_factory=list)
    import_files: List[str] = field(default_factory=list)  # Library netlists, copied verbatim

    @classmethod
    def from_placement(
        cls,
        name: str,
        components: Iterable[Tuple[str, str, Sequence[str]]] = (),
        lines: Iterable[Tuple[str, str, int]] = (),
        imports: Iterable[str] = (),
    ) -> "Subckt":
        """Build a `Subckt` from the upstream placement tuples, registering each in order."""
        subckt = cls(name=name)
        for path in imports:
            subckt.register_import(path)
        for comp_name, type_name, nets in components:
            subckt.register_component(comp_name, type_name, nets)
        for line_name, net_name, length in lines:
            subckt.register_line(line_name, net_name, length)
        return subckt

    def register_import(self, path: str) -> None:
        """Add library file `path` to be copied in ahead of the sub-circuit.
        Duplicates are kept; existence is only checked when writing."""
        self.import_files.append(str(path))

    def register_component(self, name: str, type_name: str, nets: Sequence[str]) -> Component:
        """Add a component. A `PAD` type-name also adds its last net to the port list."""
        _check_name("Component name", name)
        _check_name("Component type", type_name)
        if isinstance(nets, str):
            InvalidArgument.throw(f"Component {name} nets must be a sequence of net names, got {nets!r}")
        nets = tuple(nets)
        if not nets:
            InvalidArgument.throw(f"Component {name} requires at least one net, got {nets!r}")

        try:
            comp = Component(
                name=name,
                type_name=type_name,
                nets=nets,
                kind=ComponentKind.of(type_name),
            )
        except ValidationError as e:
            raise InvalidArgument(f"Invalid component {name}: {e}") from e

        self.components.append(comp)
        return comp

    def register_line(self, name: str, net_name: str, length: int) -> TransmissionLine:
        """Add a passive transmission line of `length` nanometers."""
        _check_name("Transmission line name", name)
        _check_name("Transmission line net", net_name)
        if isinstance(length, bool) or not isinstance(length, int):
            InvalidArgument.throw(f"Transmission line {name} length must be an integer, got {length!r}")
        if length < 0:
            InvalidArgument.throw(f"Transmission line {name} length must be non-negative, got {length}")

        ptl = TransmissionLine(name=name, net_name=net_name, length=length)
        self.lines.append(ptl)
        return ptl

    # Names used by the placement-parsing stage
    import_cir = register_import
    push_comp = register_component
    push_ptl = register_line

    @property
    def pads(self) -> List[Component]:
        return [c for c in self.components if c.kind is ComponentKind.PAD]

    @property
    def port_nets(self) -> Tuple[str, ...]:
        """Sub-circuit port nets, in pad-registration order"""
        return tuple(p.port_net for p in self.pads)

    @property
    def port_designators(self) -> Tuple[str, ...]:
        """Pad names, parallel to `port_nets`"""
        return tuple(p.name for p in self.pads)

    def render_port_header(self) -> str:
        """The port comment line and `.SUBCKT` declaration line"""
        from .write.josim import render_port_header

        return render_port_header(self)

    def to_str(self) -> str:
        """Summary of the registered imports and components"""
        lines = ["Name of the files to be imported:"]
        lines += [f"[{i}]: {path}" for i, path in enumerate(self.import_files)]
        lines.append("")
        lines.append("Components added:")
        lines += [f"[{i}]: {comp.name} ({comp.type_name})" for i, comp in enumerate(self.components)]
        lines.append("")
        lines.append("Transmission lines added:")
        lines += [f"[{i}]: {ptl.name} ({ptl.net_name}, {ptl.length} nm)" for i, ptl in enumerate(self.lines)]
        return "\n".join(lines)
