from dataclasses import FrozenInstanceError

import pytest
from pydantic import ValidationError

from josim_netlist import (
    __version__,
    Subckt,
    Component,
    ComponentKind,
    TransmissionLine,
    InvalidArgument,
    JosimNetlistError,
)


def test_version():
    assert __version__ == "0.1.0"


def test_component_kind():
    assert ComponentKind.of("PAD") is ComponentKind.PAD
    assert ComponentKind.of("pad") is ComponentKind.INSTANCE
    assert ComponentKind.of("DFF") is ComponentKind.INSTANCE


def test_pad_registers_port():
    sub = Subckt(name="top")
    comp = sub.register_component("P0", "PAD", ["n1", "n2"])
    assert comp.kind is ComponentKind.PAD
    assert comp.nets == ("n1", "n2")
    assert sub.port_nets == ("n2",)
    assert sub.port_designators == ("P0",)


def test_instance_registers_no_port():
    sub = Subckt(name="top")
    comp = sub.register_component("P0", "X", ["n1", "n2"])
    assert comp.kind is ComponentKind.INSTANCE
    assert comp.port_net is None
    assert sub.port_nets == ()
    assert sub.port_designators == ()
    assert sub.components == [comp]


def test_port_order_and_duplicates():
    """Ports keep registration order, and pads sharing a net are both listed"""
    sub = Subckt(name="top")
    sub.register_component("PB", "PAD", ["b"])
    sub.register_component("U1", "AND2", ["a", "b", "q"])
    sub.register_component("PA", "PAD", ["a"])
    sub.register_component("PA2", "PAD", ["x", "a"])
    assert sub.port_designators == ("PB", "PA", "PA2")
    assert sub.port_nets == ("b", "a", "a")
    assert len(sub.port_nets) == len(sub.port_designators)


def test_empty_nets_rejected():
    sub = Subckt(name="top")
    with pytest.raises(InvalidArgument):
        sub.register_component("P0", "PAD", [])
    with pytest.raises(InvalidArgument):
        sub.register_component("U0", "AND2", [])
    assert sub.components == []
    assert sub.port_nets == ()
    assert sub.port_designators == ()


def test_bad_names_rejected():
    sub = Subckt(name="top")
    with pytest.raises(InvalidArgument):
        sub.register_component("", "AND2", ["a"])
    with pytest.raises(InvalidArgument):
        sub.register_component("U0", "", ["a"])
    with pytest.raises(InvalidArgument):
        sub.register_component("U0", "AND2", "a")
    with pytest.raises(InvalidArgument):
        sub.register_component("U0", "AND2", ["a", 3])
    assert sub.components == []


def test_register_line():
    sub = Subckt(name="top")
    ptl = sub.register_line("L1", "A", 10)
    assert sub.lines == [ptl]
    assert ptl.net_a == "AA"
    assert ptl.net_b == "AB"
    assert ptl.delay(0.1) == pytest.approx(1.0)
    assert sub.register_line("L0", "B", 0).length == 0


def test_register_line_rejects_bad_length():
    sub = Subckt(name="top")
    with pytest.raises(InvalidArgument):
        sub.register_line("L1", "A", -1)
    with pytest.raises(InvalidArgument):
        sub.register_line("L1", "A", 1.5)
    with pytest.raises(InvalidArgument):
        sub.register_line("L1", "A", True)
    assert sub.lines == []


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        Subckt(name="top").register_line("L1", "A", -5)
    assert issubclass(InvalidArgument, JosimNetlistError)


def test_imports_keep_duplicates():
    sub = Subckt(name="top")
    sub.register_import("lib/and2.cir")
    sub.register_import("lib/dff.cir")
    sub.register_import("lib/and2.cir")
    assert sub.import_files == ["lib/and2.cir", "lib/dff.cir", "lib/and2.cir"]


def test_import_does_not_require_existence(tmp_path):
    sub = Subckt(name="top")
    sub.register_import(tmp_path / "not_yet_written.cir")
    assert sub.import_files == [str(tmp_path / "not_yet_written.cir")]


def test_placement_aliases():
    sub = Subckt(name="top")
    sub.import_cir("lib.cir")
    sub.push_comp("P0", "PAD", ["a"])
    sub.push_ptl("L0", "a", 100)
    assert sub.import_files == ["lib.cir"]
    assert sub.port_nets == ("a",)
    assert sub.lines[0].name == "L0"


def test_from_placement():
    sub = Subckt.from_placement(
        "adder",
        components=[
            ("P0", "PAD", ["a"]),
            ("U0", "XOR", ["aB", "bB", "s"]),
            ("P1", "PAD", ["s"]),
        ],
        lines=[("L0", "a", 1000), ("L1", "b", 2000)],
        imports=["xor.cir"],
    )
    assert sub.name == "adder"
    assert [c.name for c in sub.components] == ["P0", "U0", "P1"]
    assert [p.name for p in sub.lines] == ["L0", "L1"]
    assert sub.import_files == ["xor.cir"]
    assert sub.port_designators == ("P0", "P1")
    assert sub.port_nets == ("a", "s")


def test_from_placement_stops_at_bad_record():
    with pytest.raises(InvalidArgument):
        Subckt.from_placement("top", lines=[("L0", "a", 10), ("L1", "b", -10)])


def test_records_are_frozen():
    comp = Component(name="U1", type_name="AND2", nets=["a", "b"])
    assert comp.nets == ("a", "b")
    with pytest.raises((FrozenInstanceError, ValidationError)):
        comp.name = "U2"

    ptl = TransmissionLine(name="L1", net_name="a", length=5)
    with pytest.raises((FrozenInstanceError, ValidationError)):
        ptl.length = 6


def test_to_str():
    sub = Subckt(name="top")
    sub.register_import("and2.cir")
    sub.register_component("U1", "AND2", ["a", "b", "q"])
    sub.register_line("L1", "q", 250)
    assert sub.to_str() == "\n".join(
        [
            "Name of the files to be imported:",
            "[0]: and2.cir",
            "",
            "Components added:",
            "[0]: U1 (AND2)",
            "",
            "Transmission lines added:",
            "[0]: L1 (q, 250 nm)",
        ]
    )


def test_nets_from_iterators():
    sub = Subckt(name="top")
    with pytest.raises(InvalidArgument):
        sub.register_component("P0", "PAD", iter([]))
    with pytest.raises(InvalidArgument):
        sub.register_component("U0", "AND2", (n for n in []))
    assert sub.components == []
    assert sub.port_nets == ()
    assert sub.port_designators == ()

    comp = sub.register_component("P1", "PAD", (n for n in ["x", "y"]))
    assert comp.nets == ("x", "y")
    assert sub.port_nets == ("y",)


def test_from_placement_with_empty_iterator_nets():
    with pytest.raises(InvalidArgument):
        Subckt.from_placement("top", components=[("P0", "PAD", iter([]))])


def test_component_kind_derived_from_type():
    pad = Component(name="P0", type_name="PAD", nets=["a"])
    assert pad.kind is ComponentKind.PAD
    assert pad.port_net == "a"

    inst = Component(name="U0", type_name="AND2", nets=["a", "b", "q"])
    assert inst.kind is ComponentKind.INSTANCE
    assert inst.port_net is None

    forced = Component(name="P1", type_name="PAD", nets=["a"], kind=ComponentKind.INSTANCE)
    assert forced.kind is ComponentKind.INSTANCE
