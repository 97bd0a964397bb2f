"""Generate a JoSIM deck for a placed half adder."""

from __future__ import annotations

from pathlib import Path
import sys

# Allow running this example without installing the package.
#
# This file lives at: examples/half_adder/build.py
# The repo root is two parents up.
script_dir = Path(__file__).resolve().parent
repo_root = script_dir.parents[1]
sys.path.insert(0, str(repo_root))

from josim_netlist import Subckt, WriteOptions, assemble  # noqa: E402

# Placement, as produced by the DEF parsing stage
half_adder = Subckt.from_placement(
    "half_adder",
    components=[
        ("PAD_A", "PAD", ["a"]),
        ("PAD_B", "PAD", ["b"]),
        ("SPLIT_A", "LSmitll_SPLITT", ["aB", "a0", "a1"]),
        ("SPLIT_B", "LSmitll_SPLITT", ["bB", "b0", "b1"]),
        ("XOR0", "LSmitll_XORT", ["a0", "b0", "clk", "sum"]),
        ("AND0", "LSmitll_ANDT", ["a1", "b1", "clk", "carry"]),
        ("PAD_CLK", "PAD", ["clk"]),
        ("PAD_S", "PAD", ["sum"]),
        ("PAD_C", "PAD", ["carry"]),
    ],
    lines=[("PTL_A", "a", 120000), ("PTL_B", "b", 80000)],
    imports=[str(script_dir / "cells.cir")],
)

output_file = script_dir / "half_adder.cir"
assemble(output_file, half_adder, WriteOptions(author="Half adder example"))

print(f"Netlisting complete: {output_file}")
