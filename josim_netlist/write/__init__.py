"""
Netlist Writing Module
"""

import tempfile
from datetime import datetime
from typing import List, Optional, Tuple

from .base import Netlister, ErrorMode
from .josim import (
    JosimNetlister,
    SPEED_CONSTANT,
    make_header,
    make_file_header,
    render_component,
    render_line,
    render_port_header,
)


class ReportCollector:
    """Collects warnings from multiple netlist runs into a single report.

    Usage:
        collector = ReportCollector(report_file="josim_report.log")

        netlist(src=adder, dest="adder.cir", options=WriteOptions(report_collector=collector))
        netlist(src=counter, dest="counter.cir", options=WriteOptions(report_collector=collector))

        collector.write_report()  # Write combined report
    """

    def __init__(self, report_file: str):
        """Initialize a report collector.

        Args:
            report_file: Path to the output report file
        """
        self.report_file = report_file
        self.conversions: List[Tuple[List[Tuple[str, Optional[str]]], Optional[str], Optional[str]]] = []
        # Each entry is (warnings, src_info, dest_info)

    def add_conversion(
        self,
        warnings: List[Tuple[str, Optional[str]]],
        src_info: Optional[str] = None,
        dest_info: Optional[str] = None,
    ) -> None:
        """Add warnings from a single run, using `src_info` as context where a warning has none."""
        enhanced_warnings = [(msg, context or src_info) for msg, context in warnings]
        self.conversions.append((enhanced_warnings, src_info, dest_info))

    def write_report(self) -> Optional[str]:
        """Write the combined report file with all collected warnings.

        Returns:
            Path to the report file, or None if no runs were recorded
        """
        if not self.conversions:
            return None

        all_warnings = []
        for warnings, _, _ in self.conversions:
            all_warnings.extend(warnings)

        src_files = [src_info for _, src_info, _ in self.conversions if src_info]
        dest_files = [dest_info for _, _, dest_info in self.conversions if dest_info]

        _write_log_file(
            all_warnings,
            self.report_file,
            src_info="; ".join(src_files) if src_files else None,
            dest_info="; ".join(dest_files) if dest_files else None,
        )
        return self.report_file


class WriteOptions:
    """Options for writing a netlist"""

    def __init__(
        self,
        speed_constant: float = SPEED_CONSTANT,
        tool_name: str = "josim_netlist",
        author: Optional[str] = None,
        errormode: ErrorMode = ErrorMode.WARN,
        log_file: Optional[str] = None,
        report_collector: Optional[ReportCollector] = None,
        timestamp: Optional[datetime] = None,
    ):
        self.speed_constant = speed_constant  # PTL delay per length, ps/nm
        self.tool_name = tool_name
        self.author = author
        self.errormode = errormode  # Handling of unreadable library files
        self.log_file = log_file  # Optional path to log file for warnings
        self.report_collector = report_collector  # Optional report collector for multi-run reports
        self.timestamp = timestamp  # Header timestamp; `None` uses the current time


def _write_log_file(
    warnings: List[Tuple[str, Optional[str]]],
    log_path: str,
    src_info: Optional[str] = None,
    dest_info: Optional[str] = None,
) -> None:
    """Write collected warnings to a log file.

    Args:
        warnings: List of (message, context) tuples
        log_path: Path to the log file
        src_info: Optional source sub-circuit information
        dest_info: Optional destination file information
    """
    with open(log_path, "w") as f:
        f.write("=" * 80 + "\n")
        f.write("JoSIM Netlist Warning Log\n")
        f.write("=" * 80 + "\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if src_info:
            f.write(f"Source: {src_info}\n")
        if dest_info:
            f.write(f"Destination: {dest_info}\n")
        f.write("=" * 80 + "\n\n")

        if not warnings:
            f.write("No warnings generated while netlisting.\n")
            return

        f.write("Netlisting Warnings\n")
        f.write("-" * 80 + "\n")
        for msg, context in warnings:
            if context:
                f.write(f"[{context}] {msg}\n")
            else:
                f.write(f"{msg}\n")
            f.write("\n")

        f.write("=" * 80 + "\n")
        f.write(f"Total warnings: {len(warnings)}\n")
        f.write("=" * 80 + "\n")


def netlist(src, dest, options: Optional[WriteOptions] = None) -> Optional[str]:
    """Write a netlist

    Args:
        src: Source `Subckt`
        dest: Destination file path
        options: WriteOptions instance

    Returns:
        Optional[str]: Path to log file if one was generated, None otherwise
    """
    options = options or WriteOptions()

    netlister = JosimNetlister(
        src,
        dest,
        errormode=options.errormode,
        speed_constant=options.speed_constant,
        tool_name=options.tool_name,
        author=options.author,
        timestamp=options.timestamp,
    )
    netlister.netlist()

    warnings = netlister.get_warnings()
    src_info = f"Subckt: {src.name}"
    dest_info = f"File: {dest}"

    # If report_collector is provided, add warnings to it instead of writing immediately
    if options.report_collector:
        options.report_collector.add_conversion(warnings, src_info=src_info, dest_info=dest_info)
        return None

    if options.log_file:
        _write_log_file(warnings, options.log_file, src_info=src_info, dest_info=dest_info)
        return options.log_file

    if warnings:
        log_file = tempfile.NamedTemporaryFile(mode="w", suffix=".log", delete=False)
        log_file_path = log_file.name
        log_file.close()

        _write_log_file(warnings, log_file_path, src_info=src_info, dest_info=dest_info)
        print(f"Netlisting warnings logged to: {log_file_path}")
        return log_file_path

    return None


def assemble(output_path, model, options: Optional[WriteOptions] = None) -> Optional[str]:
    """Write `model` to `output_path`. Same as `netlist`, in (path, model) order."""
    return netlist(src=model, dest=output_path, options=options)
