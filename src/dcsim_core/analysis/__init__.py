# src/dcsim_core/analysis/__init__.py
"""
Post-netlist analysis services: DC topology diagnostics and the text report.
"""
from .results import TopologyAnalysisResults
from .topology import TopologyAnalyzer, find_floating_nodes
from .report import format_report

__all__ = [
    "TopologyAnalysisResults",
    "TopologyAnalyzer",
    "find_floating_nodes",
    "format_report",
]
