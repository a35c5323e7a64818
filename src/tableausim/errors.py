# src/tableausim/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class TableauSimError(Exception):
    """Base class for all custom, user-facing errors in TableauSim."""
    pass

class NetlistLoadError(TableauSimError):
    """
    Raised when a netlist cannot be turned into a solvable tableau, from reading
    the file to topology validation. The message is a pre-formatted diagnostic report.
    """
    pass

class ResultsUnavailableError(TableauSimError):
    """
    Raised when operating-point results are requested but none can be served,
    either because no netlist is loaded or because the loaded system is singular.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Concrete base class for all internal exceptions that are diagnosable.

    It is a real `Exception` subclass, so it can be used in `except` clauses, and
    it declares `get_diagnostic_report` abstract so every subclass has to supply one.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the final multi-line report string so that every diagnostic shares
    the same layout.

    Args:
        error_type: The high-level category of the error (e.g., "Singular System").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: Contextual information (component, source file, line, raw input, row).

    Returns:
        A formatted diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ TableauSim: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if component := context.get('component'):
        lines.append(f"Component:      {component}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if (line_number := context.get('line_number')) is not None:
        lines.append(f"Line:           {line_number}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if (row := context.get('row')) is not None:
        lines.append(f"Tableau Row:    {row}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("========================================================================")
    return "\n".join(lines)
