# src/tableausim/validation/exceptions.py
"""
Defines the diagnosable exception raised when topology validation finds
structural errors that make the tableau impossible to assemble.
"""
from typing import List

from .issues import ValidationIssue
from ..errors import DiagnosableError, format_diagnostic_report


class SemanticValidationError(DiagnosableError):
    """
    Raised when the topology validator reports one or more ERROR-level issues.
    Warnings and informational issues are filtered out of the report.
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.is_error
        ]
        if not self.issues:
            summary_message = "SemanticValidationError was raised with no error-level issues."
        else:
            summary_message = (
                f"Netlist validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        error_lines = [str(issue) for issue in self.issues]
        details = (
            f"The netlist contains structural errors and cannot be assembled.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {line}" for line in error_lines)
        )
        first_issue = self.issues[0] if self.issues else None
        context = {}
        if first_issue and first_issue.component_id:
            context['component'] = first_issue.component_id

        return format_diagnostic_report(
            error_type="Netlist Validation Error",
            details=details,
            suggestion="Correct the listed components and reload the netlist.",
            context=context
        )
