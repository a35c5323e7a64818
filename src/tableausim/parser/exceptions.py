# src/tableausim/parser/exceptions.py
"""
Defines the diagnosable exceptions raised while reading a netlist file.

`ParsingError` covers file-level problems (missing file, permissions, encoding).
`MalformedNetlistError` covers a single offending line: wrong token count,
unknown component prefix, non-integer node, negative node, or an unusable value.
Both derive from `DiagnosableError`, so the session facade can catch them with
one `except` clause and present the formatted report.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    Local base class for all netlist parsing errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the netlist file.",
            context={}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Raised for file-system issues: the file does not exist, cannot be read, or
    is not valid UTF-8 text.
    """
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Netlist File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and is a plain-text netlist.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class MalformedNetlistError(BaseParsingError):
    """
    Raised when a netlist line cannot be turned into a component record.
    """
    details: str
    line_number: Optional[int] = None
    raw_line: Optional[str] = None
    file_path: Optional[Path] = None

    def __str__(self):
        where = f" (line {self.line_number})" if self.line_number is not None else ""
        return f"Malformed netlist{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Malformed Netlist Line",
            details=self.details,
            suggestion=(
                "Each line must read '<identifier> <sourceNode> <destNode> <value>', where the identifier\n"
                "starts with 'V' or 'R', nodes are non-negative integers (0 = ground) and the value is a\n"
                "finite number, optionally with a unit such as '5V' or '1kohm'."
            ),
            context={
                'source_file': self.file_path,
                'line_number': self.line_number,
                'user_input': (self.raw_line or "").strip(),
            }
        )
