# src/tableausim/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import TopologyIssueCode
from .topology_validator import TopologyValidator
from .exceptions import SemanticValidationError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "TopologyIssueCode",
    "TopologyValidator",
    "SemanticValidationError",
]
