"""
Exceptions and diagnostics for the lambdalang value core.

Error code ranges:
- E5xx: Classification and construction errors
- E6xx: Conversion errors
- E7xx: Resolution errors
- E8xx: Configuration errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A single diagnostic message (error, warning, etc.)."""
    code: str                       # E501, E601, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    subject: Optional[str] = None   # The offending token or name, verbatim
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic for display."""
        parts = [f"{self.severity.value}[{self.code}]: {self.message}"]
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "subject": self.subject,
            "hints": self.hints,
        }


class LangError(Exception):
    """Base exception for value core errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class ClassificationError(LangError):
    """No recognizer accepted a token (E501)."""
    pass


class ConstructionError(LangError):
    """A recognizer accepted a token but construction failed (E502)."""
    pass


class ConversionError(LangError):
    """No conversion edge exists, or a conditional edge was refused (E6xx)."""
    pass


class ResolutionError(LangError):
    """Base class for variable resolution failures (E7xx)."""
    pass


class UnresolvedVariableError(ResolutionError):
    """A variable name is bound in neither namespace (E701)."""
    pass


class InvalidResolutionTargetError(ResolutionError):
    """Resolution was attempted on something other than a variable (E702)."""
    pass


class ConfigError(LangError):
    """Malformed configuration or environment file (E8xx)."""
    pass


# --- Classification error codes ---

def error_unrecognized_token(token: str) -> ClassificationError:
    """E501: No value type accepts the token."""
    diag = Diagnostic(
        code="E501",
        message=f"unrecognized token '{token}'",
        severity=ErrorSeverity.ERROR,
        subject=token,
    )
    return ClassificationError(diag)


def error_construction_failed(type_name: str, token: str,
                              reason: str = None) -> ConstructionError:
    """E502: A value could not be built from an accepted token."""
    message = f"cannot construct {type_name} from token '{token}'"
    if reason:
        message = f"{message}: {reason}"
    diag = Diagnostic(
        code="E502",
        message=message,
        severity=ErrorSeverity.ERROR,
        subject=token,
    )
    return ConstructionError(diag)


# --- Conversion error codes ---

def error_no_conversion(source: str, target: str) -> ConversionError:
    """E601: No conversion edge between two value types."""
    diag = Diagnostic(
        code="E601",
        message=f"cannot convert {source} to {target}",
        severity=ErrorSeverity.ERROR,
        subject=source,
    )
    return ConversionError(diag)


def error_conversion_overflow(source: str, target: str, rendered: str) -> ConversionError:
    """E602: A narrowing conversion would overflow the target range."""
    diag = Diagnostic(
        code="E602",
        message=f"cannot convert {source} to {target}: {rendered} is out of range",
        severity=ErrorSeverity.ERROR,
        subject=rendered,
        hints=[f"{target} holds signed 64-bit integers only"],
    )
    return ConversionError(diag)


def error_no_common_type(left: str, right: str) -> ConversionError:
    """E603: Two operands share no type to widen to."""
    diag = Diagnostic(
        code="E603",
        message=f"no common type for {left} and {right}",
        severity=ErrorSeverity.ERROR,
        subject=f"{left}, {right}",
    )
    return ConversionError(diag)


# --- Resolution error codes ---

def error_undefined_variable(name: str) -> UnresolvedVariableError:
    """E701: Undefined variable."""
    diag = Diagnostic(
        code="E701",
        message=f"undefined variable: {name}",
        severity=ErrorSeverity.ERROR,
        subject=name,
    )
    return UnresolvedVariableError(diag)


def error_not_a_reference(type_name: str, rendered: str) -> InvalidResolutionTargetError:
    """E702: Only variable references can be resolved."""
    diag = Diagnostic(
        code="E702",
        message=f"not a resolvable reference: {rendered} ({type_name})",
        severity=ErrorSeverity.ERROR,
        subject=rendered,
        hints=["only identifiers classified as var can be resolved"],
    )
    return InvalidResolutionTargetError(diag)


# --- Configuration error codes ---

def error_invalid_config(source: str, reason: str) -> ConfigError:
    """E801: Malformed configuration."""
    diag = Diagnostic(
        code="E801",
        message=f"invalid configuration in {source}: {reason}",
        severity=ErrorSeverity.ERROR,
        subject=source,
    )
    return ConfigError(diag)


class DiagnosticCollector:
    """Collects diagnostics across several operations."""

    def __init__(self, max_errors: int = 20):
        self.diagnostics: List[Diagnostic] = []
        self.max_errors = max_errors
        self._error_count = 0

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)
        if diagnostic.severity == ErrorSeverity.ERROR:
            self._error_count += 1

    def add_error(self, error: LangError) -> None:
        """Add an error exception as a diagnostic."""
        self.add(error.diagnostic)

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.WARNING)

    @property
    def has_errors(self) -> bool:
        return self._error_count > 0

    @property
    def should_stop(self) -> bool:
        """Check if we've hit the max error limit."""
        return self._error_count >= self.max_errors

    def format_all(self) -> str:
        """Format all diagnostics for display."""
        parts = [d.format() for d in self.diagnostics]
        if self._error_count > 0:
            parts.append(f"{self._error_count} error(s), {self.warning_count} warning(s)")
        elif self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self._error_count,
            "warning_count": self.warning_count,
        }
