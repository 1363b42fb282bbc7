"""Diagnostics returned to the host runtime instead of raised errors."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """A single error or warning, optionally pinned to an attribute path."""

    severity: Severity
    summary: str
    detail: str = ""
    attribute_path: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def path_string(self) -> str:
        return ".".join(self.attribute_path)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"severity": self.severity.value, "summary": self.summary}
        if self.detail:
            result["detail"] = self.detail
        if self.attribute_path:
            result["attribute"] = self.path_string()
        return result

    def __str__(self) -> str:
        location = f" ({self.path_string()})" if self.attribute_path else ""
        detail = f": {self.detail}" if self.detail else ""
        return f"{self.severity.value.capitalize()}{location}: {self.summary}{detail}"


class Diagnostics(list):
    """List of Diagnostic with helpers for the common error/warning cases."""

    @classmethod
    def from_error(cls, error: BaseException, path: Iterable[str] = ()) -> "Diagnostics":
        diags = cls()
        diags.add_error(str(error), path=path)
        return diags

    def add_error(self, summary: str, detail: str = "", path: Iterable[str] = ()) -> "Diagnostics":
        self.append(Diagnostic(Severity.ERROR, summary, detail, tuple(path)))
        return self

    def add_warning(self, summary: str, detail: str = "", path: Iterable[str] = ()) -> "Diagnostics":
        self.append(Diagnostic(Severity.WARNING, summary, detail, tuple(path)))
        return self

    def has_error(self) -> bool:
        return any(d.is_error for d in self)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self if d.is_error]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self if not d.is_error]

    def first_error(self) -> Optional[Diagnostic]:
        errors = self.errors()
        return errors[0] if errors else None

    def __str__(self) -> str:
        return "\n".join(str(d) for d in self)
