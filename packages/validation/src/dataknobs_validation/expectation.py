"""Path-addressed diagnostics produced by failing validators.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .result import Result


@dataclass(frozen=True)
class Expectation:
    """A single unmet expectation.

    Attributes:
        message: Human-readable description of what was expected
        value: The value observed at ``path``
        path: Dot/bracket path to the value (``address.street``, ``items[2]``),
            ``None`` when the failure is at the root
        code: Stable, dot-namespaced classification (see ``ExpectationCodes``)
        data: Open structured metadata (limits, expected values, offending keys)
    """

    message: str
    value: Any = None
    path: str | None = None
    code: str | None = None
    data: Mapping[str, Any] | None = None

    @property
    def description(self) -> str:
        """Message prefixed with the path when there is one."""
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message

    def copy_with(self, **changes: Any) -> Expectation:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def add_to_path(self, segment: str | int) -> Expectation:
        """Prepend a map key or list index to this expectation's path.

        Args:
            segment: A map key (joined with ``.``) or a list index
                (rendered as ``[index]``)

        Returns:
            New Expectation with the extended path
        """
        if isinstance(segment, int) and not isinstance(segment, bool):
            head = f"[{segment}]"
        else:
            head = str(segment)

        if not self.path:
            path = head
        elif self.path.startswith("["):
            path = head + self.path
        else:
            path = f"{head}.{self.path}"
        return replace(self, path=path)

    def to_invalid_result(self) -> Result:
        """Wrap this expectation in an invalid result for its own value."""
        from .result import Result

        return Result.invalid(self.value, [self])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary, omitting unset optional fields."""
        out: dict[str, Any] = {"message": self.message, "value": self.value}
        if self.path is not None:
            out["path"] = self.path
        if self.code is not None:
            out["code"] = self.code
        if self.data is not None:
            out["data"] = dict(self.data)
        return out

    def __str__(self) -> str:
        return self.description
