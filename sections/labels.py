"""Label normalization and category coding.

Raw label columns mix strings, numbers and missing entries. Labels are
normalized to canonical strings (missing becomes the empty string) and then
coded as small integers. Codes are assigned in sorted order of the distinct
strings, so the coding does not depend on the order of the input.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np

from .errors import SectionRuntimeError


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    return False


def _format_float(value: float) -> str:
    """Integral floats print as integers; others with 5 significant digits,
    or more when the integer part is longer."""
    if value.is_integer():
        return str(int(value))
    if not math.isfinite(value):
        return str(value)
    digits = max(math.floor(math.log10(abs(value))) + 5, 5)
    return f"{value:.{digits}g}"


def normalize_label(value: Any) -> str:
    """Convert a raw label to its canonical string form.

    Examples:
        >>> normalize_label(None), normalize_label(float("nan"))
        ('', '')
        >>> normalize_label(3.0), normalize_label(2.5), normalize_label("A")
        ('3', '2.5', 'A')
        >>> normalize_label(0.1 + 0.2), normalize_label(math.pi)
        ('0.3', '3.1416')
    """
    if isinstance(value, np.generic):
        value = value.item()
    if _is_missing(value):
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def normalize_labels(labels: Sequence[Any] | np.ndarray) -> list[str]:
    """Normalize a label column to a list of canonical strings.

    Raises:
        SectionRuntimeError: INVALID_SHAPE if labels is not a single column.
    """
    if isinstance(labels, np.ndarray):
        if labels.ndim == 2 and labels.shape[1] == 1:
            labels = labels[:, 0]
        if labels.ndim != 1:
            raise SectionRuntimeError(
                message=f"labels must be a 1 column array, got shape {list(labels.shape)}",
                code="INVALID_SHAPE",
                details={"shape": list(labels.shape)},
            )
    elif isinstance(labels, (str, bytes)):
        raise SectionRuntimeError(
            message="labels must be a sequence of labels, not a single string",
            code="INVALID_SHAPE",
            details={"type": type(labels).__name__},
        )

    return [normalize_label(value) for value in labels]


@dataclass(frozen=True)
class LabelCoding:
    """Mapping between canonical label strings and integer codes.

    Attributes:
        categories: Distinct labels in sorted order; a label's code is its
            position in this tuple.
    """

    categories: tuple[str, ...]

    @classmethod
    def from_labels(
        cls,
        labels: Iterable[str],
        skip_empty: bool = False,
    ) -> "LabelCoding":
        """Build the coding from normalized labels.

        Args:
            labels: Normalized label strings.
            skip_empty: Leave the empty label out of the category space.
        """
        distinct = set(labels)
        if skip_empty:
            distinct.discard("")
        return cls(categories=tuple(sorted(distinct)))

    @property
    def index(self) -> dict[str, int]:
        return {name: code for code, name in enumerate(self.categories)}

    def encode(self, labels: Iterable[str | None]) -> list[int | None]:
        """Code each label; holes and labels outside the category space become None."""
        index = self.index
        return [index.get(label) for label in labels]

    def decode(self, code: int) -> str:
        return self.categories[code]

    def __len__(self) -> int:
        return len(self.categories)
