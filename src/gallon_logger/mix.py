"""Chemical mix calculations.

A chemical's ratio is ounces per gallon of tank volume. Ratios are stored as
fixed-precision strings so that historical entries read the same regardless
of later float formatting.
"""

import math
from typing import Union

from .errors import ValidationError, ValidationKind
from .models.event import Chemical

Ratio = Union[str, int, float]

RATIO_DECIMALS = 4
ZERO_RATIO = 0


def ratio_per_unit_volume(
    total_oz: float,
    reference_volume: float,
    decimals: int = RATIO_DECIMALS,
) -> Ratio:
    """Ounces per gallon for total_oz mixed into reference_volume gallons.

    Returns ZERO_RATIO when the reference volume is not positive.
    """
    if reference_volume > 0:
        return f"{total_oz / reference_volume:.{decimals}f}"
    return ZERO_RATIO


def parse_ratio(stored_ratio: Ratio) -> float:
    """Read a stored ratio; anything unparseable counts as zero."""
    try:
        return float(stored_ratio)
    except (TypeError, ValueError):
        return 0.0


def quantity_applied(logged_usage: float, stored_ratio: Ratio) -> float:
    """Ounces of a chemical dispensed for logged_usage gallons."""
    return logged_usage * parse_ratio(stored_ratio)


def recompute_ratios(
    chemicals: list[Chemical],
    reference_volume: float,
    decimals: int = RATIO_DECIMALS,
) -> list[Chemical]:
    return [
        chem.model_copy(update={"oz_per_gal": ratio_per_unit_volume(chem.total_oz, reference_volume, decimals)})
        for chem in chemicals
    ]


class PendingMix:
    """Chemicals staged for the next application.

    Staged ratios follow the tank capacity until the mix is logged; after
    that they live on the LogEntry and never change.
    """

    def __init__(self, reference_volume: float, decimals: int = RATIO_DECIMALS):
        self.reference_volume = reference_volume
        self.decimals = decimals
        self._chemicals: list[Chemical] = []

    @property
    def chemicals(self) -> list[Chemical]:
        return list(self._chemicals)

    def __len__(self) -> int:
        return len(self._chemicals)

    def add(self, name: str, total_oz: float) -> Chemical:
        """Stage a chemical, computing its ratio against the current volume.

        Raises:
            ValidationError: If the name is blank or ounces are not positive
        """
        name = (name or "").strip()
        if not name or not is_finite_positive(total_oz):
            raise ValidationError(
                ValidationKind.INVALID_CHEMICAL,
                "Please enter a valid chemical name and positive total ounces.",
            )
        chem = Chemical(
            name=name,
            total_oz=float(total_oz),
            oz_per_gal=ratio_per_unit_volume(float(total_oz), self.reference_volume, self.decimals),
        )
        self._chemicals.append(chem)
        return chem

    def remove(self, index: int) -> Chemical:
        return self._chemicals.pop(index)

    def clear(self) -> None:
        self._chemicals = []

    def rebase(self, reference_volume: float) -> None:
        """Recompute every staged ratio against a new tank volume."""
        self.reference_volume = reference_volume
        self._chemicals = recompute_ratios(self._chemicals, reference_volume, self.decimals)


def is_finite_positive(value: float) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0
