"""
Weight units and conversion.

All weights are stored in kilograms. Pounds exist only at the display and
input boundary.
"""

from typing import Literal

from pydantic import BaseModel, Field


WeightUnit = Literal["kg", "lbs"]

# Conversion constants
KG_TO_LBS = 2.20462
LBS_TO_KG = 0.453592


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds, rounded to 0.1."""
    return round(kg * KG_TO_LBS, 1)


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms, rounded to 0.1."""
    return round(lbs * LBS_TO_KG, 1)


def convert_to_kg(value: float, unit: WeightUnit) -> float:
    """Convert a weight entered in the display unit to storage kilograms."""
    if unit == "lbs":
        return lbs_to_kg(value)
    return value


def format_weight_value(weight_kg: float, unit: WeightUnit) -> float:
    """Weight in the display unit, without suffix."""
    if unit == "lbs":
        return kg_to_lbs(weight_kg)
    return weight_kg


def format_weight(weight_kg: float, unit: WeightUnit) -> str:
    """
    Format a stored weight for display.

    Examples:
        >>> format_weight(100, "kg")
        '100 kg'
        >>> format_weight(100, "lbs")
        '220.5 lbs'
    """
    value = format_weight_value(weight_kg, unit)
    if unit == "lbs":
        return f"{value} lbs"
    return f"{value:g} kg"


class Load(BaseModel):
    """
    A weight as entered by the user, in either unit.

    Examples:
        >>> Load(value=225, unit="lbs").to_kg()
        102.1
    """

    value: float = Field(..., ge=0, le=1000, description="Weight value")
    unit: WeightUnit = Field(default="kg", description="Unit of measurement")

    def to_kg(self) -> float:
        """Weight in kilograms."""
        return convert_to_kg(self.value, self.unit)

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit}"

    model_config = {"frozen": True}
