"""Quantitative value schema shared by stations and observations."""

from pydantic import BaseModel, Field


class Measurement(BaseModel):
    """A single reading with its WMO unit code.

    A missing `value` means the station did not report the quantity. It is
    never replaced with a default number.
    """

    unit_code: str = Field(alias="unitCode")
    value: float | None = None
    quality_control: str | None = Field(default=None, alias="qualityControl")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def present(self) -> bool:
        """True if the measurement carries a value."""
        return self.value is not None
