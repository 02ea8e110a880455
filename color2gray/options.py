"""
Validated conversion parameters.

:class:`ConversionOptions` is created from raw (usually command line string)
values and validated with pydantic before any image is touched. Validation
failures are translated into the error kinds of :mod:`color2gray.errors`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .definitions import DesaturationColorspace, MixingForm
from .errors import EnumError, ParameterRangeError, ParameterTypeError

DEFAULT_RED = 29.9
DEFAULT_GREEN = 58.7
DEFAULT_BLUE = 11.4

_FORM_ALIASES = {"a": MixingForm.ADD, "r": MixingForm.RMS, "d": MixingForm.DESAT}

_ENUM_FIELDS = {"form", "colorspace"}

_TYPE_ERRORS = {"float_parsing", "float_type", "finite_number"}


class ChannelWeights(BaseModel):
    """
    Red, green and blue weights in percent.

    The weights do not need to sum up to 100, other sums produce brighter or
    darker results.
    """

    model_config = ConfigDict(frozen=True)

    red: float = Field(default=DEFAULT_RED, allow_inf_nan=False)
    green: float = Field(default=DEFAULT_GREEN, allow_inf_nan=False)
    blue: float = Field(default=DEFAULT_BLUE, allow_inf_nan=False)

    def fractions(self) -> tuple[float, float, float]:
        """
        Returns the weights as fractions (percent / 100)
        """
        return self.red / 100.0, self.green / 100.0, self.blue / 100.0

    @property
    def total(self) -> float:
        """Sum of the weights in percent"""
        return self.red + self.green + self.blue


class ConversionOptions(BaseModel):
    """
    All parameters of a single conversion run.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    red: float = Field(default=DEFAULT_RED, allow_inf_nan=False)
    green: float = Field(default=DEFAULT_GREEN, allow_inf_nan=False)
    blue: float = Field(default=DEFAULT_BLUE, allow_inf_nan=False)
    form: MixingForm = MixingForm.ADD
    colorspace: DesaturationColorspace = DesaturationColorspace.HSL
    brightness: float = Field(default=0.0, ge=-100.0, le=100.0, allow_inf_nan=False)
    contrast: float = Field(default=0.0, ge=-100.0, le=100.0, allow_inf_nan=False)

    @field_validator("form", mode="before")
    @classmethod
    def _normalize_form(cls, value: Any) -> Any:
        """Accept any case and the first-letter aliases."""
        if isinstance(value, MixingForm):
            return value
        token = str(value).strip().lower()
        if token in _FORM_ALIASES:
            return _FORM_ALIASES[token]
        try:
            return MixingForm(token)
        except ValueError:
            choices = ", ".join(form.value for form in MixingForm)
            raise ValueError(f"invalid form '{value}', expected one of {choices}")

    @field_validator("colorspace", mode="before")
    @classmethod
    def _normalize_colorspace(cls, value: Any) -> Any:
        if isinstance(value, DesaturationColorspace):
            return value
        token = str(value).strip().lower()
        try:
            return DesaturationColorspace(token)
        except ValueError:
            choices = ", ".join(space.value for space in DesaturationColorspace)
            raise ValueError(f"invalid colorspace '{value}', expected one of {choices}")

    @property
    def weights(self) -> ChannelWeights:
        return ChannelWeights(red=self.red, green=self.green, blue=self.blue)

    @property
    def adjusts_tone(self) -> bool:
        """True if brightness or contrast differ from 0"""
        return self.brightness != 0 or self.contrast != 0

    @classmethod
    def create(cls, **params) -> ConversionOptions:
        """
        Validates the given parameters.

        :param params: Any of the model's fields, values may be strings
        :return: The validated options
        :raises EnumError: On an invalid form or colorspace token
        :raises ParameterTypeError: If a numeric value is not a finite number
        :raises ParameterRangeError: If brightness or contrast are out of range
        """
        params = {key: value for key, value in params.items() if value is not None}
        try:
            return cls(**params)
        except ValidationError as error:
            raise _translate(error) from None


def _translate(error: ValidationError) -> Exception:
    """Maps the first pydantic error to one of the color2gray error kinds."""
    details = error.errors()[0]
    field = str(details["loc"][0]) if details["loc"] else "value"
    kind = details["type"]
    value = details.get("input")
    if field in _ENUM_FIELDS:
        message = str(details.get("ctx", {}).get("error", details["msg"]))
        return EnumError(message)
    if kind in _TYPE_ERRORS:
        return ParameterTypeError(f"{field} must be a finite number, got '{value}'")
    if kind in ("greater_than_equal", "less_than_equal"):
        return ParameterRangeError(f"{field} must be between -100 and 100, got {value}")
    return ParameterTypeError(f"{field}: {details['msg']}")


__all__ = [
    "DEFAULT_RED",
    "DEFAULT_GREEN",
    "DEFAULT_BLUE",
    "ChannelWeights",
    "ConversionOptions",
]
