"""Schema describing which user settings exist and their defaults.

A schema is a list of categories, each holding typed settings. The
settings store only needs each setting's key and default; the remaining
fields describe how a settings panel should render the control.
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

SettingValue = Union[bool, int, float, str]


class BaseSetting(BaseModel):
    key: str = Field(min_length=1)
    title: str
    description: Optional[str] = None


class ToggleSetting(BaseSetting):
    type: Literal["toggle"] = "toggle"
    default: bool


class SelectSetting(BaseSetting):
    type: Literal["select"] = "select"
    options: Dict[str, str]
    default: str

    @model_validator(mode="after")
    def _default_is_an_option(self) -> "SelectSetting":
        if self.options and self.default not in self.options:
            raise ValueError(f"default {self.default!r} is not one of the options")
        return self


class TextSetting(BaseSetting):
    type: Literal["text"] = "text"
    placeholder: Optional[str] = None
    default: str


class NumberSetting(BaseSetting):
    type: Literal["number"] = "number"
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    default: float


class RangeSetting(BaseSetting):
    type: Literal["range"] = "range"
    min: float
    max: float
    step: float
    unit: Optional[str] = None
    default: float


Setting = Annotated[
    Union[ToggleSetting, SelectSetting, TextSetting, NumberSetting, RangeSetting],
    Field(discriminator="type"),
]


class Category(BaseModel):
    id: str
    name: str
    icon: str = ""
    settings: List[Setting] = Field(default_factory=list)


class ConfigurationSchema(BaseModel):
    categories: List[Category] = Field(default_factory=list)

    def defaults(self) -> Dict[str, SettingValue]:
        """Map every setting key to its default value."""
        return {
            setting.key: setting.default
            for category in self.categories
            for setting in category.settings
        }


configuration_schema = ConfigurationSchema(categories=[])
