"""Pydantic models for a saved wiring-diagram scene.

Scenes arrive as JSON written by the mobile editor, across several app
versions. Parsing is deliberately forgiving: canonical camelCase keys,
snake_case names and the legacy keys of older saves (``textos``,
``polosConfig``, ``slots``, ``startAngle`` ...) are all accepted, and any
number that is missing, non-numeric or non-finite is stored as ``None`` so
the renderer can fall back to its defaults instead of failing.
"""

from __future__ import annotations

import math
import re
from typing import Annotated, Any, Optional, Union

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from motorschema.types import MachineType, PhaseType, SymbolKind


def _finite_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _count_or_none(value: Any) -> Optional[int]:
    number = _finite_or_none(value)
    return None if number is None else int(number)


def _text_or_none(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value) if math.isfinite(value) else None
    return None


def _legend_text(value: Any) -> Optional[str]:
    # numeric zero counts as unset, like a blank field
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return None
    return _text_or_none(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _symbol_kind(value: Any) -> SymbolKind:
    if isinstance(value, SymbolKind):
        return value
    try:
        return SymbolKind(str(value).strip().lower())
    except ValueError:
        return SymbolKind.GENERIC


def _phase_type(value: Any) -> PhaseType:
    return PhaseType.TRI if str(getattr(value, "value", value)).lower() == "tri" else PhaseType.MONO


def _machine_type(value: Any) -> MachineType:
    if str(getattr(value, "value", value)).lower() == "generator":
        return MachineType.GENERATOR
    return MachineType.MOTOR


def _objects(value: Any, allow_str: bool = False) -> list:
    """Keep only the list entries that can become models."""
    if not isinstance(value, (list, tuple)):
        return []
    kinds: tuple = (dict, BaseModel, str) if allow_str else (dict, BaseModel)
    return [item for item in value if isinstance(item, kinds)]


def _object_or_none(value: Any) -> Any:
    return value if isinstance(value, (dict, BaseModel)) else None


FiniteFloat = Annotated[Optional[float], BeforeValidator(_finite_or_none)]
Count = Annotated[Optional[int], BeforeValidator(_count_or_none)]
Text = Annotated[Optional[str], BeforeValidator(_text_or_none)]
LegendText = Annotated[Optional[str], BeforeValidator(_legend_text)]
Flag = Annotated[bool, BeforeValidator(_flag)]


class _SceneModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CanvasSize(_SceneModel):
    """Dimensions of the editing surface the scene was drawn on."""

    width: FiniteFloat = None
    height: FiniteFloat = None

    @property
    def is_usable(self) -> bool:
        return bool(self.width and self.height and self.width > 0 and self.height > 0)


class FreehandPath(_SceneModel):
    """A stroked path in SVG path syntax (M/L/A/Q)."""

    commands: Text = Field(default=None, validation_alias=AliasChoices("commands", "path", "d"))
    color: Text = None
    stroke_width: FiniteFloat = None
    dash_pattern: Optional[list[float]] = Field(
        default=None,
        validation_alias=AliasChoices("dashPattern", "dash_pattern", "dashArray"),
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"commands": data}
        return data

    @field_validator("dash_pattern", mode="before")
    @classmethod
    def _clean_dash_pattern(cls, value: Any) -> Optional[list[float]]:
        if isinstance(value, str):
            value = [v for v in re.split(r"[,\s]+", value) if v]
        if not isinstance(value, (list, tuple)):
            return None
        numbers = [n for n in (_finite_or_none(v) for v in value) if n is not None]
        return numbers or None


class TextLabel(_SceneModel):
    text: Text = Field(default=None, validation_alias=AliasChoices("text", "texto"))
    x: FiniteFloat = None
    y: FiniteFloat = None
    font_size: FiniteFloat = None
    color: Text = None


class Symbol(_SceneModel):
    kind: Annotated[SymbolKind, BeforeValidator(_symbol_kind)] = Field(
        default=SymbolKind.GENERIC,
        validation_alias=AliasChoices("kind", "type"),
    )
    x: FiniteFloat = None
    y: FiniteFloat = None
    size: FiniteFloat = None
    color: Text = None
    label: Text = None
    rotation_degrees: FiniteFloat = Field(
        default=None,
        validation_alias=AliasChoices("rotationDegrees", "rotation_degrees", "rotation"),
    )


class Coil(_SceneModel):
    """A coil drawn as a circular arc segment."""

    center_x: FiniteFloat = None
    center_y: FiniteFloat = None
    radius: FiniteFloat = None
    start_angle_deg: FiniteFloat = Field(
        default=None,
        validation_alias=AliasChoices("startAngleDeg", "start_angle_deg", "startAngle"),
    )
    end_angle_deg: FiniteFloat = Field(
        default=None,
        validation_alias=AliasChoices("endAngleDeg", "end_angle_deg", "endAngle"),
    )
    stroke_width: FiniteFloat = None
    color: Text = None
    label: Text = None


class ArcCoilConfig(_SceneModel):
    visible: Flag = False
    coils: list[Coil] = Field(default_factory=list)

    @field_validator("coils", mode="before")
    @classmethod
    def _drop_invalid(cls, value: Any) -> list:
        return _objects(value)


class PoleConfig(_SceneModel):
    visible: Flag = False
    pole_count: Count = Field(default=None, validation_alias=AliasChoices("poleCount", "pole_count", "poles"))
    outer_radius: FiniteFloat = None
    inner_radius: FiniteFloat = None
    middle_radius: FiniteFloat = None
    arc_sweep_deg: FiniteFloat = None
    stroke_width: FiniteFloat = None
    color: Text = None
    pole_colors: Optional[list[Text]] = None
    phase_type: Annotated[PhaseType, BeforeValidator(_phase_type)] = PhaseType.MONO
    machine_type: Annotated[MachineType, BeforeValidator(_machine_type)] = MachineType.MOTOR

    @field_validator("pole_colors", mode="before")
    @classmethod
    def _colors_list(cls, value: Any) -> Optional[list]:
        return list(value) if isinstance(value, (list, tuple)) else None


class StatorConfig(_SceneModel):
    visible: Flag = False
    slot_count: Count = Field(default=None, validation_alias=AliasChoices("slotCount", "slot_count", "slots"))
    radius: FiniteFloat = None


class LegendConfig(_SceneModel):
    """Nameplate data printed under the drawing."""

    visible: Flag = False
    model: LegendText = Field(default=None, validation_alias=AliasChoices("model", "modelo"))
    brand: LegendText = Field(default=None, validation_alias=AliasChoices("brand", "marca"))
    power: LegendText = Field(default=None, validation_alias=AliasChoices("power", "potencia"))
    voltage: LegendText = Field(default=None, validation_alias=AliasChoices("voltage", "tensao"))
    rpm: LegendText = None


class DiagramScene(_SceneModel):
    """Everything the editor saved for one wiring diagram."""

    paths: list[FreehandPath] = Field(default_factory=list)
    texts: list[TextLabel] = Field(default_factory=list, validation_alias=AliasChoices("texts", "textos"))
    symbols: list[Symbol] = Field(default_factory=list)
    arc_coil_config: Optional[ArcCoilConfig] = None
    pole_config: Optional[PoleConfig] = Field(
        default=None,
        validation_alias=AliasChoices("poleConfig", "pole_config", "polosConfig"),
    )
    stator_config: Optional[StatorConfig] = None
    legend_config: Optional[LegendConfig] = None
    canvas_size: Optional[CanvasSize] = None

    @field_validator("paths", mode="before")
    @classmethod
    def _paths(cls, value: Any) -> list:
        return _objects(value, allow_str=True)

    @field_validator("texts", "symbols", mode="before")
    @classmethod
    def _elements(cls, value: Any) -> list:
        return _objects(value)

    @field_validator(
        "arc_coil_config", "pole_config", "stator_config", "legend_config", "canvas_size",
        mode="before",
    )
    @classmethod
    def _sections(cls, value: Any) -> Any:
        return _object_or_none(value)


SceneInput = Union[DiagramScene, dict, None]


def parse_scene(data: SceneInput) -> Optional[DiagramScene]:
    """Turn saved scene JSON into a DiagramScene; None stays None."""
    if data is None:
        return None
    if isinstance(data, DiagramScene):
        return data
    return DiagramScene.model_validate(data)
