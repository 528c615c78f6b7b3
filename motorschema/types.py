"""Shared enums and type aliases."""

from enum import Enum


class SymbolKind(str, Enum):
    COIL = "coil"
    CAPACITOR = "capacitor"
    TERMINAL = "terminal"
    SWITCH = "switch"
    GROUND = "ground"
    GENERIC = "generic"


class PhaseType(str, Enum):
    MONO = "mono"
    TRI = "tri"


class MachineType(str, Enum):
    MOTOR = "motor"
    GENERATOR = "generator"


class OutputFormat(str, Enum):
    SVG = "svg"
    PNG = "png"
    PDF = "pdf"
