# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every configuration or input error the machine raises."""


class InvalidSymbol(EnigmaError):
    """A symbol outside the configured alphabet was presented."""


class UnknownRotor(EnigmaError):
    """A requested rotor name is not in the catalog."""


class ConfigurationError(EnigmaError):
    """Structural setup violation (bad cycles, bad slots, bad reflector...)."""


class IncompleteSettings(ConfigurationError):
    """Fewer initial settings than non-reflector slots."""
