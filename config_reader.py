# config_reader.py
from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from alphabet_and_permutation import Alphabet, Permutation, parse_cycles
from debug import Debug
from errors import ConfigurationError, IncompleteSettings
from machine import Machine
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector, Rotor
from wheels import ALPHA26, cycles_from_wiring, historical_catalog

debug = Debug()

HISTORICAL = "historical"

# json "type" → one-letter tag used by the text format
TYPE_TAGS = {
    "m": "M", "moving": "M",
    "n": "N", "fixed": "N",
    "r": "R", "reflector": "R",
}


@dataclass(slots=True)
class RotorDescription:
    """One wheel as read from a configuration, before it is built."""

    name: str
    tag: str                      # "M", "N" or "R"
    notches: str = ""
    cycles: List[str] = field(default_factory=list)

    def build(self, alphabet: Alphabet) -> Rotor:
        perm = Permutation(self.cycles, alphabet)
        if self.tag == "M":
            return MovingRotor(self.name, perm, self.notches)
        if self.notches:
            raise ConfigurationError(f"Only moving rotors have notches ({self.name})")
        if self.tag == "N":
            return FixedRotor(self.name, perm)
        if self.tag == "R":
            return Reflector(self.name, perm)
        raise ConfigurationError(f"Undefined rotor type {self.tag!r} for {self.name}")


def build_machine(
    alphabet: Alphabet,
    num_rotors: int,
    pawls: int,
    descriptions: List[RotorDescription],
) -> Machine:
    if not descriptions:
        raise ConfigurationError("No rotor descriptions")

    catalog: Dict[str, Rotor] = {}
    for desc in descriptions:
        if desc.name in catalog:
            raise ConfigurationError(f"Rotor {desc.name!r} described twice")
        catalog[desc.name] = desc.build(alphabet)

    debug.log("config", f"{len(catalog)} rotors, {num_rotors} slots, {pawls} pawls")
    return Machine(alphabet, num_rotors, pawls, catalog)


# ────────────────────────────────────────────────────────────────────────
#  1. Text configuration
# ────────────────────────────────────────────────────────────────────────


def read_config(text: str) -> Machine:
    """Build a machine from the line-oriented configuration format."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise ConfigurationError("Configuration file is empty")

    alpha_line = lines[0]
    if "*" in alpha_line or "(" in alpha_line or ")" in alpha_line:
        raise ConfigurationError("Invalid characters for alphabet")
    alphabet = Alphabet(alpha_line)

    if len(lines) < 2:
        raise ConfigurationError("Configuration file truncated")
    counts = lines[1].split()
    if len(counts) != 2 or not all(c.isdigit() for c in counts):
        raise ConfigurationError(f"Bad rotor and pawl counts {lines[1]!r}")
    num_rotors, pawls = (int(c) for c in counts)

    descriptions: List[RotorDescription] = []
    for line in lines[2:]:
        if line.startswith("("):
            # continuation of the previous wheel's cycles
            if not descriptions:
                raise ConfigurationError("Cycles given before any rotor")
            descriptions[-1].cycles.extend(parse_cycles(line))
            continue
        if "*" in line:
            raise ConfigurationError(f"Improper rotor description {line!r}")

        parts = line.split(None, 2)
        if len(parts) < 2:
            raise ConfigurationError(f"Bad rotor description {line!r}")
        name, tag = parts[0], parts[1]
        if tag[0] not in "MNR":
            raise ConfigurationError(f"Undefined rotor type {tag!r} for {name}")
        cycles = parse_cycles(parts[2]) if len(parts) > 2 else []
        descriptions.append(RotorDescription(name, tag[0], tag[1:], cycles))

    return build_machine(alphabet, num_rotors, pawls, descriptions)


# ────────────────────────────────────────────────────────────────────────
#  2. JSON configuration
# ────────────────────────────────────────────────────────────────────────


def _count(data: Mapping, key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{key!r} must be an integer")
    return value


def _text(value: object, what: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{what} must be a string")
    return value


def _cycle_list(value: object, what: str) -> List[str]:
    if isinstance(value, str):
        return parse_cycles(value)
    if isinstance(value, list) and all(isinstance(c, str) for c in value):
        return list(value)
    raise ConfigurationError(f"{what} must be a string or a list of strings")


def load_json_config(data: Mapping) -> Machine:
    required = {"alphabet", "slots", "pawls", "rotors"}
    missing = required - data.keys()
    if missing:
        raise ConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")

    alphabet = Alphabet(_text(data["alphabet"], "'alphabet'"))
    if not isinstance(data["rotors"], list):
        raise ConfigurationError("'rotors' must be a list of rotor descriptions")

    descriptions: List[RotorDescription] = []
    for entry in data["rotors"]:
        if not isinstance(entry, dict) or "name" not in entry or "type" not in entry:
            raise ConfigurationError(f"Bad rotor description {entry!r}")
        name = _text(entry["name"], "Rotor name")
        kind = str(entry["type"]).lower()
        if kind not in TYPE_TAGS:
            raise ConfigurationError(f"Undefined rotor type {entry['type']!r} for {name}")

        if "wiring" in entry:
            wiring = _text(entry["wiring"], f"Wiring of {name}")
            cycles = cycles_from_wiring(wiring, alphabet)
        else:
            cycles = _cycle_list(entry.get("cycles", ""), f"Cycles of {name}")
        notches = entry.get("notches", "")
        if isinstance(notches, list) and all(isinstance(n, str) for n in notches):
            notches = "".join(notches)
        notches = _text(notches, f"Notches of {name}")
        descriptions.append(RotorDescription(name, TYPE_TAGS[kind], notches, cycles))

    return build_machine(alphabet, _count(data, "slots"), _count(data, "pawls"), descriptions)


# ────────────────────────────────────────────────────────────────────────
#  3. Entry points
# ────────────────────────────────────────────────────────────────────────


def historical_machine() -> Machine:
    """Four-wheel naval layout over the wheel database: R=5, P=3."""
    return Machine(Alphabet(ALPHA26), 5, 3, historical_catalog())


def load_config(path: str | Path) -> Machine:
    if str(path) == HISTORICAL:
        return historical_machine()

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must hold a JSON object")
        return load_json_config(data)
    return read_config(text)


def setup(machine: Machine, line: str) -> None:
    """
    Apply a setup line, "* B Beta III IV I AXLE [RINGS] (HQ) (EX)", to
    *machine*: rotor names, settings, optional rings, plugboard cycles.
    """
    line = line.strip()
    if not line.startswith("*"):
        raise ConfigurationError(f"Wrong format for settings {line!r}")

    tokens = line[1:].split()
    split = next((i for i, t in enumerate(tokens) if t.startswith("(")), len(tokens))
    head, cycles = tokens[:split], " ".join(tokens[split:])

    n = machine.num_rotors
    if len(head) < n + 1:
        raise IncompleteSettings(f"Setup line needs {n} rotors and their settings")
    if len(head) > n + 2:
        raise ConfigurationError(f"Too many rotors named in {line!r}")

    names, setting = head[:n], head[n]
    rings = head[n + 1] if len(head) == n + 2 else None
    plugboard = Permutation(cycles, machine.alphabet)
    machine.setup(names, setting, rings, plugboard)
    debug.log("config", f"setup {' '.join(names)} {setting} plugboard {plugboard.cycles}")
