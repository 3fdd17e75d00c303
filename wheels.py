# wheels.py
from __future__ import annotations

from typing import Dict

from alphabet_and_permutation import Alphabet, Permutation
from errors import ConfigurationError
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector, Rotor

ALPHA26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ────────────────────────────────────────────────────────────────────────
#  Wheel database (wiring = image of A, B, C, ...)
# ────────────────────────────────────────────────────────────────────────

# Moving rotors ------------------------------------------------------------
ROTORS: Dict[str, tuple[str, str]] = {
    "I":    ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":   ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":  ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":   ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":    ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":   ("JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":  ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "VIII": ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
}

# Greek (stationary) wheels ----------------------------------------------
FIXED: Dict[str, str] = {
    "Beta":  "LEYJVCNIXWPBQMDRTAKZGFUHOS",
    "Gamma": "FSOKANUERHMBTIYCWLQPZXVGJD",
}

# Reflectors -------------------------------------------------------------
REFLECTORS: Dict[str, str] = {
    "A":      "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B":      "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C":      "FVPJIAOYEDRZXWGCTKUQSBNMHL",
    "B-thin": "ENKQAUYWJICOPBLMDXZVFTHRGS",
    "C-thin": "RDOBJNTKVEHMLFCWZAXGYIPSUQ",
}


def cycles_from_wiring(wiring: str, alphabet: Alphabet) -> list[str]:
    """Return the disjoint cycles of a wiring string, fixed points included."""
    if sorted(wiring) != sorted(alphabet.symbols):
        raise ConfigurationError("wiring must be a permutation of alphabet")

    image = dict(zip(alphabet.symbols, wiring))
    seen: set[str] = set()
    cycles: list[str] = []
    for start in alphabet.symbols:
        if start in seen:
            continue
        cycle = []
        ch = start
        while ch not in seen:
            seen.add(ch)
            cycle.append(ch)
            ch = image[ch]
        cycles.append("".join(cycle))
    return cycles


def historical_catalog() -> Dict[str, Rotor]:
    """Fresh catalog of every wheel in the database over the 26 letters."""
    alpha = Alphabet(ALPHA26)
    catalog: Dict[str, Rotor] = {}

    for name, (wiring, notches) in ROTORS.items():
        perm = Permutation(cycles_from_wiring(wiring, alpha), alpha)
        catalog[name] = MovingRotor(name, perm, notches)
    for name, wiring in FIXED.items():
        catalog[name] = FixedRotor(name, Permutation(cycles_from_wiring(wiring, alpha), alpha))
    for name, wiring in REFLECTORS.items():
        catalog[name] = Reflector(name, Permutation(cycles_from_wiring(wiring, alpha), alpha))
    return catalog
