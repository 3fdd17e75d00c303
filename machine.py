# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Mapping, Sequence
from copy import deepcopy

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigurationError, EnigmaError, IncompleteSettings, UnknownRotor
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """
    An Enigma-style machine with *num_rotors* slots, the rightmost *pawls*
    of which are driven. Slot 0 holds the reflector, the last slot the
    fastest wheel. *all_rotors* is the catalog of wheels that can be
    inserted; the machine works on its own copies of them.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Mapping[str, Rotor],
    ) -> None:
        if num_rotors < 2:
            raise ConfigurationError("A machine needs at least two rotor slots")
        if not (0 <= pawls < num_rotors):
            raise ConfigurationError(
                f"Pawl count must be in 0–{num_rotors - 1}, got {pawls}"
            )

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._all_rotors = dict(all_rotors)
        self._slots: list[Rotor] = []
        self._plugboard = Permutation("", alphabet)

    # ── accessors ────────────────────────────────────────────────
    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._pawls

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        return tuple(self._slots)

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def available(self, name: str) -> bool:
        return name in self._all_rotors

    def positions(self) -> str:
        """Window letters of the non-reflector slots, leftmost first."""
        return "".join(self.alphabet.to_symbol(r.setting) for r in self._slots[1:])

    # ── setup ────────────────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with copies of the named wheels, reflector first."""
        if len(names) != self._num_rotors:
            raise ConfigurationError(
                f"Need exactly {self._num_rotors} rotors, got {len(names)}"
            )
        for name in names:
            if name not in self._all_rotors:
                raise UnknownRotor(f"Rotor {name!r} not available")
        if len(set(names)) != len(names):
            dup = next(n for n in names if list(names).count(n) > 1)
            raise ConfigurationError(f"Rotor {dup!r} used more than once")

        templates = [self._all_rotors[name] for name in names]
        for rotor in templates:
            if rotor.alphabet != self.alphabet:
                raise ConfigurationError(f"Rotor {rotor.name!r} uses another alphabet")
        if not templates[0].reflecting():
            raise ConfigurationError(f"First rotor {names[0]!r} must be a reflector")
        for rotor in templates[1:]:
            if rotor.reflecting():
                raise ConfigurationError(
                    f"Reflector {rotor.name!r} can only sit in the leftmost slot"
                )

        moving = [i for i, r in enumerate(templates) if r.rotates()]
        if len(moving) > self._pawls:
            raise ConfigurationError(
                f"{len(moving)} moving rotors but only {self._pawls} pawls"
            )
        if moving and moving != list(range(self._num_rotors - len(moving), self._num_rotors)):
            raise ConfigurationError("Moving rotors must occupy the rightmost slots")

        # passed validation → commit fresh copies
        slots = [deepcopy(r) for r in templates]
        for rotor in slots:
            rotor.set(0)
            rotor.set_ring(0)
            rotor.leftmost = False
        for left, right in zip(slots, slots[1:]):
            left.right = right
        slots[-1].right = None

        self._slots = slots
        debug.log("config", f"inserted {' '.join(names)}")

    def _require_rotors(self) -> None:
        if len(self._slots) != self._num_rotors:
            raise ConfigurationError("Rotors have not been inserted")

    def _check_symbols(self, text: str, what: str) -> None:
        if len(text) < self._num_rotors - 1:
            raise IncompleteSettings(f"{what} not given for all rotors")
        if len(text) > self._num_rotors - 1:
            raise ConfigurationError(
                f"Too many {what}: expected {self._num_rotors - 1} symbols"
            )
        for ch in text:
            self.alphabet.to_index(ch)

    def set_rotors(self, setting: str) -> None:
        """Set the non-reflector wheels from *setting*, leftmost first."""
        self._require_rotors()
        self._check_symbols(setting, "initial settings")

        for rotor, ch in zip(self._slots[1:], setting):
            rotor.set(ch)
            rotor.leftmost = False

        for rotor in self._slots[self._num_rotors - self._pawls:]:
            if rotor.rotates():
                rotor.leftmost = True
                break
        debug.log("config", f"settings {setting}")

    def set_rings(self, rings: str) -> None:
        """Apply ring settings to the non-reflector wheels, leftmost first."""
        self._require_rotors()
        self._check_symbols(rings, "ring settings")
        for rotor, ch in zip(self._slots[1:], rings):
            rotor.set_ring(ch)
        debug.log("config", f"rings {rings}")

    def set_plugboard(self, plugboard: Permutation) -> None:
        self._plugboard = plugboard

    def setup(
        self,
        names: Sequence[str],
        setting: str,
        rings: str | None = None,
        plugboard: Permutation | None = None,
    ) -> None:
        """
        Replace slots, settings, rings and plugboard in one go. If any part
        is rejected the machine keeps its previous configuration.
        """
        previous = self._slots, self._plugboard
        try:
            self.insert_rotors(names)
            self.set_rotors(setting)
            if rings is not None:
                self.set_rings(rings)
            if plugboard is None:
                plugboard = Permutation("", self.alphabet)
            self.set_plugboard(plugboard)
        except EnigmaError:
            self._slots, self._plugboard = previous
            raise

    # ── stepping ─────────────────────────────────────────────────
    def _step(self) -> None:
        """Advance the pawl-driven wheels for one key press."""
        eligible = self._slots[self._num_rotors - self._pawls:]

        # decide for every wheel before moving any of them
        decisions = []
        for rotor in eligible:
            if rotor.right is None:
                steps = True
            elif rotor.right.at_notch():
                steps = True
            else:
                steps = rotor.at_notch() and not rotor.leftmost
            decisions.append(steps)

        for rotor, steps in zip(eligible, decisions):
            if steps:
                rotor.advance()

        if debug.active("stepping"):
            debug.log("stepping", f"positions {self.positions()}")

    # ── conversion ───────────────────────────────────────────────
    def convert(self, c: int) -> int:
        """Advance the machine, then pass signal *c* through it."""
        self._require_rotors()
        if not (0 <= c < self.alphabet.size()):
            raise IndexError(f"Signal {c} out of range 0–{self.alphabet.size() - 1}")
        self._step()

        signal = self._plugboard.permute(c)
        for rotor in reversed(self._slots):
            signal = rotor.convert_forward(signal)
        for rotor in self._slots[1:]:
            signal = rotor.convert_backward(signal)
        signal = self._plugboard.invert(signal)

        debug.log("signal", f"{c}->{signal}")
        return signal

    def convert_message(self, msg: str) -> str:
        """Encode or decode *msg*; every symbol must be in the alphabet."""
        indices = [self.alphabet.to_index(ch) for ch in msg]
        return "".join(self.alphabet.to_symbol(self.convert(i)) for i in indices)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._slots)
        return f"<Machine [{names}] pos={self.positions()}>"
