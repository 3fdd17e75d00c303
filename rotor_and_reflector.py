# rotor_and_reflector.py
from __future__ import annotations

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigurationError

debug = Debug()


class Rotor:
    """
    A named wheel holding one Permutation and a rotational offset.

    The base class neither rotates nor reflects; FixedRotor, MovingRotor and
    Reflector pick their capabilities. `right` is the wheel physically to the
    right in the machine (None for the rightmost one) and `leftmost` marks the
    leftmost rotating wheel; both are assigned by the Machine.
    """

    def __init__(self, name: str, perm: Permutation) -> None:
        self.name = name
        self.permutation = perm
        self._setting = 0
        self._ring = 0
        self.right: Rotor | None = None
        self.leftmost = False

    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    def size(self) -> int:
        return self.permutation.size()

    # ── capabilities ─────────────────────────────────────────────
    def rotates(self) -> bool:
        return False

    def reflecting(self) -> bool:
        return False

    # ── setting & ring ───────────────────────────────────────────
    @property
    def setting(self) -> int:
        return self._setting

    @property
    def ring(self) -> int:
        return self._ring

    def _as_index(self, posn: int | str) -> int:
        if isinstance(posn, str):
            posn = self.alphabet.to_index(posn)
        return self.permutation.wrap(posn)

    def set(self, posn: int | str) -> None:
        self._setting = self._as_index(posn)

    def set_ring(self, posn: int | str) -> None:
        self._ring = self._as_index(posn)

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, p: int) -> int:
        shift = self._setting - self._ring
        mapped = self.permutation.permute(p + shift)
        result = self.permutation.wrap(mapped - shift)
        debug.log("rotor", f"{self.name} fwd {p}->{result}")
        return result

    def convert_backward(self, e: int) -> int:
        shift = self._setting - self._ring
        mapped = self.permutation.invert(e + shift)
        result = self.permutation.wrap(mapped - shift)
        debug.log("rotor", f"{self.name} bwd {e}->{result}")
        return result

    # ── stepping ─────────────────────────────────────────────────
    def at_notch(self) -> bool:
        return False

    def advance(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} pos={self._setting} ring={self._ring}>"


class FixedRotor(Rotor):
    """A stationary wheel: in the signal path, never advances."""


class MovingRotor(Rotor):
    """A wheel driven by a pawl, with one or more notch positions."""

    def __init__(self, name: str, perm: Permutation, notches: str) -> None:
        super().__init__(name, perm)
        # InvalidSymbol for any notch outside the alphabet
        self.notches: frozenset[int] = frozenset(
            perm.alphabet.to_index(ch) for ch in notches
        )

    def rotates(self) -> bool:
        return True

    def at_notch(self) -> bool:
        return self._setting in self.notches

    def advance(self) -> None:
        self.set(self._setting + 1)


class Reflector(Rotor):
    """Leftmost wheel; turns the signal back. Its wiring has no fixed points."""

    def __init__(self, name: str, perm: Permutation) -> None:
        if not perm.derangement():
            raise ConfigurationError(
                f"Reflector {name} wiring must map every symbol elsewhere"
            )
        super().__init__(name, perm)

    def reflecting(self) -> bool:
        return True

    def set(self, posn: int | str) -> None:
        if self._as_index(posn) != 0:
            raise ConfigurationError(f"Reflector {self.name} cannot be rotated")

    def set_ring(self, posn: int | str) -> None:
        if self._as_index(posn) != 0:
            raise ConfigurationError(f"Reflector {self.name} has no ring setting")
