# alphabet_and_permutation.py
from __future__ import annotations

from collections.abc import Sequence

from debug import Debug
from errors import ConfigurationError, InvalidSymbol

debug = Debug()


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Ordered set of distinct symbols, index-addressable from 0."""

    def __init__(self, symbols: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ") -> None:
        if not symbols:
            raise ConfigurationError("Alphabet must contain at least one symbol")
        bad = [ch for ch in symbols if ch.isspace() or ch in "()"]
        if bad:
            raise ConfigurationError(f"Alphabet cannot contain {bad[0]!r}")
        if len(set(symbols)) != len(symbols):
            dup = next(ch for ch in symbols if symbols.count(ch) > 1)
            raise ConfigurationError(f"Symbol {dup!r} appears twice in alphabet")

        self._symbols: str = symbols
        self._index: dict[str, int] = {ch: i for i, ch in enumerate(symbols)}

    @property
    def symbols(self) -> str:
        return self._symbols

    def size(self) -> int:
        return len(self._symbols)

    def contains(self, symbol: str) -> bool:
        return symbol in self._index

    # symbol → integer signal
    def to_index(self, symbol: str) -> int:
        try:
            index = self._index[symbol]
        except KeyError:
            raise InvalidSymbol(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None
        debug.log("alphabet", f"{symbol!r} -> {index}")
        return index

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self._symbols)):
            hi = len(self._symbols) - 1
            raise IndexError(f"Signal {index} out of range 0–{hi}")
        debug.log("alphabet", f"{index} -> {self._symbols[index]!r}")
        return self._symbols[index]

    # immutable, so copies are the object itself
    def __copy__(self) -> "Alphabet":
        return self

    def __deepcopy__(self, memo: dict) -> "Alphabet":
        return self

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self._symbols!r}>"


# ── cycle notation ────────────────────────────────────────────────
def parse_cycles(text: str) -> list[str]:
    """Split "(ABC) (DE)" into ["ABC", "DE"]. Whitespace is ignored."""
    cycles: list[str] = []
    current: list[str] | None = None

    for ch in text:
        if ch.isspace():
            continue
        if ch == "(":
            if current is not None:
                raise ConfigurationError(f"Nested '(' in cycles {text!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise ConfigurationError(f"Unbalanced ')' in cycles {text!r}")
            if not current:
                raise ConfigurationError(f"Empty cycle in {text!r}")
            cycles.append("".join(current))
            current = None
        else:
            if current is None:
                raise ConfigurationError(
                    f"Symbol {ch!r} outside of a cycle in {text!r}"
                )
            current.append(ch)

    if current is not None:
        raise ConfigurationError(f"Unbalanced '(' in cycles {text!r}")
    return cycles


def format_cycles(cycles: Sequence[str]) -> str:
    return " ".join(f"({c})" for c in cycles)


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """
    A permutation of the indices of an alphabet, described by disjoint
    cycles. Symbols not in any cycle map to themselves.

    *cycles* is either cycle notation, "(AELTPHQXRU) (BKNW)", or a sequence
    of bare cycles, ["AELTPHQXRU", "BKNW"].
    """

    def __init__(self, cycles: str | Sequence[str], alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self._cycles: tuple[str, ...] = ()
        self._fwd: list[int] = []
        self._rev: list[int] = []
        self.replace_cycles(cycles)

    def replace_cycles(self, cycles: str | Sequence[str]) -> None:
        """Swap in a new cycle set wholesale. Nothing of the old one survives."""
        parsed = parse_cycles(cycles) if isinstance(cycles, str) else list(cycles)
        fwd, rev = self._tables(parsed)
        # passed validation → commit
        self._cycles = tuple(parsed)
        self._fwd, self._rev = fwd, rev
        debug.log("permutation", f"cycles {format_cycles(self._cycles) or '()'}")

    def _tables(self, cycles: Sequence[str]) -> tuple[list[int], list[int]]:
        n = self.size()
        fwd = list(range(n))
        rev = list(range(n))
        seen: set[int] = set()

        for cycle in cycles:
            if not cycle:
                raise ConfigurationError("Empty cycle in permutation")
            members = [self._alphabet.to_index(ch) for ch in cycle]
            for i in members:
                if i in seen:
                    raise ConfigurationError(
                        f"Symbol {self._alphabet.to_symbol(i)!r} "
                        f"appears in more than one place in the cycles"
                    )
                seen.add(i)
            # each member maps to its successor, the last wraps to the first
            for a, b in zip(members, members[1:] + members[:1]):
                fwd[a] = b
                rev[b] = a
        return fwd, rev

    # ── accessors ────────────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def cycles(self) -> tuple[str, ...]:
        return self._cycles

    def size(self) -> int:
        return self._alphabet.size()

    def wrap(self, p: int) -> int:
        """Return *p* modulo the alphabet size, always non-negative."""
        return p % self.size()

    # ── application ──────────────────────────────────────────────
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    def permute_symbol(self, symbol: str) -> str:
        return self._alphabet.to_symbol(self.permute(self._alphabet.to_index(symbol)))

    def invert_symbol(self, symbol: str) -> str:
        return self._alphabet.to_symbol(self.invert(self._alphabet.to_index(symbol)))

    def derangement(self) -> bool:
        """True iff no index maps to itself."""
        return all(j != i for i, j in enumerate(self._fwd))

    def __repr__(self) -> str:
        return f"<Permutation {format_cycles(self._cycles) or '()'}>"
