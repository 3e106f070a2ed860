from typing import Iterable, Iterator, List, Tuple

from finite_automata.errors import DuplicateSymbolError
from finite_automata.utils import Symbol, symbol_name


class Alphabet:
    # ordered, immutable sequence of distinct symbols
    def __init__(self, symbols: Iterable[Symbol]) -> None:
        unique: List[Symbol] = []
        for symbol in symbols:
            if any(symbol == s for s in unique):
                raise DuplicateSymbolError(
                    f'Symbols of an alphabet must be unique, duplicate: {symbol!r}'
                )
            unique.append(symbol)
        self._symbols: Tuple[Symbol, ...] = tuple(unique)
        self._lookup = frozenset(self._symbols)

    @property
    def symbols(self) -> List[Symbol]:
        return list(self._symbols)

    def contains(self, symbol: Symbol) -> bool:
        try:
            return symbol in self._lookup
        except TypeError:
            # unhashable values can never be symbols
            return False

    def contains_all(self, sequence: Iterable[Symbol]) -> bool:
        return all(self.contains(symbol) for symbol in sequence)

    def __contains__(self, symbol: object) -> bool:
        return self.contains(symbol)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, Alphabet):
            return False
        return self._symbols == __o._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f'{{{",".join(map(symbol_name, self._symbols))}}}'


def make_alphabet(*symbols: Symbol) -> Alphabet:
    return Alphabet(symbols)
