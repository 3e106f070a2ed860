from typing import Dict, FrozenSet, Iterable, Set

from finite_automata.alphabet import Alphabet
from finite_automata.errors import DeterminismViolationError, InvalidSymbolError
from finite_automata.utils import StateName, Symbol, check_array_type, check_type


class State:
    """
    A node of a finite automaton.

    States are identified by their name: two State objects with the same name
    are the same state, every set/dict of states in this package relies on it.
    A deterministic state maps each symbol to at most one target and has no
    epsilon transitions.
    """

    def __init__(self,
                 name: StateName,
                 alphabet: Alphabet,
                 is_deterministic: bool,
                 is_accepting: bool = False) -> None:
        check_type(name, str, 'State.name')
        check_type(alphabet, Alphabet, 'State.alphabet')
        self._name = name
        self._alphabet = alphabet
        self._is_deterministic = is_deterministic
        self._is_accepting = is_accepting
        self._transitions: Dict[Symbol, Set['State']] = {}
        self._epsilon: Set['State'] = set()

    @property
    def name(self) -> StateName:
        return self._name

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def is_deterministic(self) -> bool:
        return self._is_deterministic

    @property
    def is_accepting(self) -> bool:
        return self._is_accepting

    def add_transition(self, symbol: Symbol, *targets: 'State') -> None:
        """
        Declare that reading `symbol` in this state may lead to each of `targets`.

        Raises InvalidSymbolError if the symbol is not part of the alphabet and
        DeterminismViolationError if a deterministic state would end up with
        more than one target for the symbol, or with a nondeterministic one.
        """
        if not self._alphabet.contains(symbol):
            raise InvalidSymbolError(
                f'Symbol {symbol!r} of state {self._name} is not in alphabet {self._alphabet}'
            )
        check_array_type(targets, State, 'State.add_transition.targets')
        if self._is_deterministic:
            for target in targets:
                if not target.is_deterministic:
                    raise DeterminismViolationError(
                        f'Deterministic state {self._name} cannot lead to nondeterministic state {target.name}'
                    )
            distinct = set(targets) | self._transitions.get(symbol, set())
            if len(distinct) > 1:
                raise DeterminismViolationError(
                    f'Deterministic state {self._name} can only have one target on {symbol!r}, requested: {sorted(s.name for s in distinct)}'
                )
        if len(targets) == 0:
            return
        self._transitions.setdefault(symbol, set()).update(targets)

    def add_transitions(self, symbols: Iterable[Symbol],
                        *targets: 'State') -> None:
        for symbol in symbols:
            self.add_transition(symbol, *targets)

    def add_epsilon(self, *targets: 'State') -> None:
        if self._is_deterministic:
            raise DeterminismViolationError(
                f'Deterministic state {self._name} cannot have epsilon transitions'
            )
        check_array_type(targets, State, 'State.add_epsilon.targets')
        self._epsilon.update(targets)

    def transitions_for(self, symbol: Symbol) -> FrozenSet['State']:
        return frozenset(self._transitions.get(symbol, ()))

    def epsilon_targets(self) -> FrozenSet['State']:
        # one hop only, see traversal.epsilon_closure for the closure
        return frozenset(self._epsilon)

    def successors(self) -> FrozenSet['State']:
        res: Set['State'] = set(self._epsilon)
        for targets in self._transitions.values():
            res.update(targets)
        return frozenset(res)

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, State):
            return False
        return self._name == __o._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __lt__(self, other: 'State') -> bool:
        return self._name < other._name

    def __repr__(self) -> str:
        return self._name
