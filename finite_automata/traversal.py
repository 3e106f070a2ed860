from typing import FrozenSet, Iterable, List, Optional, Set, Tuple
from typing_extensions import TypeAlias

from finite_automata.alphabet import Alphabet
from finite_automata.errors import AlphabetError
from finite_automata.state import State
from finite_automata.utils import StateName, Symbol, check_type, state_set_name

# all states the automaton could currently be in
Configuration: TypeAlias = FrozenSet[State]

# order independent lookup key of a configuration
ConfigurationKey: TypeAlias = Tuple[StateName, ...]


def epsilon_closure(states: Iterable[State]) -> Configuration:
    """
    This is the set of all the states which can be reached by following epsilon
    edges from any of `states` (the states themselves included).
    Depth first search, already visited states are skipped so epsilon cycles
    terminate.
    """
    closure: Set[State] = set()
    stack: List[State] = list(states)
    while len(stack) != 0:
        state = stack.pop()
        if state in closure:
            continue
        closure.add(state)
        stack.extend(s for s in state.epsilon_targets() if s not in closure)
    return frozenset(closure)


def move(configuration: Iterable[State], symbol: Symbol) -> Configuration:
    res: Set[State] = set()
    for state in configuration:
        res.update(state.transitions_for(symbol))
    return frozenset(res)


def step(configuration: Iterable[State], symbol: Symbol) -> Configuration:
    return epsilon_closure(move(configuration, symbol))


def is_accepting(configuration: Iterable[State]) -> bool:
    return any(s.is_accepting for s in configuration)


def configuration_key(configuration: Iterable[State]) -> ConfigurationKey:
    return tuple(sorted(s.name for s in configuration))


def configuration_name(configuration: Iterable[State]) -> str:
    return state_set_name(s.name for s in configuration)


class StateTraverser:
    """
    Simulates an automaton from `entry_point`.

    The current configuration starts as the epsilon closure of the entry point,
    every consumed symbol replaces it by the closure of its successors. Once the
    configuration is empty the traverser is stuck and stays empty.
    """

    def __init__(self,
                 entry_point: State,
                 alphabet: Optional[Alphabet] = None) -> None:
        check_type(entry_point, State, 'StateTraverser.entry_point')
        self._alphabet = alphabet
        self._configuration: Configuration = epsilon_closure([entry_point])

    @property
    def current_configuration(self) -> Configuration:
        return self._configuration

    @current_configuration.setter
    def current_configuration(self, configuration: Iterable[State]):
        self._configuration = frozenset(configuration)

    @property
    def accepted(self) -> bool:
        return is_accepting(self._configuration)

    def traverse(self, *symbols: Symbol) -> Configuration:
        if self._alphabet is not None and not self._alphabet.contains_all(
                symbols):
            raise AlphabetError(
                f'All symbols must be part of alphabet {self._alphabet}, requested: {list(symbols)}'
            )
        for symbol in symbols:
            self._configuration = step(self._configuration, symbol)
        return self._configuration

    def __repr__(self) -> str:
        return configuration_name(self._configuration)
