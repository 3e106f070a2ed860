import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, List, Optional, Tuple
from prettytable import PrettyTable

from finite_automata.alphabet import Alphabet
from finite_automata.automaton import Automaton
from finite_automata.errors import NoEntryPointError, StepBudgetExceededError
from finite_automata.state import State
from finite_automata.traversal import (Configuration, ConfigurationKey,
                                       StateTraverser, configuration_key,
                                       configuration_name, is_accepting)
from finite_automata.utils import Symbol, symbol_name

logger = logging.getLogger(__name__)


@dataclass
class SubsetTable:
    """
    The transition table of subset construction: one row per reachable
    epsilon-closed configuration, one column per symbol of the alphabet.
    Rows are looked up by `configuration_key`, so two configurations with the
    same members share a row whatever order they were discovered in.
    """
    alphabet: Alphabet
    start: Configuration
    rows: Dict[ConfigurationKey, Configuration] = field(default_factory=dict)
    moves: Dict[ConfigurationKey, Dict[Symbol, Configuration]] = field(
        default_factory=dict)

    def add_row(self, configuration: Configuration) -> bool:
        key = configuration_key(configuration)
        if key in self.rows:
            return False
        self.rows[key] = configuration
        self.moves[key] = {}
        return True

    def __contains__(self, configuration: Iterable[State]) -> bool:
        return configuration_key(configuration) in self.rows

    def __len__(self) -> int:
        return len(self.rows)

    def target(self, configuration: Iterable[State],
               symbol: Symbol) -> Configuration:
        return self.moves[configuration_key(configuration)][symbol]

    def unfilled(self) -> Optional[Tuple[Configuration, Symbol]]:
        for key, configuration in self.rows.items():
            for symbol in self.alphabet:
                if symbol not in self.moves[key]:
                    return configuration, symbol
        return None

    def is_start(self, configuration: Iterable[State]) -> bool:
        return configuration_key(configuration) == configuration_key(
            self.start)

    def ordered_rows(self) -> List[Configuration]:
        '''
        start row, then rejecting rows, then accepting rows, ties by name
        '''

        def rank(configuration: Configuration) -> Tuple[int, str]:
            if self.is_start(configuration):
                order = 0
            elif is_accepting(configuration):
                order = 2
            else:
                order = 1
            return order, configuration_name(configuration)

        return sorted(self.rows.values(), key=rank)


def build_subset_table(entry_point: State,
                       alphabet: Alphabet,
                       max_rows: Optional[int] = None) -> SubsetTable:
    """
    Fill the table until every row has every column: rows are discovered from
    the closure of `entry_point`, each column is one traversal step. At most
    2^n rows exist for n states, `max_rows` bounds it further.
    """
    traverser = StateTraverser(entry_point)
    table = SubsetTable(alphabet, traverser.current_configuration)
    table.add_row(table.start)

    pending: Deque[Configuration] = deque([table.start])
    while len(pending) != 0:
        curr = pending.popleft()
        for symbol in alphabet:
            traverser.current_configuration = curr
            target = traverser.traverse(symbol)
            table.moves[configuration_key(curr)][symbol] = target
            if target in table:
                continue
            if max_rows is not None and len(table) >= max_rows:
                raise StepBudgetExceededError(
                    f'Subset construction needs more than {max_rows} states')
            table.add_row(target)
            pending.append(target)
            logger.debug('new subset %s from %s on %r',
                         configuration_name(target),
                         configuration_name(curr), symbol)

    assert table.unfilled() is None
    return table


def format_subset_table(table: SubsetTable) -> str:
    symbols = list(table.alphabet)
    pretty = PrettyTable(['NFA STATES', *map(symbol_name, symbols)])
    pretty.align['NFA STATES'] = 'r'
    for configuration in table.ordered_rows():
        name = configuration_name(configuration)
        if table.is_start(configuration):
            name = f'-> {name}'
        if is_accepting(configuration):
            name = f'* {name}'
        row = [name]
        for symbol in symbols:
            row.append(configuration_name(table.target(configuration,
                                                       symbol)))
        pretty.add_row(row)
    return pretty.get_string()


def nfa_to_dfa(nfa: Automaton,
               emit_trace: bool = False,
               max_rows: Optional[int] = None) -> Automaton:
    """
    convert nfa to dfa using subset construction algorithm
    """
    if nfa.deterministic:
        return nfa
    if nfa.entry_point is None:
        raise NoEntryPointError('Entry point state must be defined!')

    table = build_subset_table(nfa.entry_point, nfa.alphabet, max_rows)
    if emit_trace:
        print(format_subset_table(table))

    dfa = Automaton(nfa.alphabet, True)
    # configuration -> new dfa state
    new_states: Dict[ConfigurationKey, State] = {}
    for configuration in table.ordered_rows():
        new_states[configuration_key(configuration)] = State(
            configuration_name(configuration), dfa.alphabet, True,
            is_accepting(configuration))

    for key, moves in table.moves.items():
        for symbol, target in moves.items():
            new_states[key].add_transition(symbol,
                                           new_states[configuration_key(target)])

    # one registration walk for the whole table
    dfa.add_states(*new_states.values())
    dfa.entry_point = new_states[configuration_key(table.start)]
    logger.debug('subset construction built %d states', len(new_states))
    return dfa
