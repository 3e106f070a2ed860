from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Set, TYPE_CHECKING
from graphviz import Digraph
from prettytable import PrettyTable

if __name__ == '__main__':
    import os
    import sys
    SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
    sys.path.append(os.path.dirname(SCRIPT_DIR))

from finite_automata.alphabet import Alphabet, make_alphabet
from finite_automata.errors import (AlphabetError, DeterminismMismatchError,
                                    DuplicateStateError, NoEntryPointError,
                                    UnknownStateError)
from finite_automata.state import State
from finite_automata.traversal import StateTraverser, configuration_name
from finite_automata.utils import (Epsilon, StateName, Symbol, check_array_type,
                                   check_type, symbol_name)

if TYPE_CHECKING:
    from finite_automata.partition import PartitionSet
    from finite_automata.subset import SubsetTable


class Automaton:
    """
    A finite automaton over `alphabet`, either deterministic or not.

    The automaton owns the states registered with `make_state`/`add_state`
    and everything reachable from them. Transformations (`to_deterministic_automaton`,
    `to_minimal_dfa`) never modify the automaton, they build a new one.
    """

    def __init__(self, alphabet: Alphabet, deterministic: bool) -> None:
        check_type(alphabet, Alphabet, 'Automaton.alphabet')
        self._alphabet = alphabet
        self._deterministic = deterministic
        self._registered: Dict[StateName, State] = {}
        self._entry_point: Optional[State] = None

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def deterministic(self) -> bool:
        return self._deterministic

    @property
    def entry_point(self) -> Optional[State]:
        return self._entry_point

    @entry_point.setter
    def entry_point(self, state: Optional[State]):
        if state is None:
            self._entry_point = None
            return
        check_type(state, State, 'Automaton.entry_point')
        owned = self.get_state(state.name)
        if owned is None:
            raise UnknownStateError(
                f'State {state.name} is not a state of this automaton')
        # always the owned instance, never a same-name copy
        self._entry_point = owned

    @property
    def states(self) -> List[State]:
        '''
        registered states first, then the states only reachable from them
        '''
        return _reachable(self._registered.values())

    def reachable_states(self) -> List[State]:
        if self._entry_point is None:
            return []
        return _reachable([self._entry_point])

    def get_state(self, name: StateName) -> Optional[State]:
        state = self._registered.get(name)
        if state is not None:
            return state
        for s in self.states:
            if s.name == name:
                return s
        return None

    def __contains__(self, state: object) -> bool:
        return isinstance(state, State) and self.get_state(state.name) is not None

    def add_state(self, state: State) -> bool:
        """
        Register `state` and every state reachable from it.

        Returns True if `state` was not registered before. Raises
        DeterminismMismatchError (and registers nothing) if a nondeterministic
        state would end up in a deterministic automaton.
        """
        check_type(state, State, 'Automaton.add_state.state')
        added = state.name not in self._registered
        self.add_states(state)
        return added

    def add_states(self, *states: State) -> None:
        '''
        register all `states` with a single walk over their closure, nothing is
        registered if one of them does not fit the automaton
        '''
        check_array_type(states, State, 'Automaton.add_states.states')
        closure = _reachable(states)
        if self._deterministic:
            for s in closure:
                if not s.is_deterministic:
                    raise DeterminismMismatchError(
                        f'Deterministic automaton can only contain deterministic states, requested: {s.name}'
                    )
        for s in closure:
            self._registered.setdefault(s.name, s)

    def make_state(self, name: StateName, is_accepting: bool = False) -> State:
        if self.get_state(name) is not None:
            raise DuplicateStateError(
                f'State {name} already exists in this automaton')
        state = State(name, self._alphabet, self._deterministic, is_accepting)
        self._registered[name] = state
        return state

    def make_traverser(self) -> StateTraverser:
        if self._entry_point is None:
            raise NoEntryPointError('Entry point state must be defined!')
        return StateTraverser(self._entry_point, self._alphabet)

    def accepts(self, string: Iterable[Symbol]) -> bool:
        """
        Whether the automaton ends in (a configuration containing) an accepting
        state after reading `string` from the entry point. Without an entry point
        nothing is accepted.
        """
        symbols = list(string)
        if not self._alphabet.contains_all(symbols):
            raise AlphabetError(
                f'All symbols must be part of alphabet {self._alphabet}, requested: {symbols}'
            )
        if self._entry_point is None:
            return False
        traverser = StateTraverser(self._entry_point)
        traverser.traverse(*symbols)
        return traverser.accepted

    def subset_table(self, max_rows: Optional[int] = None) -> 'SubsetTable':
        from finite_automata.subset import build_subset_table
        if self._entry_point is None:
            raise NoEntryPointError('Entry point state must be defined!')
        return build_subset_table(self._entry_point, self._alphabet, max_rows)

    def to_deterministic_automaton(self,
                                   emit_trace: bool = False,
                                   max_rows: Optional[int] = None
                                   ) -> 'Automaton':
        '''
        equivalent dfa built by subset construction, returns self if already deterministic
        '''
        from finite_automata.subset import nfa_to_dfa
        if self._deterministic:
            return self
        return nfa_to_dfa(self, emit_trace=emit_trace, max_rows=max_rows)

    def partition_history(self) -> List['PartitionSet']:
        from finite_automata.partition import refinement_history
        return refinement_history(self)

    def to_minimal_dfa(self, emit_trace: bool = False) -> 'Automaton':
        from finite_automata.partition import minimize_dfa
        return minimize_dfa(self, emit_trace=emit_trace)

    def __repr__(self) -> str:
        columns = [symbol_name(symbol) for symbol in self._alphabet]
        if not self._deterministic:
            columns.append(Epsilon)
        table = PrettyTable(['STATE', *columns])
        # right alignment
        table.align['STATE'] = 'r'

        def format_state(s: State) -> str:
            res = s.name
            if s == self._entry_point:
                res = f'-> {res}'
            if s.is_accepting:
                res = f'* {res}'
            return res

        def format_targets(targets: Iterable[State]) -> str:
            targets = list(targets)
            if self._deterministic and len(targets) == 1:
                return targets[0].name
            return configuration_name(targets)

        for s in self.states:
            row: List[str] = [format_state(s)]
            for symbol in self._alphabet:
                row.append(format_targets(s.transitions_for(symbol)))
            if not self._deterministic:
                row.append(configuration_name(s.epsilon_targets()))
            table.add_row(row)
        return table.get_string()

    def visualize(self) -> Digraph:
        '''
        visualize transition graph
        '''
        g = Digraph(name='dfa' if self._deterministic else 'nfa',
                    graph_attr={'rankdir': 'LR'})

        for state in self.states:
            shape = 'doublecircle' if state.is_accepting else 'circle'
            g.node(name=state.name, label=state.name, shape=shape)

        if self._entry_point is not None:
            g.node(name='vnode', label='', shape='none')
            g.edge('vnode',
                   self._entry_point.name,
                   label='start',
                   arrowsize='0.5')

        for state in self.states:
            # one edge per target, labelled with every symbol leading there
            labels: Dict[StateName, List[str]] = {}
            for symbol in self._alphabet:
                for target in sorted(state.transitions_for(symbol)):
                    labels.setdefault(target.name, []).append(symbol_name(symbol))
            for target in sorted(state.epsilon_targets()):
                labels.setdefault(target.name, []).append(Epsilon)
            for target_name, inputs in labels.items():
                g.edge(state.name,
                       target_name,
                       ','.join(inputs),
                       arrowsize='0.5')
        return g


def _reachable(roots: Iterable[State]) -> List[State]:
    seen: Set[State] = set()
    res: List[State] = []
    queue: Deque[State] = deque(roots)
    while len(queue) != 0:
        state = queue.popleft()
        if state in seen:
            continue
        seen.add(state)
        res.append(state)
        queue.extend(sorted(state.successors()))
    return res


def main():
    alphabet = make_alphabet(0, 1)
    nfa = Automaton(alphabet, False)

    s = nfa.make_state('s')
    q1 = nfa.make_state('q1')
    q2 = nfa.make_state('q2', True)
    p = nfa.make_state('p')
    q = nfa.make_state('q')
    r = nfa.make_state('r', True)

    s.add_epsilon(q1, p)
    q1.add_transition(0, q1)
    q1.add_transition(1, q2)
    q2.add_transition(0, q1)
    p.add_transitions([0, 1], p)
    p.add_transition(1, q)
    q.add_transitions([0, 1], r)

    nfa.entry_point = s
    print('*' * 40)
    print('nfa:')
    print(nfa)

    dfa = nfa.to_deterministic_automaton(emit_trace=True)
    print('*' * 40)
    print('dfa:')
    print(dfa)

    dfa_traverser = dfa.make_traverser()
    dfa_traverser.traverse(1, 1, 0, 0)
    print(dfa_traverser)

    nfa_traverser = nfa.make_traverser()
    nfa_traverser.traverse(1, 1, 0, 0)
    print(nfa_traverser)

    min_dfa = dfa.to_minimal_dfa(emit_trace=True)
    print('*' * 40)
    print('minimal dfa:')
    print(min_dfa)


if __name__ == '__main__':
    main()
