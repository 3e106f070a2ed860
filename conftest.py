import pytest

from finite_automata.alphabet import make_alphabet
from finite_automata.automaton import Automaton


@pytest.fixture
def binary():
    return make_alphabet(0, 1)


@pytest.fixture
def epsilon_nfa(binary) -> Automaton:
    nfa = Automaton(binary, False)
    s = nfa.make_state('s')
    a = nfa.make_state('a')
    b = nfa.make_state('b', True)
    c = nfa.make_state('c')
    d = nfa.make_state('d')
    e = nfa.make_state('e', True)

    s.add_epsilon(a, c)
    a.add_transition(1, b)
    b.add_transition(0, b)
    c.add_transition(1, b, d)
    c.add_transition(0, b)
    d.add_transition(0, e)
    e.add_transitions([0, 1], c)

    nfa.entry_point = s
    return nfa


@pytest.fixture
def ternary_nfa() -> Automaton:
    # after subset construction {b} and {c} behave the same
    nfa = Automaton(make_alphabet(0, 1, 2), False)
    a = nfa.make_state('a')
    b = nfa.make_state('b')
    c = nfa.make_state('c')
    d = nfa.make_state('d', True)

    a.add_transition(0, b)
    a.add_transition(1, c)
    a.add_transition(2, d)
    b.add_transition(0, d)
    b.add_transitions([1, 2], b)
    c.add_transition(0, d)
    c.add_transitions([1, 2], c)

    nfa.entry_point = a
    return nfa
