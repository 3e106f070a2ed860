import pytest
from graphviz import Digraph

from finite_automata.alphabet import make_alphabet
from finite_automata.automaton import Automaton, main
from finite_automata.errors import (AlphabetError, DeterminismMismatchError,
                                    DuplicateStateError, NoEntryPointError,
                                    NotDeterministicError, UnknownStateError)
from finite_automata.state import State


def test_make_state(binary):
    nfa = Automaton(binary, False)
    dfa = Automaton(binary, True)
    assert not nfa.make_state('q').is_deterministic
    assert dfa.make_state('q', True).is_deterministic
    assert dfa.get_state('q').is_accepting
    assert [s.name for s in dfa.states] == ['q']


def test_duplicate_state(binary):
    nfa = Automaton(binary, False)
    nfa.make_state('q')
    with pytest.raises(DuplicateStateError):
        nfa.make_state('q', True)


def test_duplicate_of_reachable_state(binary):
    nfa = Automaton(binary, False)
    p = nfa.make_state('p')
    p.add_transition(0, State('hidden', binary, False))
    with pytest.raises(DuplicateStateError):
        nfa.make_state('hidden')


def test_add_state_is_transitive(binary):
    p = State('p', binary, False)
    q = State('q', binary, False)
    r = State('r', binary, False, True)
    p.add_transition(0, q)
    q.add_epsilon(r)
    nfa = Automaton(binary, False)
    assert nfa.add_state(p)
    assert not nfa.add_state(p)
    assert q in nfa
    assert r in nfa
    assert nfa.get_state('r') is r
    assert nfa.get_state('missing') is None


def test_add_states(binary):
    dfa = Automaton(binary, True)
    p = State('p', binary, True)
    q = State('q', binary, True)
    dfa.add_states(p, q)
    assert {s.name for s in dfa.states} == {'p', 'q'}


def test_nondeterministic_state_in_dfa(binary):
    dfa = Automaton(binary, True)
    with pytest.raises(DeterminismMismatchError):
        dfa.add_state(State('n', binary, False))
    p = State('p', binary, True)
    with pytest.raises(DeterminismMismatchError):
        dfa.add_states(p, State('n', binary, False))
    # nothing was registered
    assert dfa.states == []


def test_deterministic_state_in_nfa(binary):
    nfa = Automaton(binary, False)
    assert nfa.add_state(State('d', binary, True))


def test_states_follow_transitions_added_later(binary):
    nfa = Automaton(binary, False)
    p = nfa.make_state('p')
    q = State('q', binary, False)
    p.add_epsilon(q)
    assert [s.name for s in nfa.states] == ['p', 'q']
    nfa.entry_point = q
    assert nfa.entry_point is q


def test_entry_point_must_be_owned(binary):
    nfa = Automaton(binary, False)
    nfa.make_state('p')
    with pytest.raises(UnknownStateError):
        nfa.entry_point = State('x', binary, False)
    nfa.entry_point = None
    assert nfa.entry_point is None


def test_entry_point_is_the_owned_state(binary):
    nfa = Automaton(binary, False)
    a = nfa.make_state('a')
    b = nfa.make_state('b', True)
    a.add_transition(0, b)
    # same name, but none of the transitions of `a`
    nfa.entry_point = State('a', binary, False)
    assert nfa.entry_point is a
    assert nfa.accepts([0])
    assert nfa.make_traverser().traverse(0) == {b}
    assert '-> a' in repr(nfa)


def test_generated_states_keep_table_order(epsilon_nfa):
    dfa = epsilon_nfa.to_deterministic_automaton()
    assert [s.name for s in dfa.states] == [
        '{a,c,s}', '{c}', 'Ø', '{b,c}', '{b,d}', '{b,e}', '{b}'
    ]
    for state in dfa.states:
        assert dfa.get_state(state.name) is state


def test_accepts_without_entry_point(binary):
    nfa = Automaton(binary, False)
    nfa.make_state('p', True)
    assert not nfa.accepts([])
    assert not nfa.accepts([0, 1])
    with pytest.raises(AlphabetError):
        nfa.accepts([0, 2])


def test_accepts_checks_alphabet(epsilon_nfa):
    with pytest.raises(AlphabetError):
        epsilon_nfa.accepts([1, 0, 5])
    with pytest.raises(AlphabetError):
        epsilon_nfa.accepts('10')


def test_accepts_epsilon_nfa(epsilon_nfa):
    assert epsilon_nfa.accepts([1, 0, 0, 1, 0])
    assert not epsilon_nfa.accepts([])
    assert epsilon_nfa.accepts([0])
    assert not epsilon_nfa.accepts([1, 1])


def test_accepts_string_symbols():
    alphabet = make_alphabet('a', 'b')
    dfa = Automaton(alphabet, True)
    even = dfa.make_state('even', True)
    odd = dfa.make_state('odd')
    even.add_transition('a', odd)
    odd.add_transition('a', even)
    even.add_transition('b', even)
    odd.add_transition('b', odd)
    dfa.entry_point = even
    assert dfa.accepts('abba')
    assert dfa.accepts('')
    assert not dfa.accepts('ab')


def test_make_traverser(epsilon_nfa, binary):
    traverser = epsilon_nfa.make_traverser()
    assert {s.name for s in traverser.current_configuration} == {'s', 'a', 'c'}
    traverser.traverse(1, 0)
    assert {s.name for s in traverser.current_configuration} == {'b', 'e'}
    assert traverser.accepted
    with pytest.raises(AlphabetError):
        traverser.traverse(3)
    with pytest.raises(NoEntryPointError):
        Automaton(binary, False).make_traverser()


def test_dfa_traverser_has_one_state(epsilon_nfa):
    dfa = epsilon_nfa.to_deterministic_automaton()
    traverser = dfa.make_traverser()
    for symbol in [1, 0, 0, 1, 0, 1, 1]:
        traverser.traverse(symbol)
        assert len(traverser.current_configuration) <= 1


def test_to_deterministic_needs_entry_point(binary):
    nfa = Automaton(binary, False)
    nfa.make_state('p')
    with pytest.raises(NoEntryPointError):
        nfa.to_deterministic_automaton()
    with pytest.raises(NoEntryPointError):
        nfa.subset_table()


def test_to_deterministic_on_dfa_is_identity(binary):
    dfa = Automaton(binary, True)
    dfa.make_state('p')
    assert dfa.to_deterministic_automaton() is dfa


def test_minimize_needs_dfa(epsilon_nfa):
    with pytest.raises(NotDeterministicError):
        epsilon_nfa.to_minimal_dfa()
    with pytest.raises(NotDeterministicError):
        epsilon_nfa.partition_history()


def test_transformations_leave_source_untouched(epsilon_nfa):
    before = repr(epsilon_nfa)
    dfa = epsilon_nfa.to_deterministic_automaton()
    dfa_before = repr(dfa)
    dfa.to_minimal_dfa()
    assert repr(epsilon_nfa) == before
    assert repr(dfa) == dfa_before


def test_repr_table(epsilon_nfa):
    table = repr(epsilon_nfa)
    assert 'STATE' in table
    assert 'ε' in table
    assert '-> s' in table
    assert '* b' in table
    assert '{b,d}' in table
    assert '{a,c}' in table


def test_repr_dfa_table(epsilon_nfa):
    table = repr(epsilon_nfa.to_deterministic_automaton())
    assert 'ε' not in table
    assert '-> {a,c,s}' in table
    assert '* {b,e}' in table


def test_visualize(epsilon_nfa):
    g = epsilon_nfa.visualize()
    assert isinstance(g, Digraph)
    source = g.source
    assert 'doublecircle' in source
    assert 'start' in source
    assert 'ε' in source
    assert 'rankdir=LR' in source


def test_visualize_without_entry_point(binary):
    dfa = Automaton(binary, True)
    dfa.make_state('p')
    assert 'start' not in dfa.visualize().source


def test_main(capsys):
    main()
    out = capsys.readouterr().out
    assert 'nfa:' in out
    assert 'minimal dfa:' in out
    assert 'NFA STATES' in out
    assert 'ROUND' in out
