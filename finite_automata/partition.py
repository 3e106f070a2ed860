import logging
from typing import Dict, Iterable, List, Tuple
from typing_extensions import TypeAlias
from prettytable import PrettyTable

from finite_automata.alphabet import Alphabet
from finite_automata.automaton import Automaton
from finite_automata.errors import (DeterminismMismatchError, NotDeterministicError,
                                    PartitionInvariantError)
from finite_automata.state import State
from finite_automata.utils import state_set_name

logger = logging.getLogger(__name__)

# states believed to be equivalent in the current round
Partition: TypeAlias = List[State]

PartitionSet: TypeAlias = List[Partition]

GroupId: TypeAlias = int

Signature: TypeAlias = Tuple[GroupId, ...]

# the virtual group of a missing transition
FALLBACK_GROUP_ID: GroupId = -1


def partition_name(partition: Iterable[State]) -> str:
    return state_set_name(s.name for s in partition)


def initial_partition(states: Iterable[State]) -> PartitionSet:
    accepting: Partition = []
    rejecting: Partition = []
    for s in states:
        (accepting if s.is_accepting else rejecting).append(s)
    return [p for p in (accepting, rejecting) if len(p) != 0]


def ensure_correctness(partitions: PartitionSet,
                       states: Iterable[State]) -> None:
    """
    Raise PartitionInvariantError unless `partitions` are non-empty, pairwise
    disjoint and cover exactly `states`.
    """
    owner: Dict[State, GroupId] = {}
    for group_id, partition in enumerate(partitions):
        if len(partition) == 0:
            raise PartitionInvariantError(f'Partition {group_id} is empty!')
        for s in partition:
            if s in owner:
                raise PartitionInvariantError(
                    f'Two partitions cannot share a state! {s.name} is in {partition_name(partitions[owner[s]])} and {partition_name(partition)}'
                )
            owner[s] = group_id
    expected = set(states)
    missing = expected - set(owner)
    if len(missing) != 0:
        raise PartitionInvariantError(
            f'States not in any partition: {partition_name(missing)}')
    unknown = set(owner) - expected
    if len(unknown) != 0:
        raise PartitionInvariantError(
            f'Partitions contain unknown states: {partition_name(unknown)}')


def group_index(partitions: PartitionSet) -> Dict[State, GroupId]:
    return dict((s, group_id) for group_id, partition in enumerate(partitions)
                for s in partition)


def signature(state: State, alphabet: Alphabet,
              index: Dict[State, GroupId]) -> Signature:
    '''
    the group each symbol leads to, FALLBACK_GROUP_ID if there is no transition
    '''
    res: List[GroupId] = []
    for symbol in alphabet:
        targets = state.transitions_for(symbol)
        if len(targets) == 0:
            res.append(FALLBACK_GROUP_ID)
            continue
        (target, ) = targets
        res.append(index[target])
    return tuple(res)


def refine(partitions: PartitionSet, alphabet: Alphabet) -> PartitionSet:
    """
    One refinement round: every group is split by the signature of its states
    with respect to the groups of the previous round.
    """
    index = group_index(partitions)
    res: PartitionSet = []
    for partition in partitions:
        groups: Dict[Signature, Partition] = {}
        for s in partition:
            groups.setdefault(signature(s, alphabet, index), []).append(s)
        if len(groups) != 1:
            logger.debug('split group %s into %s', partition_name(partition),
                         ' / '.join(map(partition_name, groups.values())))
        res.extend(groups.values())
    return res


def dfa_states(dfa: Automaton) -> List[State]:
    '''
    the states to minimize over: everything reachable from the entry point,
    or every owned state when there is no entry point
    '''
    if not dfa.deterministic:
        raise NotDeterministicError(
            'Only deterministic automata can be minimized')
    states = dfa.states if dfa.entry_point is None else dfa.reachable_states()
    for s in states:
        if not s.is_deterministic:
            raise DeterminismMismatchError(
                f'Deterministic automaton contains nondeterministic state {s.name}'
            )
    return states


def refinement_history(dfa: Automaton) -> List[PartitionSet]:
    """
    Every partition set from the accepting/rejecting split up to the fixed
    point, the last one being the coarsest stable partition. Groups only ever
    split, so a round without a new group is the fixed point.
    """
    states = dfa_states(dfa)
    partitions = initial_partition(states)
    ensure_correctness(partitions, states)
    history: List[PartitionSet] = [partitions]
    while True:
        refined = refine(partitions, dfa.alphabet)
        ensure_correctness(refined, states)
        if len(refined) == len(partitions):
            break
        history.append(refined)
        partitions = refined
    logger.debug('refinement reached %d groups after %d rounds',
                 len(partitions), len(history))
    return history


def format_partition_history(history: List[PartitionSet]) -> str:
    table = PrettyTable(['ROUND', 'GroupId', 'States'])
    for n_round, partitions in enumerate(history):
        for group_id, partition in enumerate(partitions):
            table.add_row([n_round, group_id, partition_name(partition)])
    return table.get_string()


def minimize_dfa(dfa: Automaton, emit_trace: bool = False) -> Automaton:
    """
    Collapse every group of the stable partition into one state. A group is
    accepting iff its states are (they all agree since the first split), its
    transitions are those of any member mapped to groups.
    """
    history = refinement_history(dfa)
    if emit_trace:
        print(format_partition_history(history))
    partitions = history[-1]
    index = group_index(partitions)

    def order(group_id: GroupId) -> Tuple[bool, str]:
        is_entry = dfa.entry_point is not None and dfa.entry_point in partitions[
            group_id]
        return not is_entry, partition_name(partitions[group_id])

    minimal = Automaton(dfa.alphabet, True)
    new_states: Dict[GroupId, State] = {}
    for group_id in sorted(range(len(partitions)), key=order):
        partition = partitions[group_id]
        new_states[group_id] = State(partition_name(partition), dfa.alphabet,
                                     True, partition[0].is_accepting)

    for group_id, partition in enumerate(partitions):
        representative = partition[0]
        for symbol in dfa.alphabet:
            for target in representative.transitions_for(symbol):
                new_states[group_id].add_transition(symbol,
                                                    new_states[index[target]])

    minimal.add_states(*new_states.values())
    if dfa.entry_point is not None:
        minimal.entry_point = new_states[index[dfa.entry_point]]
    return minimal
