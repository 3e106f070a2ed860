class AutomatonError(Exception):
    '''
    base class of every error raised by the automata package
    '''

    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class DuplicateSymbolError(AutomatonError, ValueError):
    pass


class AlphabetError(AutomatonError, ValueError):
    pass


class InvalidSymbolError(AlphabetError):
    pass


class DeterminismViolationError(AutomatonError, ValueError):
    pass


class DeterminismMismatchError(AutomatonError, ValueError):
    pass


class DuplicateStateError(AutomatonError, ValueError):
    pass


class UnknownStateError(AutomatonError, ValueError):
    pass


class NoEntryPointError(AutomatonError, RuntimeError):
    pass


class NotDeterministicError(AutomatonError, RuntimeError):
    pass


class StepBudgetExceededError(AutomatonError, RuntimeError):
    pass


class PartitionInvariantError(AutomatonError, RuntimeError):
    '''
    the partition set stopped being a partition of the state set,
    this is a defect in the refinement step and aborts minimization
    '''
    pass
