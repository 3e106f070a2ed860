from typing import Hashable, Iterable
from typing_extensions import TypeAlias

Epsilon: str = 'ε'

# empty set
Oslash: str = 'Ø'

# any hashable, comparable value can be an input symbol
Symbol: TypeAlias = Hashable

StateName: TypeAlias = str


_SEPARATORS = ',{}\\'


def _is_set_name(name: StateName) -> bool:
    # a single {...} group spanning the whole name, as built by state_set_name
    if not name.startswith('{') or '\\' in name:
        return False
    depth = 0
    for i, ch in enumerate(name):
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                return i == len(name) - 1
    return False


def _member_name(name: StateName) -> str:
    if _is_set_name(name) or not any(ch in _SEPARATORS for ch in name):
        return name
    return ''.join(f'\\{ch}' if ch in _SEPARATORS else ch for ch in name)


def state_set_name(names: Iterable[StateName]) -> str:
    '''
    canonical name of a set of states, e.g. {a,b,c}, independent of order.

    Names of sets are nested as they are, e.g. {{a,b},{c}}. Any other member
    name containing `,` `{` `}` or `\\` has those characters escaped with a
    backslash, so {a\\,b} (one state `a,b`) and {a,b} (states `a` and `b`)
    stay distinct.
    '''
    ordered = sorted(names)
    if len(ordered) == 0:
        return Oslash
    return f'{{{",".join(_member_name(name) for name in ordered)}}}'


def symbol_name(symbol: Symbol) -> str:
    return f'{symbol}'


def check_type(_obj: object, _type, field_name: str):
    if not isinstance(_obj, _type):
        raise TypeError(
            f'Field {field_name} must be type {_type}, requested {type(_obj)}.')


def check_array_type(_list: Iterable, element_type, field_name: str):
    for element in _list:
        check_type(element, element_type, field_name)
