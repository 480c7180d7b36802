'''Basic string utilities, including printing'''

from ..config import Features
from ..constants import FUNC_TO_STRING, KEYWORD_DEBUG, KEYWORD_PRINT
from ..func.native import Mut
from ..module import Module
from ..types import format as fmt
from ..types.dynamic import INT, FLOAT, Array, Char, ImmutableString, Map, Unit
from ..types.numeric import F32, SIZED_INTS
from . import def_package


# Register print and debug
def to_debug(x) -> ImmutableString:
    return fmt.to_debug(x)


def to_string(x) -> ImmutableString:
    return fmt.to_display(x)


def format_map(x) -> ImmutableString:
    return fmt.format_map(x)


def _empty() -> ImmutableString:
    return ''


def _unit_to_empty(_) -> ImmutableString:
    return ''


def _identity(s) -> ImmutableString:
    return s


def _concat(s: ImmutableString, tail) -> ImmutableString:
    return s + tail


def _append(s: Mut[ImmutableString], tail) -> None:
    s.value = s.value + tail


def _reg_op(lib: Module, name: str, func, *types: type):
    for t in types:
        lib.set_fn_1_mut(name, func, t)


@def_package('BasicStringPackage', 'Basic string utilities, including printing.')
def BasicStringPackage(lib: Module, features: Features):
    _reg_op(lib, KEYWORD_PRINT, to_string, INT, bool, Char)
    _reg_op(lib, FUNC_TO_STRING, to_string, INT, bool, Char)

    lib.set_fn_0(KEYWORD_PRINT, _empty)
    lib.set_fn_1(KEYWORD_PRINT, _unit_to_empty, Unit)
    lib.set_fn_1(FUNC_TO_STRING, _unit_to_empty, Unit)

    lib.set_fn_1(KEYWORD_PRINT, _identity, ImmutableString)
    lib.set_fn_1(FUNC_TO_STRING, _identity, ImmutableString)

    _reg_op(lib, KEYWORD_DEBUG, to_debug, INT, bool, Unit, Char, ImmutableString)

    if features.sized_integers:
        _reg_op(lib, KEYWORD_PRINT, to_string, *SIZED_INTS)
        _reg_op(lib, FUNC_TO_STRING, to_string, *SIZED_INTS)
        _reg_op(lib, KEYWORD_DEBUG, to_debug, *SIZED_INTS)

    if features.floating_point:
        _reg_op(lib, KEYWORD_PRINT, to_string, FLOAT, F32)
        _reg_op(lib, FUNC_TO_STRING, to_string, FLOAT, F32)
        _reg_op(lib, KEYWORD_DEBUG, to_debug, FLOAT, F32)

    if features.arrays:
        _reg_op(lib, KEYWORD_PRINT, to_debug, Array)
        _reg_op(lib, FUNC_TO_STRING, to_debug, Array)
        _reg_op(lib, KEYWORD_DEBUG, to_debug, Array)

    if features.object_maps:
        _reg_op(lib, KEYWORD_PRINT, format_map, Map)
        _reg_op(lib, FUNC_TO_STRING, format_map, Map)
        _reg_op(lib, KEYWORD_DEBUG, format_map, Map)

    lib.set_fn_2('+', _concat, ImmutableString, Char)
    lib.set_fn_2('+', _concat, ImmutableString, ImmutableString)
    lib.set_fn_2_mut('append', _append, Mut[ImmutableString], Char)
    lib.set_fn_2_mut('append', _append, Mut[ImmutableString], ImmutableString)
