'''
Text forms of runtime values

``to_display`` is what ``print``/``to_string`` show, ``to_debug`` is the
``debug`` form (strings quoted, chars in single quotes, unit as ``()``).

Only the display form rounds floats to ``float_precision_decimals``; the
debug form shows the exact round-trip value.
'''

import math
from decimal import Decimal
from typing import Any

from ..config import default_float_precision_decimals
from .dynamic import Char, Dynamic
from .numeric import F32

FLOAT_ROUND_REL_TOL = 1e-6
FLOAT_ROUND_ABS_TOL = 1e-9

MAP_MARKER = '#'

_ESCAPES = {
    '\\': '\\\\',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\0': '\\0',
}


def format_float(value: float) -> str:
    if math.isnan(value):
        return 'NaN'

    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'

    if isinstance(value, F32):
        return _format_f32(value)

    value = float(value)
    precision = default_float_precision_decimals()
    round_value = round(value, precision)

    rel_tol = FLOAT_ROUND_REL_TOL
    abs_tol = FLOAT_ROUND_ABS_TOL

    if abs(round_value - value) <= max(abs(value) * rel_tol, abs_tol):
        value = round_value

    return f'{value}'


def _format_f32(value: F32) -> str:
    # Shortest text that reads back as the same single precision value
    for digits in range(1, 10):
        text = f'{float(value):.{digits}g}'
        if F32(float(text)) == value:
            break

    return repr(float(text))


def _float_repr(value: float) -> str:
    '''Exact round-trip text, no rounding to the display precision'''
    if math.isnan(value) or math.isinf(value):
        return format_float(value)

    if isinstance(value, F32):
        return _format_f32(value)

    return repr(float(value))


def _expand_exponent(text: str) -> str:
    # 1e+20 -> 100000000000000000000, 1e-07 -> 0.0000001
    if 'e' not in text:
        return text

    return format(Decimal(text), 'f')


def _escape(text: str, quote: str) -> str:
    out = []
    for c in text:
        if c == quote:
            out.append('\\' + c)
        elif c in _ESCAPES:
            out.append(_ESCAPES[c])
        elif not c.isprintable():
            out.append(f'\\u{{{ord(c):x}}}')
        else:
            out.append(c)

    return ''.join(out)


def to_display(value: Any) -> str:
    if isinstance(value, Dynamic):
        value = value.value

    if value is None:
        return ''

    if type(value) is bool:
        return 'true' if value else 'false'

    if isinstance(value, float):
        text = format_float(value)
        if math.isfinite(value):
            text = _expand_exponent(text)

        # 1.0 displays as 1
        return text[:-2] if text.endswith('.0') else text

    if isinstance(value, list):
        return to_debug(value)

    if isinstance(value, dict):
        return format_map(value)

    return str(value)


def to_debug(value: Any) -> str:
    if isinstance(value, Dynamic):
        value = value.value

    if value is None:
        return '()'

    if type(value) is bool:
        return 'true' if value else 'false'

    if isinstance(value, Char):
        return "'" + _escape(value, "'") + "'"

    if isinstance(value, str):
        return '"' + _escape(value, '"') + '"'

    if isinstance(value, int):
        return str(int(value))

    if isinstance(value, float):
        return _float_repr(value)

    if isinstance(value, list):
        return '[' + ', '.join(to_debug(item) for item in value) + ']'

    if isinstance(value, dict):
        items = (f'{to_debug(str(k))}: {to_debug(v)}' for k, v in value.items())
        return '{' + ', '.join(items) + '}'

    return repr(value)


def format_map(value: dict) -> str:
    '''Object maps print with a leading marker so they read apart from containers'''
    return MAP_MARKER + to_debug(value)
