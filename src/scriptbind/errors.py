'''
Script-level errors

Everything a native function call can fail with is a ScriptError, so an
embedding can report it through its own error path without crashing.

ScriptError
├── FunctionCallError
│   ├── ArgumentCountError
│   ├── ArgumentTypeError
│   └── ErrorInFunctionCall
├── FunctionNotFoundError
├── RuntimeScriptError
└── FeatureDisabledError
'''

from typing import Any, Sequence

__all__ = [
    'ScriptError', 'FunctionCallError', 'ArgumentCountError', 'ArgumentTypeError',
    'ErrorInFunctionCall', 'FunctionNotFoundError', 'RuntimeScriptError', 'FeatureDisabledError',
]


class ScriptError(Exception):
    '''Base class for errors surfaced to scripts'''


class FunctionCallError(ScriptError):
    '''A native function was invoked in a way its adapter cannot honour'''

    def __init__(self, fn_name: str, message: str):
        super().__init__(f'{fn_name}: {message}')
        self.fn_name = fn_name


class ArgumentCountError(FunctionCallError):
    def __init__(self, fn_name: str, expected: int, actual: int):
        super().__init__(fn_name, f'expected {expected} argument(s), got {actual}')
        self.expected = expected
        self.actual = actual


class ArgumentTypeError(FunctionCallError):
    def __init__(self, fn_name: str, position: int, expected: str, actual: str):
        super().__init__(fn_name, f'argument #{position} must be {expected}, got {actual}')
        self.position = position
        self.expected = expected
        self.actual = actual


class ErrorInFunctionCall(FunctionCallError):
    '''An unexpected exception escaped a native function

    The original exception is kept as ``cause`` and chained as __cause__.
    '''

    def __init__(self, fn_name: str, cause: BaseException):
        super().__init__(fn_name, f'{type(cause).__name__}: {cause}')
        self.cause = cause


class FunctionNotFoundError(ScriptError):
    def __init__(self, fn_name: str, type_names: Sequence[str]):
        super().__init__(f'Function not found: {fn_name}({", ".join(type_names)})')
        self.fn_name = fn_name
        self.type_names = tuple(type_names)


class RuntimeScriptError(ScriptError):
    '''Declared failure of a fallible native function

    The payload is handed to the script as-is.
    '''

    def __init__(self, value: Any = None):
        super().__init__(str(value) if value is not None else 'Runtime error')
        self.value = value


class FeatureDisabledError(ScriptError):
    def __init__(self, operation: str, feature: str):
        super().__init__(f'{operation} requires the {feature!r} feature')
        self.operation = operation
        self.feature = feature
