'''Well-known function names shared by the engine and the packages'''

KEYWORD_PRINT = 'print'
KEYWORD_DEBUG = 'debug'
FUNC_TO_STRING = 'to_string'

# Property accessors are registered as get$<name> / set$<name>
FN_GET = 'get$'
FN_SET = 'set$'

# Index operators: obj[key] and obj[key] = value
FN_IDX_GET = 'index$get$'
FN_IDX_SET = 'index$set$'


def make_getter(name: str) -> str:
    return FN_GET + name


def make_setter(name: str) -> str:
    return FN_SET + name
