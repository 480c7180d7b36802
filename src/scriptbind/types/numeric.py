'''
Sized numeric types

Plain ``int``/``float`` are the runtime's INT/FLOAT. The classes here are the
optional fixed-width variants; each keeps its own type identity so the
function table can overload on them.
'''

import struct

__all__ = [
    'SizedInt', 'I8', 'U8', 'I16', 'U16', 'I32', 'U32', 'I64', 'U64', 'I128', 'U128',
    'F32', 'SMALL_INTS', 'LARGE_INTS', 'SIZED_INTS',
]


class SizedInt(int):
    '''Range-checked integer of a fixed bit width'''

    BITS = 64
    SIGNED = True
    TYPE_NAME = 'i64'

    def __new__(cls, value = 0):
        value = int(value)
        lo, hi = cls.bounds()
        if not lo <= value <= hi:
            raise OverflowError(f'{value} out of range for {cls.TYPE_NAME}')

        return super().__new__(cls, value)

    @classmethod
    def bounds(cls) -> tuple[int, int]:
        if cls.SIGNED:
            return -(1 << (cls.BITS - 1)), (1 << (cls.BITS - 1)) - 1

        return 0, (1 << cls.BITS) - 1

    def __repr__(self):
        return f'{type(self).__name__}({int(self)})'

    def __str__(self):
        return str(int(self))


class I8(SizedInt):
    BITS, SIGNED, TYPE_NAME = 8, True, 'i8'


class U8(SizedInt):
    BITS, SIGNED, TYPE_NAME = 8, False, 'u8'


class I16(SizedInt):
    BITS, SIGNED, TYPE_NAME = 16, True, 'i16'


class U16(SizedInt):
    BITS, SIGNED, TYPE_NAME = 16, False, 'u16'


class I32(SizedInt):
    BITS, SIGNED, TYPE_NAME = 32, True, 'i32'


class U32(SizedInt):
    BITS, SIGNED, TYPE_NAME = 32, False, 'u32'


class I64(SizedInt):
    BITS, SIGNED, TYPE_NAME = 64, True, 'i64'


class U64(SizedInt):
    BITS, SIGNED, TYPE_NAME = 64, False, 'u64'


class I128(SizedInt):
    BITS, SIGNED, TYPE_NAME = 128, True, 'i128'


class U128(SizedInt):
    BITS, SIGNED, TYPE_NAME = 128, False, 'u128'


class F32(float):
    '''Single precision float, value rounded through a 4-byte pack'''

    TYPE_NAME = 'f32'

    def __new__(cls, value = 0.0):
        value = struct.unpack('<f', struct.pack('<f', float(value)))[0]
        return super().__new__(cls, value)

    def __repr__(self):
        return f'F32({float(self)!r})'

    def __str__(self):
        return repr(float(self))


# Groups in the order packages register them
SMALL_INTS = (I8, U8, I16, U16, I32, U32)
LARGE_INTS = (I64, U64, I128, U128)
SIZED_INTS = SMALL_INTS + LARGE_INTS
