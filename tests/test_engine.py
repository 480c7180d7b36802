#!/usr/bin/env python3
'''Unit tests for the engine registration surface'''

from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from scriptbind.config import Features
from scriptbind.engine import Engine
from scriptbind.errors import *
from scriptbind.module import Module
from scriptbind.types import Char, Dynamic
import unittest


def text_len(s: str) -> int:
    return len(s)


def checked_div(a: int, b: int) -> int:
    if b == 0:
        raise RuntimeScriptError('division by zero')

    return a // b


class Vec2:
    def __init__(self, x: int = 0, y: int = 0):
        self.x = x
        self.y = y

    def get_x(self) -> int:
        return self.x

    def set_x(self, value: int):
        self.x = value


class TestRegistration(unittest.TestCase):
    '''Test registering and calling functions'''

    def setUp(self):
        self.engine = Engine()

    def test_register_and_call(self):
        self.engine.register_fn('add', lambda a, b: a + b, int, int)
        self.assertEqual(self.engine.call_fn('add', 40, 2), Dynamic(42))

    def test_registration_is_chainable(self):
        engine = (Engine.new_raw()
            .register_fn('one', lambda: 1)
            .register_fn('two', lambda: 2))

        self.assertEqual(len(engine.global_module), 2)

    def test_function_not_found(self):
        with self.assertRaises(FunctionNotFoundError) as ctx:
            self.engine.call_fn('missing', 1, 'a')

        self.assertEqual(ctx.exception.fn_name, 'missing')
        self.assertEqual(ctx.exception.type_names, ('i64', 'string'))
        self.assertEqual(str(ctx.exception), 'Function not found: missing(i64, string)')

    def test_not_found_uses_pretty_names(self):
        self.engine.register_type_with_name(Vec2, 'Vec2')
        with self.assertRaises(FunctionNotFoundError) as ctx:
            self.engine.call_fn('len', Vec2())

        self.assertEqual(ctx.exception.type_names, ('Vec2',))

    def test_result_fn_failure_propagates(self):
        self.engine.register_result_fn('div', checked_div)

        self.assertEqual(self.engine.call_fn('div', 7, 2).value, 3)
        with self.assertRaises(RuntimeScriptError) as ctx:
            self.engine.call_fn('div', 1, 0)

        self.assertEqual(ctx.exception.value, 'division by zero')

    def test_plain_fn_failure_is_wrapped(self):
        self.engine.register_fn('div', checked_div)

        with self.assertRaises(ErrorInFunctionCall) as ctx:
            self.engine.call_fn('div', 1, 0)

        self.assertIsInstance(ctx.exception.cause, RuntimeScriptError)

    def test_method_with_receiver(self):
        self.engine.register_fn('set_x', Vec2.set_x, receiver = Vec2)
        v = Dynamic(Vec2())

        self.engine.call_fn('set_x', v, 9)

        self.assertEqual(v.value.x, 9)


class TestLookupOrder(unittest.TestCase):
    '''Test the order function tables are searched in'''

    def test_global_module_shadows_packages(self):
        engine = Engine()
        engine.register_fn('to_string', lambda x: f'<{x}>', int)

        self.assertEqual(engine.call_fn('to_string', 5).value, '<5>')
        self.assertEqual(engine.call_fn('to_string', True).value, 'true')

    def test_later_package_wins(self):
        first = Module('first')
        first.set_fn('which', lambda: 'first')
        second = Module('second')
        second.set_fn('which', lambda: 'second')

        engine = Engine.new_raw().load_package(first).load_package(second)

        self.assertEqual(engine.call_fn('which').value, 'second')
        self.assertEqual([m.name for m in engine.iter_modules()], ['global', 'second', 'first'])

    def test_raw_engine_is_empty(self):
        engine = Engine.new_raw()
        self.assertEqual(engine.packages, [])
        self.assertEqual(engine.gen_fn_signatures(), [])

        with self.assertRaises(FunctionNotFoundError):
            engine.call_fn('print', 1)

    def test_signatures(self):
        signatures = Engine().gen_fn_signatures()

        self.assertIn('print() -> string', signatures)
        self.assertIn('append(&mut string, char) -> ()', signatures)


class TestTypes(unittest.TestCase):
    '''Test type registration and names'''

    def setUp(self):
        self.engine = Engine.new_raw()

    def test_builtin_names(self):
        self.assertEqual(self.engine.type_of(1), 'i64')
        self.assertEqual(self.engine.type_of('a'), 'string')
        self.assertEqual(self.engine.type_of(Char('a')), 'char')
        self.assertEqual(self.engine.type_of(None), '()')
        self.assertEqual(self.engine.type_of(Dynamic(1.5)), 'f64')

    def test_pretty_name(self):
        self.engine.register_type_with_name(Vec2, 'Vector')

        self.assertTrue(self.engine.is_registered(Vec2))
        self.assertEqual(self.engine.type_of(Vec2()), 'Vector')

    def test_register_type_resets_pretty_name(self):
        self.engine.register_type_with_name(Vec2, 'Vector')
        self.engine.register_type(Vec2)

        self.assertEqual(self.engine.type_name(Vec2), f'{__name__}.Vec2')

    def test_unregistered_type(self):
        self.assertFalse(self.engine.is_registered(Vec2))
        self.assertEqual(self.engine.type_name(Vec2), f'{__name__}.Vec2')


class TestAccessors(unittest.TestCase):
    '''Test property and index registration'''

    def test_getter_on_builtin_type(self):
        engine = Engine.new_raw().register_get('len', text_len)
        self.assertEqual(engine.get_property('hello', 'len').value, 5)

    def test_get_set_on_custom_type(self):
        engine = Engine.new_raw().register_get_set('x', Vec2.get_x, Vec2.set_x, receiver = Vec2)
        v = Dynamic(Vec2(1, 2))

        engine.set_property(v, 'x', 10)

        self.assertEqual(engine.get_property(v, 'x').value, 10)
        self.assertEqual(v.value.y, 2)

    def test_indexer_on_list(self):
        def get_item(items: list, i: int) -> Dynamic:
            return Dynamic(items[i])

        def set_item(items: list, i: int, value: Dynamic):
            items[i] = value.value

        engine = Engine.new_raw().register_indexer_get_set(get_item, set_item)
        items = Dynamic([1, 2, 3])

        engine.set_index(items, 1, 'two')

        self.assertEqual(engine.get_index(items, 1).value, 'two')
        self.assertEqual(items.value, [1, 'two', 3])

    def test_getter_with_wrong_arity(self):
        with self.assertRaises(TypeError):
            Engine.new_raw().register_get('x', Vec2.set_x, receiver = Vec2)

    def test_accessors_need_object_maps(self):
        engine = Engine.new_raw(Features().without('object_maps'))

        with self.assertRaises(FeatureDisabledError) as ctx:
            engine.register_get('len', text_len)

        self.assertEqual(ctx.exception.feature, 'object_maps')

    def test_indexers_need_arrays_or_maps(self):
        def get_item(items: list, i: int) -> int:
            return items[i]

        Engine.new_raw(Features().without('object_maps')).register_indexer_get(get_item)

        with self.assertRaises(FeatureDisabledError):
            Engine.new_raw(Features().without('object_maps', 'arrays')).register_indexer_get(get_item)


class TestPrintDebug(unittest.TestCase):
    '''Test the print and debug hooks'''

    def setUp(self):
        self.printed = []
        self.debugged = []
        self.engine = (Engine()
            .on_print(self.printed.append)
            .on_debug(self.debugged.append))

    def test_print_goes_to_callback(self):
        self.assertEqual(self.engine.print(42), '42')
        self.assertEqual(self.engine.print(), '')
        self.assertEqual(self.printed, ['42', ''])

    def test_debug_goes_to_callback(self):
        self.engine.debug('hi')
        self.engine.debug(None)
        self.assertEqual(self.debugged, ['"hi"', '()'])

    def test_default_print_logs(self):
        engine = Engine()
        with self.assertLogs('scriptbind.engine', level = 'INFO') as logs:
            engine.print('hello')

        self.assertIn('hello', logs.output[0])


if __name__ == '__main__':
    unittest.main()
