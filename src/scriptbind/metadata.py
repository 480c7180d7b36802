'''Function signature export - for docs and editor tooling'''

from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Union

import yaml

from .module import Module
from .types.dynamic import default_type_name


def function_to_dict(fn) -> Dict[str, Any]:
    '''Describe one native function'''
    data = {
        'name': fn.name,
        'params': [
            {'name': p.name, 'type': default_type_name(p.type), 'binding': p.binding.name.lower()}
            for p in fn.params
        ],
        'style': fn.style.name.lower(),
        'fallible': fn.fallible,
        'signature': fn.signature(),
    }

    if fn.return_type is not None:
        data['return'] = default_type_name(fn.return_type)

    return data


def signatures_to_dict(modules: Iterable[Module]) -> Dict[str, Any]:
    '''Group function descriptions by module, each list sorted by signature'''
    result: Dict[str, List[Dict[str, Any]]] = {}
    for module in modules:
        functions = sorted(module.iter_fn(), key = lambda fn: fn.signature())
        entries = result.setdefault(module.name or '<anonymous>', [])
        entries.extend(function_to_dict(fn) for fn in functions)

    return {'modules': result}


def dump_signatures_yaml(modules: Iterable[Module], target: Union[str, Path, IO[str], None] = None) -> str:
    '''Write signatures as YAML to a path or stream and return the text'''
    text = yaml.safe_dump(signatures_to_dict(modules), sort_keys = False, allow_unicode = True)

    if isinstance(target, (str, Path)):
        with open(target, 'w', encoding = 'utf-8') as f:
            f.write(text)
    elif target is not None:
        target.write(text)

    return text


def load_signatures_yaml(source: Union[str, Path, IO[str]]) -> Dict[str, Any]:
    '''Read back a signature file written by dump_signatures_yaml'''
    if isinstance(source, (str, Path)):
        with open(source, 'r', encoding = 'utf-8') as f:
            data = yaml.safe_load(f)
    else:
        data = yaml.safe_load(source)

    if not data:
        return {'modules': {}}

    if not isinstance(data, dict) or not isinstance(data.get('modules', {}), dict):
        raise ValueError('Signature file must map "modules" to module entries')

    data.setdefault('modules', {})
    return data
