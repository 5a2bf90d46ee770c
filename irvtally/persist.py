'''Serialization of tally configuration objects to JSON-ready dictionaries.

Objects decorated with :func:`simple_serialization` (the tally engine and
the ballot generators) get a ``to_dict()`` method that records their
constructor parameters together with their scoped class name, so that
:func:`from_dict` can rebuild an equivalent object.

Parameter values may be JSON atoms, lists, dictionaries keyed by strings,
tuples (stored as ``{"type": "tuple", "value": [...]}``) and module-level
callables such as tie-breaking rules (stored as
``{"callable": "module.name"}``).
'''

import sys
import inspect
import importlib
from typing import Any, Dict


ATOMIC_TYPES = (str, int, float, bool, type(None))


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names, so the class must store its
    parameters unchanged under the same names.

    :param class_: The class to add the method to.
    '''
    param_names = [
        param for param in inspect.signature(class_.__init__).parameters
        if param != 'self'
    ]

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_name(type(self))}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, ATOMIC_TYPES):
        return value
    elif isinstance(value, tuple):
        return {'type': 'tuple', 'value': [serialize_value(v) for v in value]}
    elif isinstance(value, list):
        return [serialize_value(val) for val in value]
    elif isinstance(value, dict):
        if not all(isinstance(key, str) for key in value):
            raise ValueError(f'cannot serialize non-string keys of {value!r}')
        return {key: serialize_value(val) for key, val in value.items()}
    elif callable(value) and is_scoped_identifier(scoped_name(value)):
        return {'callable': scoped_name(value)}
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if value.get('type') == 'tuple' and 'value' in value:
            return tuple(deserialize_value(val) for val in value['value'])
        elif is_scoped_identifier(value.get('class')):
            return deserialize_class(value)
        elif is_scoped_identifier(value.get('callable')):
            return get_object(value['callable'])
        else:
            return {key: deserialize_value(val) for key, val in value.items()}
    elif isinstance(value, ATOMIC_TYPES):
        return value
    elif isinstance(value, list):
        return [deserialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def deserialize_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_object(clsdef['class'])
    params = {
        key: deserialize_value(val)
        for key, val in clsdef.items() if key != 'class'
    }
    return cls(**params)


def get_object(identifier: str) -> Any:
    module, name = identifier.rsplit('.', 1)
    if module not in sys.modules:
        importlib.import_module(module)
    return getattr(sys.modules[module], name)


def from_dict(value: Dict[str, Any]) -> Any:
    """Rebuild a tally configuration object from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    """
    if not isinstance(value, dict):
        raise ValueError('invalid irvtally object def: dict expected,'
                         f' got {value!r}')
    elif 'class' not in value:
        raise ValueError('invalid irvtally object def: must have a class key')
    elif not is_scoped_identifier(value['class']):
        inval_cls = value['class']
        raise ValueError(f'invalid irvtally class def: {inval_cls}')
    else:
        return deserialize_class(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize a tally configuration object to a JSON-ready dictionary.

    :param obj: An object providing a `to_dict()` method, such as the tally
        engine or the ballot generators.
    """
    return serialize_value(obj)


def is_scoped_identifier(value: Any) -> bool:
    '''Tell whether the value is a dotted name of a module-level object.'''
    return (
        isinstance(value, str)
        and '.' in value
        and not value.startswith('.')
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def scoped_name(obj: Any) -> str:
    return '.'.join((
        getattr(obj, '__module__', None) or '',
        getattr(obj, '__qualname__', ''),
    ))
