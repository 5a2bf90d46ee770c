'''Common functionality for components.

Functions to build function registers and retrievers around them.
There should normally be no need to use these functions directly.
'''

import logging
from typing import Callable, Dict, Optional, Union


logger = logging.getLogger(__name__)


def marker(register: Dict[str, Callable],
           name: str,
           signature,
           ) -> Callable[[Callable], Callable]:
    '''A registration decorator factory.'''
    def mark_function(func):
        register[func.__name__] = func
        return func
    return mark_function


def getter(register: Dict[str, Callable],
           name: str,
           signature,
           ) -> Callable[[str], Callable]:
    '''A register retriever factory.'''
    def get(func_def: str) -> signature:
        f'''Return a {name} function by its name.'''
        try:
            return register[func_def]
        except KeyError:
            raise KeyError(f'unknown {name}: {func_def}')
    return get


def constructer(register: Dict[str, Callable],
                name: str,
                signature,
                fallback: Optional[str] = None,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''A register implicit retriever/passthrough function factory.

    If a fallback name is given, any value that is neither callable nor
    a registered name resolves to the fallback function instead of raising.
    '''
    get = getter(register, name, signature)

    def construct(func_def: Union[str, signature]
                  ) -> signature:
        f'''Construct a {name} function.

        Get a {name} function by its name from the register. If a custom
        callable is given, pass it through unchanged.
        '''
        if hasattr(func_def, '__call__'):
            return func_def
        elif isinstance(func_def, str) and func_def in register:
            return register[func_def]
        elif fallback is not None:
            logger.warning('unknown %s %r, using %s', name, func_def, fallback)
            return get(fallback)
        else:
            return get(func_def)

    return construct


def register_functions(register: Dict[str, Callable],
                       name: str,
                       signature,
                       fallback: Optional[str] = None,
                       ):
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(register, name, signature),
        getter(register, name, signature),
        constructer(register, name, signature, fallback=fallback),
    )
