# -*- coding: utf-8 -*-
#
# Decorators for coupy frontend functions
#

# Builtin/3rd party package imports
import functools
import inspect

# Local imports
from coupy.shared.errors import CPYTypeError, CPYValueError, CPYError
from coupy.shared.tools import StructDict
from coupy.datatype.freq_data import FreqData

__all__ = []


def unwrap_cfg(func):
    """
    Decorator that unwraps `cfg` "structure" in frontend calls

    Parameters
    ----------
    func : callable
        Typically a coupy frontend such as :func:`~coupy.connectivityanalysis`

    Returns
    -------
    wrapper_cfg : callable
        Wrapped function; `wrapper_cfg` extracts keyword arguments from a possibly
        provided `cfg` option "structure" based on the following logic:

        1. Probe positional argument list of `func` for regular Python dict or
           :class:`~coupy.StructDict`. *Every hit* is assumed to be a `cfg` option
           "structure" and removed from the list. Raises a
           :class:`~coupy.shared.errors.CPYValueError` if more than one
           dict is found in provided positional arguments or if `cfg` is
           provided as positional as well as keyword argument.
        2. If `cfg` was found, (a) check for a saved pre-set under the name of
           `func` (replay of an earlier call), (b) merge explicitly given keywords
           (a parameter must not be set in both), (c) translate "linguistic"
           boolean entries ("yes"/"no" to `True`/`False`) and (d) extract a
           possible "data" entry.
        3. Call ``func(data, *args, **cfg)`` with `data` being the one
           :class:`~coupy.datatype.freq_data.FreqData` input.

    Notes
    -----
    Supported call signatures:

    * ``func(cfg, data)``: `cfg` exclusively contains keyword arguments of `func`
    * ``func(data, cfg)``: same as above
    * ``func(data, cfg=cfg)``: same as above, `cfg` provided as keyword
    * ``func(cfg)``: `cfg` contains a field `data`
    * ``func(data, kw1=val1, kw2=val2)``: standard Python call style
    * ``func(data, cfg, kw2=val2)``: valid if `cfg` does NOT contain `'kw2'`
    """

    funcParams = inspect.signature(func).parameters
    validKeys = [pName for pName, pVal in funcParams.items() if pVal.default != pVal.empty]

    @functools.wraps(func)
    def wrapper_cfg(*args, **kwargs):

        # First, parse positional arguments for dict-type inputs (`k` counts the
        # no. of dicts provided) and convert tuple of positional args to list
        cfg = None
        k = 0
        args = list(args)
        for argidx, arg in enumerate(args):
            if isinstance(arg, dict):
                cfgidx = argidx
                k += 1

        if k == 1:
            cfg = args.pop(cfgidx)
        elif k > 1:
            raise CPYValueError(legal="single `cfg` input",
                                varname="cfg",
                                actual="{0:d} `cfg` objects in input arguments".format(k))

        # Now parse provided keywords for `cfg` entry - if `cfg` was already
        # provided as positional argument, abort
        if kwargs.get("cfg") is not None:
            if cfg is not None:
                lgl = "`cfg` either as positional or keyword argument, not both"
                raise CPYValueError(legal=lgl, varname="cfg")
            cfg = kwargs.pop("cfg")
            if not isinstance(cfg, dict):
                raise CPYTypeError(cfg, varname="cfg", expected="dictionary-like")

        if cfg is not None:

            # check if we have saved pre-sets (replay a frontend run)
            if func.__name__ in cfg.keys():
                cfg = cfg[func.__name__]

            # IMPORTANT: create a copy of `cfg` to not manipulate `cfg` in user's namespace!
            cfg = StructDict(cfg)

            for key in kwargs:
                if key == 'data':
                    continue
                elif key in cfg:
                    lgl = f"parameter set either via `cfg.{key}=...` or directly via keyword"
                    act = f"parameter `{key}` set in both `cfg` and via explicit keyword"
                    raise CPYValueError(legal=lgl, varname=f"cfg/{key}", actual=act)
                else:
                    cfg[key] = kwargs[key]

            # Translate any existing "yes" and "no" fields to `True` and `False`
            for key in cfg.keys():
                if isinstance(cfg[key], str) and cfg[key] == "yes":
                    cfg[key] = True
                elif isinstance(cfg[key], str) and cfg[key] == "no":
                    cfg[key] = False

            unknown = [key for key in cfg if key not in validKeys + ['data']]
            if unknown:
                lgl = "parameters of `{}`: {}".format(func.__name__, ", ".join(validKeys))
                raise CPYValueError(legal=lgl, varname="cfg", actual=", ".join(unknown))

        # No explicit `cfg`: rename `kwargs` to `cfg` to consolidate processing below
        else:
            cfg = kwargs

        data = cfg.pop("data", None)
        if data is not None:
            if any(isinstance(arg, FreqData) for arg in args):
                lgl = "input data provided either via `cfg`/keyword or " +\
                    "positional arguments, not both"
                raise CPYValueError(legal=lgl, varname="cfg/data")
            if not isinstance(data, FreqData):
                raise CPYTypeError(data, varname="data", expected="FreqData")
            posargs = args
        else:
            posargs = []
            while args:
                arg = args.pop(0)
                if data is not None and isinstance(arg, FreqData):
                    raise CPYValueError("only one FreqData object", varname='data')
                if isinstance(arg, FreqData):
                    data = arg
                else:
                    posargs.append(arg)

        if data is None:
            raise CPYError("Found no FreqData object as input")

        return func(data, *posargs, **cfg)

    return wrapper_cfg
