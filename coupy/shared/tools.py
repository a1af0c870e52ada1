# -*- coding: utf-8 -*-
#
# Auxiliaries used across all of coupy
#

# Builtin/3rd party package imports
import inspect
from copy import deepcopy

import numpy as np
from tqdm.auto import tqdm

# Local imports
from coupy.shared.errors import CPYValueError, CPYTypeError

__all__ = ["StructDict", "get_defaults"]

# format string for tqdm progress bars in replicate loops
tqdmFormat = "{desc}: {percentage:3.0f}% |{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]"


class StructDict(dict):
    """Child-class of dict for emulating MATLAB structs

    Examples
    --------
    cfg = StructDict()
    cfg.method = 'coh'

    """

    def __init__(self, *args, **kwargs):
        """
        Create a child-class of dict whose attributes are its keys
        (thus ensuring that attributes and items are always in sync)
        """
        super().__init__(*args, **kwargs)
        self.__dict__ = self

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        if self.keys():
            ppStr = "coupy StructDict\n\n"
            maxKeyLength = max([len(str(val)) for val in self.keys()])
            printString = "{0:>" + str(maxKeyLength + 5) + "} : {1:}\n"
            for key, value in self.items():
                if isinstance(value, np.ndarray):
                    value = f"<{value.dtype} array of shape {value.shape}>"
                ppStr += printString.format(key, str(value))
            ppStr += "\nUse `dict(cfg)` for copy-paste-friendly format"
        else:
            ppStr = "{}"
        return ppStr

    def copy(self, deep=True):
        """
        Create a copy of this StructDict instance.

        Note: Overwrites the `.copy` method of the parent `dict` class, otherwise `copy()` will return a `dict` instead of a `StructDict`.

        Parameters
        ---------
        deep: bool
            Whether to produce a deep copy. Defaults to `True`.

        Returns
        -------
        Copy of StructDict.
        """
        if deep:
            return self.deepcopy()
        else:
            return type(self)(self)

    def deepcopy(self):
        """
        Return a deep copy of this StructDict.
        """
        return deepcopy(self)

    def __deepcopy__(self, memo):
        result = type(self).__new__(self.__class__)
        result.__dict__ = result
        memo[id(self)] = result
        for k, v in self.items():
            result[k] = deepcopy(v, memo)
        return result


def best_match(source, selection, span=False, squash_duplicates=False):
    """
    Find matching elements in a given 1d-array/list

    Parameters
    ----------
    source : NumPy 1d-array/list
        Reference array whose elements are to be matched by `selection`
    selection: NumPy 1d-array/list or scalar
        Query-values whose closest matches are to be found in `source`.
    span : bool
        If `True`, `selection` is interpreted as (closed) interval ``[lo, hi]`` and
        `source` is queried for all elements contained in the interval.
    squash_duplicates : bool
        If `True`, identical matches are removed from the result.

    Returns
    -------
    values : NumPy 1darray
        Values of `source` that most closely match given elements in `selection`
    idx : NumPy 1darray
        Indices of `values` with respect to `source`, such that,
        ``source[idx] == values``

    Notes
    -----
    This is an auxiliary method that is intended purely for internal use. Thus,
    no error checking is performed. For ties, the lower index wins.

    Examples
    --------
    >>> best_match(np.arange(10), [2,5])
    (array([2, 5]), array([2, 5]))

    >>> source = np.array([2.2, 1.5, 1.5, 6.2, 8.8])
    >>> best_match(source, [1.9, 9., 1.])
    (array([2.2, 8.8, 1.5]), array([0, 4, 1]))

    >>> best_match(np.arange(10), [2.9, 6.1], span=True)
    (array([3, 4, 5, 6]), array([3, 4, 5, 6]))
    """

    source = np.asarray(source)

    # If `selection` is a scalar, convert it to 1-element list
    if np.issubdtype(type(selection), np.number):
        selection = [selection]
    selection = np.asarray(selection, dtype=float)

    # Interval-selections are a lot easier than discrete points...
    if span:
        idx = np.intersect1d(np.where(source >= selection[0])[0],
                             np.where(source <= selection[1])[0])
        return source[idx], idx

    issorted = True
    if source.size > 1 and np.diff(source).min() < 0:
        issorted = False
        orig = np.array(source, copy=True)
        idx_orig = np.argsort(orig, kind="stable")
        source = orig[idx_orig]
    idx = np.searchsorted(source, selection, side="left")
    leftNbrs = np.abs(selection - source[np.maximum(idx - 1, 0)])
    rightNbrs = np.abs(selection - source[np.minimum(idx, source.size - 1)])
    shiftLeft = (idx == source.size) | ((idx > 0) & (leftNbrs <= rightNbrs))
    idx[shiftLeft] -= 1

    # Account for potentially unsorted selections (and thus unordered `idx`)
    if squash_duplicates:
        _, xdi = np.unique(idx.astype(np.intp), return_index=True)
        idx = idx[np.sort(xdi)]

    # Re-order discrete-selection index arrays in case `source` was unsorted
    if not issorted:
        idx_sort = idx_orig[idx]
        return orig[idx_sort], idx_sort
    return source[idx], idx


def get_defaults(obj):
    """
    Parse input arguments of `obj` and return dictionary

    Parameters
    ----------
    obj : function or class
        Object whose input arguments to parse. Can be either a class or
        function.

    Returns
    -------
    argdict : dictionary
        Dictionary of `argument : default value` pairs constructed from
        `obj`'s call-signature/instantiation.

    Examples
    --------
    To see the default input arguments of :meth:`coupy.connectivityanalysis` use

    >>> cpy.get_defaults(cpy.connectivityanalysis)
    """

    if not callable(obj):
        raise CPYTypeError(obj, varname="obj", expected="coupy function or class")
    dct = {k: v.default for k, v in inspect.signature(obj).parameters.items()
           if v.default != v.empty and v.name != "cfg"}
    return StructDict(dct)


def progress(nTotal, feedback=None, desc=""):
    """
    Iterate over ``range(nTotal)`` while reporting progress

    Parameters
    ----------
    nTotal : int
        Number of iterations, typically the number of replicates
    feedback : None, bool, str or callable
        ``None``, ``False`` or ``'none'`` report nothing, ``True`` or
        ``'text'`` show a :mod:`tqdm` progress bar. A callable gets invoked as
        ``feedback(k, nTotal, desc)`` before the `k`-th (1-based) iteration.
    desc : str
        Short description of the loop

    Yields
    ------
    k : int
        The 0-based iteration index
    """

    if callable(feedback):
        for k in range(nTotal):
            feedback(k + 1, nTotal, desc)
            yield k
    elif feedback is True or feedback == 'text':
        yield from tqdm(range(nTotal), desc=desc, bar_format=tqdmFormat)
    elif feedback is None or feedback is False or feedback == 'none':
        yield from range(nTotal)
    else:
        lgl = "None, True/False, 'none', 'text' or a callable"
        raise CPYValueError(lgl, varname="feedback", actual=feedback)
