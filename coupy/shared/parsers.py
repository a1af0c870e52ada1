# -*- coding: utf-8 -*-
#
# Module for all kinds of parsing/input sanitization gymnastics
#

# Builtin/3rd party package imports
import builtins
import numpy as np

# Local imports
from coupy.shared.errors import CPYTypeError, CPYValueError

__all__ = []


def scalar_parser(var, varname="", ntype=None, lims=None):
    """
    Parse scalars

    Parameters
    ----------
    var : scalar
        Scalar quantity to verify
    varname : str
        Local variable name used in caller, see Examples for details.
    ntype : None or str
        Expected numerical type of `var`. Possible options include any valid
        builtin type as well as `"int_like"` (`var` is expected to have
        no significant digits after its decimal point, e.g., 3.0, -12.0 etc.).
        If `ntype` is `None` the numerical type of `var` is not checked.
    lims : None or two-element list_like
        Lower (`lims[0]`) and upper (`lims[1]`) bounds for legal values of `var`.
        Note that the code checks for non-strict inequality, i.e., `var = lims[0]` or
        `var = lims[1]` are both considered to be valid values of `var`.
        Using `lims = [-np.inf, np.inf]` may be employed to ensure that `var` is
        finite and non-NaN. If `lims` is `None` bounds-checking is not performed.

    Returns
    -------
    Nothing : None

    Examples
    --------
    Assume `nbin` is supposed to be a non-negative integer-like scalar.
    The following calls confirm the validity of `nbin`

    >>> scalar_parser(3, varname="nbin", ntype="int_like", lims=[0, np.inf])
    >>> scalar_parser(3.0, varname="nbin", ntype="int_like", lims=[0, np.inf])

    Conversely, these values of `nbin` yield errors

    >>> scalar_parser(2.5, varname="nbin", ntype="int_like", lims=[0, np.inf])
    >>> scalar_parser(-1, varname="nbin", ntype="int_like", lims=[0, np.inf])
    >>> scalar_parser('3', varname="nbin", ntype="int_like", lims=[0, np.inf])

    See also
    --------
    array_parser : similar functionality for parsing array-like objects
    """

    # Make sure `var` is a scalar-like number, booleans don't count
    if isinstance(var, bool) or not np.issubdtype(type(var), np.number):
        raise CPYTypeError(var, varname=varname, expected="scalar")

    # If required, parse type ("int_like" is a bit of a special case here...)
    if ntype is not None:
        if ntype == "int_like":
            if not np.isfinite(var) or np.round(var) != var:
                raise CPYValueError(ntype, varname=varname, actual=str(var))
        else:
            if type(var) != getattr(builtins, ntype):
                raise CPYTypeError(var, varname=varname, expected=ntype)

    # If required perform bounds-check: transform scalar to NumPy array
    # to be able to handle complex scalars too
    if lims is not None:
        if isinstance(var, complex):
            val = np.array([var.real, var.imag])
            legal = "both real and imaginary part to be "
        else:
            val = np.array([var])
            legal = "value to be "
        if np.any(val < lims[0]) or np.any(val > lims[1]) or not np.isfinite(var):
            legal += "greater or equals {lb:s} and less or equals {ub:s}"
            raise CPYValueError(legal.format(lb=str(lims[0]), ub=str(lims[1])),
                                varname=varname, actual=str(var))

    return


def array_parser(var, varname="", ntype=None, hasinf=None, hasnan=None,
                 dims=None, issorted=None):
    """
    Parse array-like objects

    Parameters
    ----------
    var : array_like
        Array object to verify
    varname : str
        Local variable name used in caller
    ntype : None or str
        Expected data type of `var`: `"numeric"` (a catch-all to ensure `var`
        only contains numeric elements), `"int_like"` or any NumPy dtype name.
        If `ntype` is `None` the data type of `var` is not checked.
    hasinf : None or bool
        If `False` the input array `var` is considered invalid if it contains
        non-finite elements (`np.inf`). If `None`, not probed.
    hasnan : None or bool
        If `False` the input array `var` is considered invalid if it contains
        undefined elements (`np.nan`). If `None`, not probed.
    dims : None or int or tuple
        Expected number of dimensions (if `dims` is an integer) or shape
        (if `dims` is a tuple) of `var`. Unknown dimensions can be
        represented as `None`, i.e., for `dims = (None, 2)` arrays of shape
        `(10, 2)` or `(1, 2)` are valid.
    issorted : None or bool
        If `True`, `var` is expected to be a 1d-array with elements in
        strictly ascending order.

    Returns
    -------
    Nothing : None

    See also
    --------
    scalar_parser : similar functionality for parsing numeric scalars
    """

    # Make sure `var` is array-like
    if not isinstance(var, (np.ndarray, list, tuple)):
        raise CPYTypeError(var, varname=varname, expected="array_like")

    # Convert input to ndarray to simplify parsing
    arr = np.asarray(var)

    if (hasnan is not None or hasinf is not None) and ntype is None:
        ntype = "numeric"

    if issorted is not None:
        if ntype is None:
            ntype = "numeric"
        if dims is None:
            dims = 1

    # If required, parse type (handle "int_like" and "numeric" separately)
    if ntype is not None:
        msg = "dtype = {dt:s}"
        if ntype in ["numeric", "int_like"]:
            if not np.issubdtype(arr.dtype, np.number):
                raise CPYValueError(msg.format(dt="numeric"), varname=varname,
                                    actual=msg.format(dt=str(arr.dtype)))
            if ntype == "int_like":
                if not np.array_equal(arr, np.round(arr)):
                    raise CPYValueError(msg.format(dt=ntype), varname=varname)
        else:
            if not np.issubdtype(arr.dtype, np.dtype(ntype).type):
                raise CPYValueError(msg.format(dt=ntype), varname=varname,
                                    actual=msg.format(dt=str(arr.dtype)))

    if hasinf is not None and not hasinf and np.isinf(arr).any():
        lgl = "finite numerical array"
        act = "array with {} `inf` entries".format(str(np.isinf(arr).sum()))
        raise CPYValueError(legal=lgl, varname=varname, actual=act)

    if hasnan is not None and not hasnan and np.isnan(arr).any():
        lgl = "well-defined numerical array"
        act = "array with {} `NaN` entries".format(str(np.isnan(arr).sum()))
        raise CPYValueError(legal=lgl, varname=varname, actual=act)

    # If required parse dimensional layout of array
    if dims is not None:
        if isinstance(dims, tuple):
            if len(dims) != arr.ndim:
                msg = "{}-dimensional array"
                raise CPYValueError(legal=msg.format(len(dims)), varname=varname,
                                    actual=msg.format(arr.ndim))
            for dk, dim in enumerate(dims):
                if dim is not None and arr.shape[dk] != dim:
                    raise CPYValueError("array of shape " + str(dims),
                                        varname=varname, actual="shape = " + str(arr.shape))
        elif arr.ndim != dims:
            raise CPYValueError(str(dims) + "d-array", varname=varname,
                                actual=str(arr.ndim) + "d-array")

    # If required check if array elements are orderd by magnitude
    if issorted and arr.size > 1:
        if not np.all(np.isreal(arr)):
            lgl = "real-valued array"
            act = "array containing complex elements"
            raise CPYValueError(legal=lgl, varname=varname, actual=act)
        if np.diff(arr).min() <= 0:
            lgl = "array with elements in ascending order"
            act = "unsorted array"
            raise CPYValueError(legal=lgl, varname=varname, actual=act)

    return
