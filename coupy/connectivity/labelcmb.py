# -*- coding: utf-8 -*-
#
# Index gymnastics for linearly indexed channel combinations
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.parsers import array_parser


def labelcmb2indx(labelcmb):
    """
    Map every channel combination to the rows holding
    the auto-combinations (the channel with itself) of its
    two channels.

    Parameters
    ----------
    labelcmb : array_like of shape (ncmb, 2)
        Channel label pairs of a sparse (linearly indexed)
        cross spectrum, auto-combinations included

    Returns
    -------
    powindx : (ncmb, 2) :class:`numpy.ndarray`
        ``powindx[k, 0]`` is the row of ``(labelcmb[k, 0], labelcmb[k, 0])``,
        ``powindx[k, 1]`` the row of ``(labelcmb[k, 1], labelcmb[k, 1])``.
        Auto-combinations map onto themselves, channels without
        an auto-combination stay unresolved (``-1``). If an auto-combination
        appears more than once the last row wins.

    Examples
    --------
    >>> labelcmb2indx([['a', 'a'], ['a', 'b'], ['b', 'b']])
    array([[0, 0],
           [0, 2],
           [2, 2]])
    """

    array_parser(labelcmb, varname="labelcmb", dims=(None, 2))
    labelcmb = np.asarray(labelcmb).astype(str)

    ncmb = labelcmb.shape[0]
    powindx = np.full((ncmb, 2), -1, dtype=np.intp)

    for k in range(ncmb):
        chan = labelcmb[k, 0]
        # only auto-combinations carry the powers
        if chan != labelcmb[k, 1]:
            continue
        powindx[labelcmb[:, 0] == chan, 0] = k
        powindx[labelcmb[:, 1] == chan, 1] = k

    return powindx


def remove_auto_combinations(powindx):
    """
    Boolean mask selecting the true cross-combinations, i.e.
    all rows which are not their own auto-combination
    """
    powindx = np.asarray(powindx)
    return powindx[:, 0] != powindx[:, 1]
