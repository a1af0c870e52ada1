# -*- coding: utf-8 -*-
#
# Phase slope index from (replicates of) cross spectra
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.errors import CPYValueError
from coupy.shared.parsers import scalar_parser
from coupy.statistics.replicates import accumulate
from coupy.connectivity.coherence import normalize_csd


def phase_slope(x, nbin):
    """
    Windowed sum of the lag-one phase differences along
    the frequency axis, the core of the phase slope index [1]_.

    Parameters
    ----------
    x : :class:`numpy.ndarray`
        Complex coherencies with frequency as the leading axis,
        shape ``(nFreq, ...)``
    nbin : int
        Half-width of the (inclusive) frequency window in bins

    Returns
    -------
    psi : :class:`numpy.ndarray`
        Real valued, same shape as `x`. With the lag-one products
        ``y[l] = conj(x[l]) * x[l+1]`` for ``l < nFreq - 1`` and
        ``y[nFreq - 1] = x[nFreq - 1]``, bin `k` holds the imaginary part of
        ``Σ y[l]`` over ``max(0, k - nbin) <= l <= min(nFreq - 1, k + nbin)``.
        Windows get truncated at the edges, there is no padding.

    Notes
    -----
    The last bin has no successor and enters the window sums unchanged,
    so windows reaching it pick up ``imag(x[-1])``.

    .. [1] Nolte, Guido, et al. "Robustly estimating the flow direction of
          information in complex physical systems."
          Physical review letters 100.23 (2008): 234101.
    """

    nFreq = x.shape[0]

    # lag-one products in place, the last bin keeps its value
    lagged = np.array(x, dtype=np.result_type(x, np.complex128))
    lagged[:-1] = np.conj(x[:-1]) * x[1:]

    # cumulative sums with a leading 0 to get all window sums at once
    csum = np.concatenate([np.zeros((1,) + lagged.shape[1:], dtype=lagged.dtype),
                           np.cumsum(lagged, axis=0)])

    kk = np.arange(nFreq)
    begindx = np.maximum(0, kk - nbin)
    # inclusive end
    endindx = np.minimum(nFreq - 1, kk + nbin)
    psi = np.imag(csum[endindx + 1] - csum[begindx])

    return psi


def phase_slope_index(tensor, params):
    """
    Replicate-wise phase slope index.

    Parameters
    ----------
    tensor : :class:`numpy.ndarray`
        Replicate-indexed cross spectra, ``(nRpt, ncmb, nFreq, ...)``
        or ``(nRpt, N, N, nFreq, ...)``
    params : :class:`~coupy.StructDict`
        Uses ``nbin`` (frequency half-width in bins), ``powindx``
        (`None` for the dense layout), ``hasrpt``, ``hasjack``
        and ``feedback``

    Returns
    -------
    mean : :class:`numpy.ndarray`
        Replicate average of the phase slope index
    var : :class:`numpy.ndarray` or None
        Replicate variance
    n : int
        Number of replicates
    """

    nbin = params.get('nbin')
    if nbin is None:
        raise CPYValueError("frequency half-width in bins", varname="nbin", actual="None")
    scalar_parser(nbin, varname="nbin", ntype="int_like", lims=[0, np.inf])
    nbin = int(nbin)
    powindx = params.get('powindx')

    # frequency axis of a single replicate
    freq_axis = 1 if powindx is not None else 2

    def psi_cF(csd):
        coh = np.moveaxis(normalize_csd(csd, powindx), freq_axis, 0)
        return np.moveaxis(phase_slope(coh, nbin), 0, freq_axis)

    return accumulate(tensor, psi_cF,
                      hasrpt=params.get('hasrpt', True),
                      hasjack=params.get('hasjack', False),
                      feedback=params.get('feedback'))
