# -*- coding: utf-8 -*-
#
# Coherency and phase locking value from (replicates of) cross spectra
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.const_def import complex_eval
from coupy.statistics.replicates import accumulate


def auto_powers(csd, powindx=None):
    """
    Get the auto-spectral magnitudes matching each cross-term
    of a single replicate.

    Parameters
    ----------
    csd : :class:`numpy.ndarray`
        Cross spectra of one replicate, either linearly indexed
        ``(ncmb, nFreq, ...)`` or dense ``(N, N, nFreq, ...)``
    powindx : (ncmb, 2) :class:`numpy.ndarray` or None
        Auto-combination rows for the linearly indexed layout,
        see :func:`~coupy.connectivity.labelcmb.labelcmb2indx`.
        `None` selects the dense layout.

    Returns
    -------
    p1, p2 : :class:`numpy.ndarray`
        Auto-spectral magnitudes of the 1st and 2nd channel of
        each combination, broadcastable against `csd`
    """

    if powindx is not None:
        p1 = np.abs(csd[powindx[:, 0]])
        p2 = np.abs(csd[powindx[:, 1]])
        return p1, p2

    # main diagonal has shape (nFreq, ..., N): the auto spectra
    diag = np.abs(np.diagonal(csd, axis1=0, axis2=1))
    diag = np.moveaxis(diag, -1, 0)
    # broadcast along the rows and columns respectively
    return diag[:, np.newaxis, ...], diag[np.newaxis, :, ...]


def normalize_csd(csd, powindx=None):
    """
    Given the cross spectral densities of one replicate,
    calculates the normalizations to arrive at the
    coherencies. If ``S_ij(f)`` is the cross-spectrum between
    channel `i` and `j`, the coherency [1]_ is defined as:

    .. math::

          C_{ij} = S_{ij}(f) / \\sqrt{|S_{ii}| |S_{jj}|}

    Parameters
    ----------
    csd : :class:`numpy.ndarray`
        Cross spectra of one replicate, see :func:`auto_powers`
        for the supported layouts
    powindx : (ncmb, 2) :class:`numpy.ndarray` or None
        Auto-combination rows for the linearly indexed layout

    Returns
    -------
    CS_ij : :class:`numpy.ndarray`
        Complex coherencies, same shape as `csd`

    Notes
    -----
    .. [1] Nolte, Guido, et al. "Identifying true brain interaction from EEG
          data using the imaginary part of coherency."
          Clinical neurophysiology 115.10 (2004): 2292-2307.
    """

    p1, p2 = auto_powers(csd, powindx)
    return csd / np.sqrt(p1 * p2)


def coherence(tensor, params):
    """
    Replicate-wise coherence (or phase locking value, if the replicates
    have been unit-magnitude normalized beforehand).

    Parameters
    ----------
    tensor : :class:`numpy.ndarray`
        Replicate-indexed cross spectra, ``(nRpt, ncmb, nFreq, ...)``
        or ``(nRpt, N, N, nFreq, ...)``
    params : :class:`~coupy.StructDict`
        Uses ``output`` (see :func:`~coupy.shared.const_def.complex_eval`),
        ``powindx`` (`None` for the dense layout), ``hasrpt``,
        ``hasjack`` and ``feedback``

    Returns
    -------
    mean : :class:`numpy.ndarray`
        Replicate average of the (transformed) coherency
    var : :class:`numpy.ndarray` or None
        Replicate variance
    n : int
        Number of replicates
    """

    output = params.get('output', 'abs')
    powindx = params.get('powindx')

    # fail early for unknown outputs
    complex_eval(np.zeros(1, dtype=np.complex128), output)

    def coh_cF(csd):
        return complex_eval(normalize_csd(csd, powindx), output)

    return accumulate(tensor, coh_cF,
                      hasrpt=params.get('hasrpt', True),
                      hasjack=params.get('hasjack', False),
                      feedback=params.get('feedback'))
