# -*- coding: utf-8 -*-
#
# Implementation of Granger-Geweke causality
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.errors import CPYValueError, ShapeMismatchError
from coupy.shared.parsers import scalar_parser
from coupy.shared.log import get_logger


def granger(Hfunc, Sigma, CSD, fs=1):
    """
    Computes the pairwise Granger-Geweke causalities
    for all (non-symmetric!) channel combinations
    according to Equation 8 in [1]_.

    The transfer functions `Hfunc` and noise covariance
    `Sigma` are expected to have been already computed.

    Parameters
    ----------
    Hfunc : (N, N, nFreq, ...) :class:`numpy.ndarray`
        Spectral transfer functions for all channel combinations ``i,j``
    Sigma :  (N, N) :class:`numpy.ndarray`
        The noise covariances
    CSD : (N, N, nFreq, ...) :class:`numpy.ndarray`
        Complex cross spectra for all channel combinations ``i,j``
        `N` corresponds to number of input channels.
    fs : float
        Sampling frequency the transfer functions are scaled with

    Returns
    -------
    Granger : (N, N, nFreq, ...) :class:`numpy.ndarray`
        Spectral Granger-Geweke causality between all channel
        combinations, the influence of channel ``i`` onto
        channel ``j`` sits in ``Granger[j, i]``. The main
        diagonal is zero.

    Notes
    -----
    .. [1] Dhamala, Mukeshwar, Govindan Rangarajan, and Mingzhou Ding.
       "Estimating Granger causality from Fourier and wavelet transforms
        of time series data." Physical review letters 100.1 (2008): 018701.

    """

    Hfunc = np.asarray(Hfunc)
    Sigma = np.asarray(Sigma)
    CSD = np.asarray(CSD)

    nChannels = Hfunc.shape[0]
    if Hfunc.ndim < 3 or Hfunc.shape[1] != nChannels:
        raise ShapeMismatchError("transfer function of shape (N, N, nFreq, ...)",
                                 varname="Hfunc", actual=f"shape {Hfunc.shape}")
    if Sigma.shape != (nChannels, nChannels):
        raise ShapeMismatchError(f"noise covariance of shape {(nChannels, nChannels)}",
                                 varname="Sigma", actual=f"shape {Sigma.shape}")
    if CSD.shape != Hfunc.shape:
        raise ShapeMismatchError(f"cross spectra of shape {Hfunc.shape}",
                                 varname="CSD", actual=f"shape {CSD.shape}")

    # trailing singleton axes to broadcast against (nFreq, ...)
    extra = (1,) * (Hfunc.ndim - 2)

    # stacked auto-spectra S_ii along the columns (nChannel=3):
    #           S_11 S_22 S_33
    # Smat(f) = S_11 S_22 S_33
    #           S_11 S_22 S_33
    auto_spectra = np.moveaxis(np.diagonal(CSD, axis1=0, axis2=1), -1, 0)
    Smat = auto_spectra[np.newaxis, ...]

    # Granger i->j needs the H_ij entry at [j, i]
    Hmat = np.abs(np.swapaxes(Hfunc, 0, 1)) ** 2

    # Sigma_jj - Sigma_ij**2 / Sigma_ii at [j, i]
    auto_cov = np.diagonal(Sigma)
    Zmat = auto_cov[:, np.newaxis] - Sigma.T ** 2 / auto_cov[np.newaxis, :]
    Zmat = Zmat.reshape(Zmat.shape + extra)

    # the denominator, the auto-spectra enter as they are
    denom = np.abs(Smat - Zmat * Hmat / fs)

    Granger = np.log(np.abs(Smat) / denom)
    # no self-causality
    diag = np.arange(nChannels)
    Granger[diag, diag] = 0

    return Granger


def granger_causality(tensor, params):
    """
    Engine wrapper around :func:`granger`, there is no replicate loop.

    Parameters
    ----------
    tensor : :class:`numpy.ndarray`
        Transfer function with a singleton replicate axis,
        ``(1, N, N, nFreq, ...)``
    params : :class:`~coupy.StructDict`
        Uses ``noisecov`` (``(N, N)``, optionally with a singleton
        replicate axis), ``crsspctrm`` (same layout as `tensor`)
        and ``fs``

    Returns
    -------
    granger : :class:`numpy.ndarray`
        See :func:`granger`
    var : None
        Always `None`
    n : int
        Always 1
    """

    if tensor.shape[0] != 1:
        lgl = "a single (averaged) transfer function"
        raise CPYValueError(lgl, varname="transfer", actual=f"{tensor.shape[0]} replicates")

    noisecov = params.get('noisecov')
    crsspctrm = params.get('crsspctrm')
    if noisecov is None or crsspctrm is None:
        lgl = "noise covariance and cross spectra along with the transfer function"
        raise CPYValueError(lgl, varname="params", actual="missing field(s)")

    fs = params.get('fs', 1)
    scalar_parser(fs, varname="fs", lims=[0, np.inf])
    if fs == 0:
        raise CPYValueError("positive sampling frequency", varname="fs", actual=fs)

    noisecov = np.asarray(noisecov)
    crsspctrm = np.asarray(crsspctrm)
    # strip singleton replicate axes
    if noisecov.ndim == 3 and noisecov.shape[0] == 1:
        noisecov = noisecov[0]
    if crsspctrm.ndim == tensor.ndim and crsspctrm.shape[0] == 1:
        crsspctrm = crsspctrm[0]

    get_logger().debug(f"Computing Granger causality for {tensor.shape[1]} channels, fs={fs}")

    return granger(tensor[0], noisecov, crsspctrm, fs=fs), None, 1
