# -*- coding: utf-8 -*-
#
# Directed connectivity measures from (replicates of) MVAR transfer functions
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.errors import SingularMatrixError
from coupy.statistics.replicates import accumulate


def invert_transfer(H):
    """
    Batched inversion of the ``source x target`` matrices
    of a single transfer function replicate.

    Parameters
    ----------
    H : (N, N, nFreq, ...) :class:`numpy.ndarray`
        Complex transfer function, first two axes are
        source and target channel

    Returns
    -------
    A : (N, N, nFreq, ...) :class:`numpy.ndarray`
        For every frequency (and time) bin the inverse of ``H[:, :, f]``

    Raises
    ------
    SingularMatrixError
        If the transfer matrix of any bin is singular
    """

    # numpy wants the matrix axes last
    Hstack = np.moveaxis(H, (0, 1), (-2, -1))
    try:
        Astack = np.linalg.inv(Hstack)
    except np.linalg.LinAlgError as exc:
        msg = f"Transfer function of shape {H.shape} has a singular frequency bin"
        raise SingularMatrixError(msg) from exc

    return np.moveaxis(Astack, (-2, -1), (0, 1))


def partial_directed_coherence(tensor, params):
    """
    Partial directed coherence [1]_ from the inverse transfer
    function ``A(f) = H(f)^-1`` of each replicate::

        PDC_ij(f) = |A_ij(f)| / sqrt(Σ_k |A_kj(f)|**2)

    The normalization sums over the source axis (axis 0 of a replicate).

    Parameters
    ----------
    tensor : :class:`numpy.ndarray`
        Replicate-indexed transfer function ``(nRpt, N, N, nFreq, ...)``
    params : :class:`~coupy.StructDict`
        Uses ``hasrpt``, ``hasjack`` and ``feedback``

    Returns
    -------
    mean, var, n
        See :func:`~coupy.statistics.replicates.accumulate`

    Notes
    -----
    .. [1] Baccalá, Luiz A., and Koichi Sameshima. "Partial directed coherence:
          a new concept in neural structure determination."
          Biological cybernetics 84.6 (2001): 463-474.
    """

    def pdc_cF(H):
        A = np.abs(invert_transfer(H))
        return A / np.sqrt(np.sum(A ** 2, axis=0, keepdims=True))

    return accumulate(tensor, pdc_cF,
                      hasrpt=params.get('hasrpt', True),
                      hasjack=params.get('hasjack', False),
                      feedback=params.get('feedback'),
                      desc="computing pdc")


def directed_transfer_function(tensor, params):
    """
    Directed transfer function [1]_ of each replicate::

        DTF_ij(f) = |H_ij(f)| / sqrt(Σ_k |H_ik(f)|**2)

    The normalization sums over the target axis (axis 1 of a replicate).

    Parameters
    ----------
    tensor : :class:`numpy.ndarray`
        Replicate-indexed transfer function ``(nRpt, N, N, nFreq, ...)``
    params : :class:`~coupy.StructDict`
        Uses ``hasrpt``, ``hasjack`` and ``feedback``

    Returns
    -------
    mean, var, n
        See :func:`~coupy.statistics.replicates.accumulate`

    Notes
    -----
    .. [1] Kaminski, Maciej J., and Katarzyna J. Blinowska. "A new method of
          the description of the information flow in the brain structures."
          Biological cybernetics 65.3 (1991): 203-210.
    """

    def dtf_cF(H):
        absH = np.abs(H)
        return absH / np.sqrt(np.sum(absH ** 2, axis=1, keepdims=True))

    return accumulate(tensor, dtf_cF,
                      hasrpt=params.get('hasrpt', True),
                      hasjack=params.get('hasjack', False),
                      feedback=params.get('feedback'),
                      desc="computing dtf")
