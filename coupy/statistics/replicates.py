# -*- coding: utf-8 -*-
#
# Replicate-wise accumulation of connectivity metrics
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.errors import ShapeMismatchError, CPYValueError
from coupy.shared.log import get_logger
from coupy.shared.tools import progress
from coupy.statistics.jackknifing import bias_factor


def ensure_rpt_axis(tensor, hasrpt=True):
    """
    Bring the input into replicate-indexed form

    Parameters
    ----------
    tensor : :class:`numpy.ndarray` or sequence of :class:`numpy.ndarray`
        If `hasrpt` is `True` either an array whose 1st axis indexes
        replicates or a sequence of equally shaped replicate slices.
        If `hasrpt` is `False` a single slice.
    hasrpt : bool
        Whether `tensor` carries replicates

    Returns
    -------
    rpt_tensor : :class:`numpy.ndarray`
        Array with an explicit replicate axis, for single slices
        this is a singleton axis
    """

    if not hasrpt:
        return np.asarray(tensor)[np.newaxis, ...]

    if isinstance(tensor, np.ndarray):
        return tensor

    slices = [np.asarray(rpt) for rpt in tensor]
    if len(slices) == 0:
        raise CPYValueError("at least one replicate", varname="tensor", actual="empty sequence")
    shapes = {rpt.shape for rpt in slices}
    if len(shapes) > 1:
        lgl = "replicates of identical shape"
        act = "replicate shapes " + ", ".join(str(shp) for shp in sorted(shapes))
        raise ShapeMismatchError(lgl, varname="tensor", actual=act)

    return np.stack(slices)


def accumulate(tensor, func, hasrpt=True, hasjack=False, feedback=None,
               desc="computing metric"):
    """
    Replicate-wise accumulation of a metric, computes the mean and the
    (optionally jackknife bias corrected) variance over replicates.

    For the ``n`` replicates ``x[j]`` along the 1st axis of `tensor`::

        sum   = Σ_j f(x[j])
        sumsq = Σ_j f(x[j])**2
        mean  = sum / n
        var   = bias * (sumsq - sum**2 / n) / (n - 1)

    with ``bias = (n - 1)**2`` for jackknife replicates and ``1`` otherwise.

    Parameters
    ----------
    tensor : :class:`numpy.ndarray`
        Replicate-indexed input, see :func:`ensure_rpt_axis`
    func : callable
        Computes the metric of one replicate slice, must return
        equally shaped arrays for all replicates
    hasrpt : bool
        If `False`, the (singleton) replicate axis got inserted artificially
        and no variance is computed
    hasjack : bool
        Set to `True` if the replicates are jackknife leave-one-out samples
    feedback : None, bool, str or callable
        Progress reporting, see :func:`~coupy.shared.tools.progress`
    desc : str
        Description of the loop for the progress report

    Returns
    -------
    mean : :class:`numpy.ndarray`
        Replicate average of the metric
    var : :class:`numpy.ndarray` or None
        Variance estimate, `None` for a single replicate
    n : int
        Number of replicates
    """

    nRpt = tensor.shape[0]
    if nRpt == 0:
        raise CPYValueError("at least one replicate", varname="tensor", actual="0 replicates")

    outsum = None
    outssq = None
    for j in progress(nRpt, feedback, desc):
        res = np.asarray(func(tensor[j]))
        if outsum is None:
            outsum = np.zeros(res.shape, dtype=np.result_type(res.dtype, np.float64))
            outssq = np.zeros_like(outsum)
        elif res.shape != outsum.shape:
            lgl = f"metric of shape {outsum.shape} for every replicate"
            raise ShapeMismatchError(lgl, varname="func", actual=f"shape {res.shape} for replicate {j}")
        outsum += res
        outssq += res ** 2

    mean = outsum / nRpt

    if hasrpt and nRpt > 1:
        bias = bias_factor(nRpt, hasjack)
        var = bias * (outssq - outsum ** 2 / nRpt) / (nRpt - 1)
    else:
        var = None

    get_logger().debug(f"Accumulated {nRpt} replicate(s) to shape {mean.shape}, "
                       f"jackknife: {hasjack}, variance: {var is not None}")

    return mean, var, nRpt


def average_replicates(tensor):
    """
    Plain average over the replicate axis, keeps a singleton
    replicate axis in the output
    """
    return tensor.mean(axis=0, keepdims=True)


def normalize_replicates(tensor, feedback=None):
    """
    Unit-magnitude normalization of each replicate slice of a complex
    tensor (``x / |x|``), the pre-processing step of the phase locking value.

    Parameters
    ----------
    tensor : :class:`numpy.ndarray`
        Replicate-indexed complex input

    Returns
    -------
    normed : :class:`numpy.ndarray`
        New array of the same shape with ``|normed| == 1`` everywhere
        (zero entries become NaN)
    """

    normed = np.empty(tensor.shape, dtype=np.result_type(tensor.dtype, np.complex128))
    for k in progress(tensor.shape[0], feedback, "normalising amplitudes"):
        normed[k] = tensor[k] / np.abs(tensor[k])

    return normed
