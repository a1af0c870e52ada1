# -*- coding: utf-8 -*-
#
# General, metric agnostic, JackKnife implementation for replicate statistics
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.errors import CPYValueError, ShapeMismatchError


def trial_avg_replicates(trl_ensemble):
    """
    Compute the jackknife replicates of the trial average
    for the full set of leave-one-out (loo) trial selections.

    The result has the same shape as the input, with each
    entry along the 1st axis holding one loo average, i.e. the
    trivial jackknife replicates of the average. These can then be
    further used as input for metrics which operate on trial averages
    to compute the non-trivial jackknife replicates of the desired statistic,
    i.e. coherence.

    Parameters
    ----------
    trl_ensemble : :class:`numpy.ndarray`
        Single trial data, 1st axis indexes trials

    Returns
    ------
    replicates : :class:`numpy.ndarray`
        Same shape as ``trl_ensemble``, where each slice along
        the 1st axis represents one jackknife replicate (trial average)
    """

    nTrials = trl_ensemble.shape[0]
    if nTrials < 2:
        lgl = "at least 2 trials for leave-one-out replicates"
        act = f"{nTrials} trial(s)"
        raise CPYValueError(lgl, 'trl_ensemble', act)

    # for each loo replicate we just have to subtract
    # the specific trial from the sum of all trials
    trl_sum = trl_ensemble.sum(axis=0)
    replicates = (trl_sum[np.newaxis, ...] - trl_ensemble) / (nTrials - 1)

    return replicates


def bias_factor(nRpt, hasjack=False):
    """
    Scaling of the naive replicate variance, ``(n-1)**2`` undoes
    the variance deflation of ``n`` jackknife replicates.
    """
    return (nRpt - 1) ** 2 if hasjack else 1


def bias_var(direct_estimate, replicates):
    """
    Implements the general jackknife recipe to
    compute the bias and variance of a statistical parameter
    over trials from an ensemble of leave-one-out replicates
    and the original raw estimate.

    Note that the jackknife bias-corrected estimate then simply is:

        jack_estimate = direct_estimate - bias

    Parameters
    ----------
    direct_estimate : :class:`numpy.ndarray`
        The direct trial statistic to be jackknifed
    replicates : :class:`numpy.ndarray`
        The statistic computed for each leave-one-out replicate,
        1st axis indexes the replicates

    Returns
    -------
    bias : :class:`numpy.ndarray`
        The bias of the original estimator
    variance : :class:`numpy.ndarray`
        The sample variance of the jackknife replicates
    """

    nTrials = replicates.shape[0]
    if nTrials <= 1:
        lgl = "jackknife replicates with at least 2 trials"
        act = f"{nTrials} trials"
        raise CPYValueError(lgl, 'replicates', act)

    # 1st average the replicates which
    # gives the jackknife estimate
    jack_avg = replicates.mean(axis=0)

    # shapes should match as both quantities
    # got computed by the same metric
    if jack_avg.shape != np.shape(direct_estimate):
        lgl = f"direct estimate of shape {jack_avg.shape}"
        act = f"shape {np.shape(direct_estimate)}"
        raise ShapeMismatchError(lgl, 'direct_estimate', act)

    bias = (nTrials - 1) * (jack_avg - direct_estimate)

    # Variance calculation, it is always real (as opposed to pseudo-variance)
    var = np.zeros(jack_avg.shape, dtype=np.float64)
    for loo in replicates:
        # need abs for complex variance
        var += np.abs(jack_avg - loo) ** 2
    var *= (nTrials - 1)

    return bias, var


def standard_error(var, nRpt):
    """
    Standard error of the mean from a (jackknife) variance estimate
    """
    return np.sqrt(var / nRpt)
