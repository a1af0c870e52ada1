# -*- coding: utf-8 -*-
#
# coupy connectivity analysis methods
#

# Builtin/3rd party package imports
import numpy as np

# coupy imports
from coupy.shared.errors import (
    CPYValueError,
    CPYTypeError,
    CPYWarning,
    CPYLog,
    UnsupportedMethodError,
    UnsupportedModeError)
from coupy.shared.const_def import availableOutputs
from coupy.shared.kwarg_decorators import unwrap_cfg
from coupy.shared.parsers import scalar_parser
from coupy.shared.tools import StructDict, best_match, get_defaults
from coupy.statistics import jackknifing as jk
from coupy.statistics.replicates import (
    ensure_rpt_axis,
    average_replicates,
    normalize_replicates)
from coupy.connectivity.const_def import (
    ConnMethod,
    availableMethods,
    inputFields,
    outputFields,
    crossSpectralMethods)
from coupy.connectivity.labelcmb import labelcmb2indx, remove_auto_combinations
from coupy.connectivity.coherence import coherence
from coupy.connectivity.phase_slope import phase_slope_index
from coupy.connectivity.mvar import partial_directed_coherence, directed_transfer_function
from coupy.connectivity.granger import granger_causality

__all__ = ["connectivityanalysis"]

#: maps every method onto its engine ``engine(tensor, params) -> (mean, var, n)``
methodEngines = {ConnMethod.COH: coherence,
                 ConnMethod.PLV: coherence,
                 ConnMethod.PSI: phase_slope_index,
                 ConnMethod.DTF: directed_transfer_function,
                 ConnMethod.PDC: partial_directed_coherence,
                 ConnMethod.GRANGER: granger_causality}


def get_engine(method):
    """
    Look up the engine computing `method`

    Parameters
    ----------
    method : str or :class:`~coupy.connectivity.const_def.ConnMethod`
        One of :data:`~coupy.connectivity.const_def.availableMethods`

    Returns
    -------
    engine : callable
        Called as ``engine(tensor, params)``, returns ``(mean, var, n)``
    """

    try:
        meth = ConnMethod(method)
    except ValueError:
        raise UnsupportedMethodError(method, availableMethods)
    return methodEngines[meth]


def compute_metric(method, tensor, params):
    """
    Run the engine of `method` on a replicate-indexed `tensor`,
    see :func:`get_engine`
    """
    return get_engine(method)(tensor, params)


@unwrap_cfg
def connectivityanalysis(data, method="coh", output="abs", jackknife=False,
                         bandwidth=None, fsample=1, feedback=None):
    """
    Compute connectivity metrics from cross spectra or transfer functions

    The input is the (channel/trial selected) output of a spectral or
    multivariate autoregressive analysis, wrapped into a
    :class:`~coupy.FreqData` object. If the data carry replicates
    (trials), the metric gets computed per replicate and averaged.

    **Usage Summary**

    List of available analysis methods and respective distinct options:

    "coh" : Coherence from the cross spectra
        * **output** : one of ('abs', 'pow', 'complex', 'angle', 'imag', 'real', ...)
        * **jackknife**: set to `True` to compute the variance via jackknife resampling

    "plv" : Phase locking value, the coherence of unit-magnitude
        normalized cross spectra
        * **output** : see "coh"
        * **jackknife**: see "coh"

    "psi" : Phase slope index following [Nolte2008]_
        * **bandwidth** : half-width (in Hz) of the frequency window
        * **jackknife**: see "coh"

    "dtf" : Directed transfer function from the transfer functions
        * **jackknife**: see "coh"

    "pdc" : Partial directed coherence from the transfer functions
        * **jackknife**: see "coh"

    "granger" : Spectral Granger-Geweke causality following [Dhamala2008]_,
        needs transfer functions, noise covariance and cross spectra.
        Replicates are averaged, there is no jackknife.
        * **fsample** : sampling frequency the transfer functions are scaled with

    Parameters
    ----------
    data : :class:`~coupy.FreqData`
        The cross spectra and/or transfer functions
    method : str
        Connectivity estimation method, one of
        :data:`~coupy.connectivity.const_def.availableMethods`
    output : str
        Relevant for ``method='coh'`` and ``method='plv'``.
        Use ``'abs'`` for the absolute value of the coherence, ``'pow'``
        for its square, ``'complex'`` for the complex valued coherency or
        ``'angle'``, ``'imag'`` or ``'real'`` to extract the phase difference,
        imaginary or real part of the coherency respectively.
    jackknife : bool
        Set to `True` to compute the variance via jackknife resampling
        over the replicates
    bandwidth : float or None
        Relevant for ``method='psi'``, mandatory there
    fsample : float
        Relevant for ``method='granger'``
    feedback : None, bool, str or callable
        Progress report of the replicate loops, see
        :func:`~coupy.shared.tools.progress`

    Returns
    -------
    out : :class:`~coupy.StructDict`
        Has the fields ``label``, ``labelcmb``, ``dimord`` (without the
        replicate axis), ``freq``, ``time``, ``nrpt``, the metric itself under
        ``'<method>spctrm'`` and, if a variance could be estimated,
        ``'<method>spctrmvar'`` and ``'<method>spctrmsem'``. The
        ``cfg`` field allows to replay the analysis.

    Examples
    --------
    >>> data = cpy.FreqData(crsspctrm=csd, label=['a', 'b', 'c'],
    ...                     freq=freqs, dimord='rpt_chan_chan_freq')
    >>> coh = cpy.connectivityanalysis(data, method='coh', jackknife=True)
    >>> coh.cohspctrm.shape
    (3, 3, 4)

    The same using a `cfg` structure:

    >>> cfg = cpy.StructDict()
    >>> cfg.method = 'psi'
    >>> cfg.bandwidth = 2
    >>> psi = cpy.connectivityanalysis(cfg, data)

    Notes
    -----
    .. [Nolte2008] Nolte, Guido, et al. "Robustly estimating the flow direction of information in complex physical systems." Physical review letters 100.23 (2008): 234101.
    .. [Dhamala2008] Dhamala, Mukeshwar, Govindan Rangarajan, and Mingzhou Ding. "Analyzing information flow in brain networks with nonparametric Granger causality." Neuroimage 41.2 (2008): 354-362.
    """

    defaults = get_defaults(connectivityanalysis)
    new_cfg = StructDict(method=method, output=output, jackknife=jackknife,
                         bandwidth=bandwidth, fsample=fsample, feedback=feedback)

    # Ensure a valid computational method was selected
    if method not in availableMethods:
        raise UnsupportedMethodError(method, availableMethods)
    meth = ConnMethod(method)

    if output not in availableOutputs:
        raise UnsupportedModeError(output, availableOutputs)

    if not isinstance(jackknife, bool):
        raise CPYTypeError(jackknife, 'jackknife', 'boolean')

    # output settings are only relevant for coherence
    if meth not in (ConnMethod.COH, ConnMethod.PLV) and output != defaults['output']:
        CPYWarning(f"Setting `output` for method {method} has no effect!")

    field = inputFields[meth]
    arr = getattr(data, field)
    if arr is None:
        lgl = f"input data with a `{field}` field for method {method}"
        raise CPYValueError(lgl, varname="data", actual=f"no `{field}`")

    CPYLog(f"Computing {meth.value} from `{field}` of {data}", loglevel="IMPORTANT",
           caller="connectivityanalysis")

    params = StructDict(output=output, powindx=None, sparse=False, nbin=None,
                        hasrpt=data.has_rpt, hasjack=False, feedback=feedback)

    if meth == ConnMethod.GRANGER:
        tensor = _granger_input(data, jackknife, fsample, params)
    else:
        if meth in crossSpectralMethods and data.is_sparse:
            powindx = labelcmb2indx(data.labelcmb)
            if np.any(powindx < 0):
                missing = sorted(set(data.labelcmb[powindx < 0]))
                lgl = "auto-combinations for every channel of `labelcmb`"
                raise CPYValueError(lgl, varname="labelcmb", actual="missing for " + ", ".join(missing))
            params.powindx = powindx
            params.sparse = True

        if meth == ConnMethod.PSI:
            params.nbin = _psi_nbin(data.freq, bandwidth)

        tensor = _replicate_input(data, arr, meth, jackknife, params)

    mean, var, nRpt = compute_metric(meth, tensor, params)

    labelcmb = data.labelcmb
    if params.sparse:
        keep = remove_auto_combinations(params.powindx)
        mean = mean[keep]
        if var is not None:
            var = var[keep]
        labelcmb = labelcmb[keep]

    dims = data.dims[1:] if data.has_rpt else data.dims

    out = StructDict()
    out.label = list(data.label)
    out.labelcmb = labelcmb
    out.dimord = "_".join(dims)
    out.freq = data.freq
    out.time = data.time
    out[outputFields[meth]] = mean
    if var is not None:
        out[outputFields[meth] + "var"] = var
        out[outputFields[meth] + "sem"] = jk.standard_error(var, nRpt)
    out.nrpt = nRpt
    out.cfg = StructDict(connectivityanalysis=new_cfg)

    return out


def _psi_nbin(freq, bandwidth):
    """Half-width of the phase slope window in frequency bins"""

    if bandwidth is None:
        raise CPYValueError("frequency bandwidth for method psi", varname="bandwidth", actual="None")
    if freq is None:
        raise CPYValueError("frequency axis for method psi", varname="freq", actual="None")
    scalar_parser(bandwidth, varname="bandwidth", lims=[0, np.inf])

    _, idx = best_match(freq, freq[0] + bandwidth)
    return int(idx[0])


def _replicate_input(data, arr, meth, jackknife, params):
    """
    Bring the input field into replicate-indexed form and set
    the ``hasrpt``/``hasjack`` flags of `params` accordingly
    """

    if not data.has_rpt:
        if jackknife:
            CPYWarning("No replicates to jackknife, computing a single estimate",
                       caller="connectivityanalysis")
        params.hasrpt = False
        return ensure_rpt_axis(arr, hasrpt=False)

    tensor = arr
    if meth == ConnMethod.PLV:
        tensor = normalize_replicates(tensor, feedback=params.feedback)

    if data.is_jackknife and jackknife:
        # already leave-one-out replicates
        params.hasjack = True
    elif jackknife:
        tensor = jk.trial_avg_replicates(tensor)
        params.hasjack = True
    else:
        # metric of the replicate average
        tensor = average_replicates(tensor)
        params.hasrpt = False

    return ensure_rpt_axis(tensor, hasrpt=True)


def _granger_input(data, jackknife, fsample, params):
    """Averaged transfer function, noise covariance and cross spectra"""

    if jackknife:
        CPYWarning("Jackknife is not available for method granger, ignoring it",
                   caller="connectivityanalysis")

    if data.noisecov is None or data.crsspctrm is None:
        lgl = "input data with `noisecov` and `crsspctrm` fields for method granger"
        raise CPYValueError(lgl, varname="data", actual="missing field(s)")
    if data.is_sparse:
        lgl = "cross spectra of all channel pairs (chan_chan layout) for method granger"
        raise CPYValueError(lgl, varname="crsspctrm", actual="linearly indexed channel combinations")

    transfer = data.transfer
    crsspctrm = data.crsspctrm
    noisecov = data.noisecov
    if data.has_rpt:
        transfer = transfer.mean(axis=0)
        crsspctrm = crsspctrm.mean(axis=0)
    if noisecov.ndim == 3:
        noisecov = noisecov.mean(axis=0)

    params.noisecov = noisecov
    params.crsspctrm = crsspctrm
    params.fs = fsample
    params.hasrpt = False

    return ensure_rpt_axis(transfer, hasrpt=False)
