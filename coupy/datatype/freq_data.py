# -*- coding: utf-8 -*-
#
# Container for (cross-)spectral and transfer function input data
#

# Builtin/3rd party package imports
import numpy as np

# Local imports
from coupy.shared.errors import CPYValueError, CPYTypeError, ShapeMismatchError
from coupy.shared.parsers import array_parser

__all__ = ["FreqData"]


class FreqData:
    """
    Frequency domain input of a connectivity analysis

    Holds the output of an (external) spectral or multivariate autoregressive
    analysis after channel/trial selection. Nothing gets copied, the arrays
    are consumed read-only.

    Parameters
    ----------
    crsspctrm : :class:`numpy.ndarray` or None
        Complex cross spectra. Dense layout ``([rpt,] chan, chan, freq[, time])``
        or, if `labelcmb` is given, sparse layout ``([rpt,] chancmb, freq[, time])``
        where auto- and cross-terms share the `chancmb` axis.
    transfer : :class:`numpy.ndarray` or None
        Transfer functions ``([rpt,] source, target, freq[, time])``
    noisecov : :class:`numpy.ndarray` or None
        Noise covariance of the autoregressive model ``([rpt,] chan, chan)``
    label : list of str
        Channel labels
    labelcmb : array_like of shape (ncmb, 2) or None
        Channel combinations of a sparse `crsspctrm`
    freq : array_like or None
        Frequencies in Hz
    time : array_like or None
        Time points of time-resolved spectra
    dimord : str
        Underscore separated axis names of the data arrays, e.g.
        ``'rpt_chan_chan_freq'`` or ``'rpt_chancmb_freq_time'``.
        A leading ``'rpt'`` marks a replicate axis.
    method : None or str
        Set to ``'jackknife'`` if the replicates already are
        leave-one-out samples

    Examples
    --------
    >>> data = FreqData(crsspctrm=csd, label=['a', 'b', 'c'],
    ...                 freq=np.arange(1, 5), dimord='rpt_chan_chan_freq')
    """

    def __init__(self, crsspctrm=None, transfer=None, noisecov=None,
                 label=None, labelcmb=None, freq=None, time=None,
                 dimord="chan_chan_freq", method=None):

        if not isinstance(dimord, str):
            raise CPYTypeError(dimord, varname="dimord", expected="str")
        if method not in (None, 'jackknife'):
            raise CPYValueError("None or 'jackknife'", varname="method", actual=method)

        self.crsspctrm = None if crsspctrm is None else np.asarray(crsspctrm)
        self.transfer = None if transfer is None else np.asarray(transfer)
        self.noisecov = None if noisecov is None else np.asarray(noisecov)
        self.dimord = dimord
        self.method = method

        if label is None:
            label = [f"channel{k + 1}" for k in range(self._infer_nchan())]
        self.label = [str(lbl) for lbl in label]

        if labelcmb is not None:
            array_parser(labelcmb, varname="labelcmb", dims=(None, 2))
            labelcmb = np.asarray(labelcmb).astype(str)
        self.labelcmb = labelcmb

        if freq is not None:
            array_parser(freq, varname="freq", issorted=True)
            freq = np.asarray(freq, dtype=float)
        self.freq = freq
        self.time = None if time is None else np.asarray(time)

        self._check_shapes()

    @property
    def dims(self):
        """Axis names, as given by `dimord`"""
        return self.dimord.split('_')

    @property
    def has_rpt(self):
        return self.dims[0].startswith('rpt')

    @property
    def is_jackknife(self):
        return self.method == 'jackknife'

    @property
    def is_sparse(self):
        """`True` if the cross spectra are linearly indexed channel combinations"""
        return self.labelcmb is not None

    @property
    def nrpt(self):
        if not self.has_rpt:
            return 1
        for arr in (self.crsspctrm, self.transfer):
            if arr is not None:
                return arr.shape[0]
        return 1

    def _infer_nchan(self):
        offset = 1 if self.has_rpt else 0
        if self.transfer is not None:
            return self.transfer.shape[offset]
        if self.noisecov is not None:
            return self.noisecov.shape[-1]
        if self.crsspctrm is not None and 'chancmb' not in self.dims:
            return self.crsspctrm.shape[offset]
        raise CPYValueError("channel labels for sparse cross spectra", varname="label")

    def _check_shapes(self):

        nChannels = len(self.label)
        offset = 1 if self.has_rpt else 0

        # the non-channel axes every array has to agree upon
        trailing = None

        if self.crsspctrm is not None:
            if self.is_sparse:
                nchan_axes = 1
                if 'chancmb' not in self.dims:
                    lgl = "dimord with a 'chancmb' axis for linearly indexed cross spectra"
                    raise CPYValueError(lgl, varname="dimord", actual=self.dimord)
                if self.crsspctrm.shape[offset] != len(self.labelcmb):
                    lgl = f"{len(self.labelcmb)} channel combinations"
                    act = f"{self.crsspctrm.shape[offset]} entries along the `chancmb` axis"
                    raise ShapeMismatchError(lgl, varname="crsspctrm", actual=act)
                unknown = set(self.labelcmb.flatten()) - set(self.label)
                if unknown:
                    lgl = "channel combinations of known channel labels"
                    raise ShapeMismatchError(lgl, varname="labelcmb", actual=", ".join(sorted(unknown)))
            else:
                nchan_axes = 2
                chan_shape = self.crsspctrm.shape[offset:offset + 2]
                if chan_shape != (nChannels, nChannels):
                    lgl = f"{nChannels} x {nChannels} channels"
                    raise ShapeMismatchError(lgl, varname="crsspctrm", actual=f"shape {self.crsspctrm.shape}")
            self._check_ndim(self.crsspctrm, "crsspctrm", offset + nchan_axes)
            trailing = self.crsspctrm.shape[offset + nchan_axes:]

        if self.transfer is not None:
            chan_shape = self.transfer.shape[offset:offset + 2]
            if chan_shape != (nChannels, nChannels):
                lgl = f"{nChannels} x {nChannels} channels"
                raise ShapeMismatchError(lgl, varname="transfer", actual=f"shape {self.transfer.shape}")
            self._check_ndim(self.transfer, "transfer", offset + 2)
            if self.crsspctrm is not None and not self.is_sparse:
                if self.transfer.shape != self.crsspctrm.shape:
                    lgl = f"transfer functions shaped like the cross spectra {self.crsspctrm.shape}"
                    raise ShapeMismatchError(lgl, varname="transfer", actual=f"shape {self.transfer.shape}")
            trailing = self.transfer.shape[offset + 2:]

        if self.noisecov is not None:
            if self.noisecov.shape[-2:] != (nChannels, nChannels) or self.noisecov.ndim not in (2, 3):
                lgl = f"({nChannels}, {nChannels}) or (nrpt, {nChannels}, {nChannels}) noise covariance"
                raise ShapeMismatchError(lgl, varname="noisecov", actual=f"shape {self.noisecov.shape}")
            if self.noisecov.ndim == 3 and self.noisecov.shape[0] != self.nrpt:
                lgl = f"{self.nrpt} noise covariance replicates"
                raise ShapeMismatchError(lgl, varname="noisecov", actual=f"shape {self.noisecov.shape}")

        if trailing is not None:
            if self.freq is not None and trailing[0] != len(self.freq):
                lgl = f"{len(self.freq)} frequencies"
                raise ShapeMismatchError(lgl, varname="freq", actual=f"{trailing[0]} frequency bins in the data")
            if self.time is not None and (len(trailing) < 2 or trailing[1] != len(self.time)):
                lgl = f"{len(self.time)} time points"
                raise ShapeMismatchError(lgl, varname="time", actual=f"data with non-channel shape {trailing}")

    def _check_ndim(self, arr, varname, nLeading):
        # dimord counts all axes: leading ones plus freq (+ time)
        if arr.ndim != len(self.dims) or arr.ndim < nLeading + 1:
            lgl = f"{len(self.dims)}-dimensional array matching dimord '{self.dimord}'"
            raise ShapeMismatchError(lgl, varname=varname, actual=f"shape {arr.shape}")

    def __repr__(self):
        fields = [name for name in ('crsspctrm', 'transfer', 'noisecov')
                  if getattr(self, name) is not None]
        return (f"<FreqData: {len(self.label)} channels, dimord '{self.dimord}', "
                f"{self.nrpt} replicate(s), fields {fields}>")
