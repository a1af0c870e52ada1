# -*- coding: utf-8 -*-
#
# Helper functions for frequently used testing routines
#

import numpy as np

test_seed = 42


def random_fourier(nRpt, nChannels, nFreq, rng, nTime=None):
    """
    Complex Fourier coefficients of shape ``(nRpt, nChannels, nFreq[, nTime])``
    """
    shape = (nRpt, nChannels, nFreq) if nTime is None else (nRpt, nChannels, nFreq, nTime)
    return rng.standard_normal(shape) + 1j * rng.standard_normal(shape)


def dense_csd(fourier):
    """
    Single replicate cross spectra ``(nRpt, N, N, nFreq[, nTime])`` as
    dyadic products of the Fourier coefficients ``(nRpt, N, nFreq[, nTime])``
    """
    return fourier[:, :, np.newaxis, ...] * np.conj(fourier[:, np.newaxis, :, ...])


def sparse_layout(csd, labels):
    """
    Linearly indexed version of the dense cross spectra `csd`
    ``(nRpt, N, N, ...)``: all auto-combinations first, then
    the upper triangle
    """
    nChannels = len(labels)
    pairs = [(i, i) for i in range(nChannels)]
    pairs += [(i, j) for i in range(nChannels) for j in range(i + 1, nChannels)]
    labelcmb = [[labels[i], labels[j]] for i, j in pairs]
    rows = np.stack([csd[:, i, j] for i, j in pairs], axis=1)
    return rows, labelcmb, pairs
