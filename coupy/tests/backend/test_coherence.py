# -*- coding: utf-8 -*-

import numpy as np
import pytest

from coupy.connectivity.coherence import auto_powers, normalize_csd, coherence
from coupy.connectivity.labelcmb import labelcmb2indx
from coupy.statistics.replicates import normalize_replicates
from coupy.shared.errors import UnsupportedModeError
from coupy.shared.tools import StructDict
from coupy.tests.helpers import random_fourier, dense_csd, sparse_layout


def test_auto_powers_dense(rng):

    csd = dense_csd(random_fourier(1, 3, 4, rng))[0]
    p1, p2 = auto_powers(csd)

    assert p1.shape == (3, 1, 4)
    assert p2.shape == (1, 3, 4)
    for i in range(3):
        assert np.allclose(p1[i, 0], np.abs(csd[i, i]))
        assert np.allclose(p2[0, i], np.abs(csd[i, i]))


def test_normalize_csd(rng):

    '''
    Tests the normalization to arrive at the coherency
    given a trial averaged csd
    '''

    fourier = random_fourier(20, 3, 6, rng)
    avCSD = dense_csd(fourier).mean(axis=0)

    Cij = normalize_csd(avCSD)
    assert Cij.shape == avCSD.shape

    # auto coherencies are 1
    for i in range(3):
        assert np.allclose(Cij[i, i], 1)

    # hermitian
    assert np.allclose(Cij[0, 1], np.conj(Cij[1, 0]))
    # the average of rank one matrices is positive semi-definite
    assert np.all(np.abs(Cij) <= 1 + 1e-12)
    # the noise is independent between channels
    assert np.all(np.abs(Cij[0, 1]) < 0.9)


def test_single_trial_coherence_is_one(rng):

    csd = dense_csd(random_fourier(4, 3, 5, rng))
    params = StructDict(output='abs', powindx=None, hasrpt=True, hasjack=False)
    mean, var, n = coherence(csd, params)

    assert n == 4
    assert mean.shape == (3, 3, 5)
    assert np.allclose(mean, 1)
    assert np.allclose(var, 0)


def test_sparse_matches_dense(rng):

    labels = ['a', 'b', 'c']
    csd = dense_csd(random_fourier(8, 3, 4, rng)).mean(axis=0, keepdims=True)
    rows, labelcmb, pairs = sparse_layout(csd, labels)
    powindx = labelcmb2indx(labelcmb)

    dense, _, _ = coherence(csd, StructDict(output='complex', hasrpt=False))
    sparse, _, _ = coherence(rows, StructDict(output='complex', powindx=powindx, hasrpt=False))

    assert sparse.shape == (len(pairs), 4)
    for k, (i, j) in enumerate(pairs):
        assert np.allclose(sparse[k], dense[i, j])


@pytest.mark.parametrize("output", ["abs", "pow", "real", "imag", "angle", "absreal", "absimag"])
def test_real_outputs(rng, output):

    csd = dense_csd(random_fourier(5, 2, 3, rng))
    mean, var, n = coherence(csd, StructDict(output=output))

    assert mean.dtype == np.float64
    assert var.dtype == np.float64
    # imaginary part of the auto coherency vanishes
    if output in ("imag", "absimag", "angle"):
        assert np.allclose(mean[0, 0], 0)


def test_complex_output(rng):

    csd = dense_csd(random_fourier(1, 2, 3, rng))
    mean, var, n = coherence(csd, StructDict(output='fourier', hasrpt=False))

    assert np.iscomplexobj(mean)
    assert var is None
    # single slice coherency of a dyadic product is a pure phase
    assert np.allclose(np.abs(mean), 1)


def test_unknown_output(rng):

    csd = dense_csd(random_fourier(2, 2, 3, rng))
    with pytest.raises(UnsupportedModeError, match="output"):
        coherence(csd, StructDict(output='magnitude'))


def test_plv(rng):

    '''
    Unit-magnitude normalized replicates yield the phase locking value:
    the magnitude of the average phase difference phasor
    '''

    nTrials = 50
    fourier = random_fourier(nTrials, 2, 3, rng)
    # a fixed phase lag on top of the random amplitudes
    fourier[:, 1] = 3 * np.abs(fourier[:, 0]) * np.exp(1j * (np.angle(fourier[:, 0]) - 0.4))
    csd = dense_csd(fourier)

    normed = normalize_replicates(csd)
    avg = normed.mean(axis=0, keepdims=True)
    plv, _, _ = coherence(avg, StructDict(output='abs', hasrpt=False))

    # perfectly locked
    assert np.allclose(plv[0, 1], 1)

    # random phases
    fourier = random_fourier(nTrials, 2, 3, rng)
    normed = normalize_replicates(dense_csd(fourier))
    plv, _, _ = coherence(normed.mean(axis=0, keepdims=True), StructDict(hasrpt=False))
    assert np.all(plv[0, 1] < 0.5)
