# -*- coding: utf-8 -*-
#
# Test connectivityanalysis frontend
#

import numpy as np
import pytest

import coupy as cpy
from coupy.connectivity.connectivity_analysis import get_engine, compute_metric
from coupy.connectivity.coherence import coherence
from coupy.connectivity.const_def import ConnMethod, availableMethods, placeholderMethods
from coupy.shared.errors import (
    CPYValueError,
    CPYTypeError,
    UnsupportedMethodError,
    UnsupportedModeError)
from coupy.statistics import jackknifing as jk
from coupy.tests.helpers import random_fourier, dense_csd, sparse_layout


labels = ['chan1', 'chan2', 'chan3']
nTrials = 5
nFreq = 4
freqs = np.arange(1, nFreq + 1, dtype=float)


@pytest.fixture
def csd_data(rng):
    csd = dense_csd(random_fourier(nTrials, len(labels), nFreq, rng))
    return cpy.FreqData(crsspctrm=csd, label=labels, freq=freqs,
                        dimord='rpt_chan_chan_freq')


@pytest.fixture
def sparse_data(rng):
    csd = dense_csd(random_fourier(nTrials, len(labels), nFreq, rng))
    rows, labelcmb, _ = sparse_layout(csd, labels)
    return cpy.FreqData(crsspctrm=rows, label=labels, labelcmb=labelcmb,
                        freq=freqs, dimord='rpt_chancmb_freq')


@pytest.fixture
def mvar_data(rng):
    shape = (nTrials, len(labels), len(labels), nFreq)
    H = rng.standard_normal(shape) + 1j * rng.standard_normal(shape)
    H += 4 * np.eye(len(labels))[None, :, :, None]
    csd = dense_csd(random_fourier(nTrials, len(labels), nFreq, rng))
    noisecov = np.diag([1.0, 2.0, 1.5])
    return cpy.FreqData(crsspctrm=csd, transfer=H, noisecov=noisecov, label=labels,
                        freq=freqs, dimord='rpt_chan_chan_freq')


class TestDispatch:

    def test_get_engine(self):
        assert get_engine('coh') is coherence
        assert get_engine(ConnMethod.PLV) is coherence
        for method in availableMethods:
            assert callable(get_engine(method))

    @pytest.mark.parametrize("method", placeholderMethods + ("foo",))
    def test_unsupported(self, method):
        with pytest.raises(UnsupportedMethodError, match=method):
            get_engine(method)

    def test_compute_metric(self, rng):
        csd = dense_csd(random_fourier(3, 2, 4, rng))
        mean, var, n = compute_metric('coh', csd, cpy.StructDict(output='abs'))
        assert n == 3
        assert mean.shape == (2, 2, 4)


class TestCoherence:

    def test_coh_bounds(self, csd_data):
        """
        3 channels x 4 freqs x 5 trials, the trial averaged
        coherence stays within [0, 1]
        """
        res = cpy.connectivityanalysis(csd_data, method='coh')

        coh = res.cohspctrm
        assert coh.shape == (3, 3, 4)
        assert np.all(coh >= 0)
        assert np.all(coh <= 1 + 1e-12)
        # trial averaging, no variance
        assert 'cohspctrmvar' not in res
        assert res.dimord == 'chan_chan_freq'
        assert res.label == labels
        assert np.array_equal(res.freq, freqs)
        assert res.nrpt == 1

    def test_coh_jackknife(self, csd_data):

        res = cpy.connectivityanalysis(csd_data, method='coh', jackknife=True)

        assert res.nrpt == nTrials
        assert res.cohspctrmvar.shape == (3, 3, 4)
        assert np.all(res.cohspctrmvar >= -1e-12)
        assert np.allclose(res.cohspctrmsem, np.sqrt(res.cohspctrmvar / nTrials))
        assert np.all(res.cohspctrm <= 1 + 1e-12)

        # by hand
        replicates = jk.trial_avg_replicates(csd_data.crsspctrm)
        coh_rpts = [np.abs(cpy.connectivity.coherence.normalize_csd(rpt)) for rpt in replicates]
        assert np.allclose(res.cohspctrm, np.mean(coh_rpts, axis=0))

    def test_coh_jackknife_input(self, csd_data):
        """
        Data which already are leave-one-out replicates
        get jackknifed without further resampling
        """
        replicates = jk.trial_avg_replicates(csd_data.crsspctrm)
        jdata = cpy.FreqData(crsspctrm=replicates, label=labels, freq=freqs,
                             dimord='rpt_chan_chan_freq', method='jackknife')

        res = cpy.connectivityanalysis(jdata, method='coh', jackknife=True)
        ref = cpy.connectivityanalysis(csd_data, method='coh', jackknife=True)
        assert res.nrpt == nTrials
        assert np.allclose(res.cohspctrm, ref.cohspctrm)
        assert np.allclose(res.cohspctrmvar, ref.cohspctrmvar)

    def test_coh_jackknife_input_averaged(self, csd_data):
        """
        Without `jackknife` leave-one-out replicates get averaged
        like any other replicates, their mean is the trial average
        """
        replicates = jk.trial_avg_replicates(csd_data.crsspctrm)
        jdata = cpy.FreqData(crsspctrm=replicates, label=labels, freq=freqs,
                             dimord='rpt_chan_chan_freq', method='jackknife')

        res = cpy.connectivityanalysis(jdata, method='coh')
        ref = cpy.connectivityanalysis(csd_data, method='coh')
        assert 'cohspctrmvar' not in res
        assert res.nrpt == ref.nrpt
        assert np.allclose(res.cohspctrm, ref.cohspctrm)

    def test_coh_output(self, csd_data):

        res = cpy.connectivityanalysis(csd_data, method='coh', output='complex')
        assert np.iscomplexobj(res.cohspctrm)
        powres = cpy.connectivityanalysis(csd_data, method='coh', output='pow')
        assert np.allclose(powres.cohspctrm, np.abs(res.cohspctrm) ** 2)

    def test_sparse_self_pairs_removed(self, sparse_data, csd_data):

        res = cpy.connectivityanalysis(sparse_data, method='coh')

        assert res.cohspctrm.shape == (3, nFreq)
        assert res.dimord == 'chancmb_freq'
        assert np.array_equal(res.labelcmb, [['chan1', 'chan2'],
                                             ['chan1', 'chan3'],
                                             ['chan2', 'chan3']])
        assert all(cmb[0] != cmb[1] for cmb in res.labelcmb)

    def test_sparse_matches_dense(self, rng):

        csd = dense_csd(random_fourier(nTrials, len(labels), nFreq, rng))
        rows, labelcmb, pairs = sparse_layout(csd, labels)
        dense = cpy.FreqData(crsspctrm=csd, label=labels, dimord='rpt_chan_chan_freq')
        sparse = cpy.FreqData(crsspctrm=rows, label=labels, labelcmb=labelcmb,
                              dimord='rpt_chancmb_freq')

        dres = cpy.connectivityanalysis(dense, method='coh', jackknife=True)
        sres = cpy.connectivityanalysis(sparse, method='coh', jackknife=True)

        cross = [(i, j) for i, j in pairs if i != j]
        for k, (i, j) in enumerate(cross):
            assert np.allclose(sres.cohspctrm[k], dres.cohspctrm[i, j])
            assert np.allclose(sres.cohspctrmvar[k], dres.cohspctrmvar[i, j])

    def test_missing_auto_combination(self, rng):

        rows = rng.standard_normal((2, nFreq)) + 0j
        data = cpy.FreqData(crsspctrm=rows, label=['a', 'b'],
                            labelcmb=[['a', 'a'], ['a', 'b']], dimord='chancmb_freq')
        with pytest.raises(CPYValueError, match="auto-combinations"):
            cpy.connectivityanalysis(data, method='coh')

    def test_no_replicates(self, csd_data):

        data = cpy.FreqData(crsspctrm=csd_data.crsspctrm.mean(axis=0), label=labels,
                            freq=freqs, dimord='chan_chan_freq')
        res = cpy.connectivityanalysis(data, method='coh', jackknife=True)
        ref = cpy.connectivityanalysis(csd_data, method='coh')

        assert 'cohspctrmvar' not in res
        assert np.allclose(res.cohspctrm, ref.cohspctrm)


class TestPLV:

    def test_plv(self, csd_data):

        res = cpy.connectivityanalysis(csd_data, method='plv')
        plv = res.plvspctrm

        assert plv.shape == (3, 3, 4)
        # auto terms are exactly locked
        for i in range(3):
            assert np.allclose(plv[i, i], 1)
        assert np.all(plv <= 1 + 1e-12)

        # by hand: magnitude of the average phasor
        phasors = csd_data.crsspctrm / np.abs(csd_data.crsspctrm)
        assert np.allclose(plv, np.abs(phasors.mean(axis=0)))

    def test_plv_sparse(self, sparse_data):

        res = cpy.connectivityanalysis(sparse_data, method='plv', jackknife=True)
        assert res.plvspctrm.shape == (3, nFreq)
        assert res.plvspctrmvar.shape == (3, nFreq)
        assert res.labelcmb.shape == (3, 2)


class TestPSI:

    def test_psi(self, csd_data):

        res = cpy.connectivityanalysis(csd_data, method='psi', bandwidth=1, jackknife=True)
        psi = res.psispctrm

        assert psi.shape == (3, 3, 4)
        assert np.allclose(psi, -np.swapaxes(psi, 0, 1))
        assert res.psispctrmvar.shape == psi.shape

    def test_psi_sparse(self, sparse_data):

        res = cpy.connectivityanalysis(sparse_data, method='psi', bandwidth=2)
        assert res.psispctrm.shape == (3, nFreq)
        assert res.labelcmb.shape == (3, 2)

    def test_psi_needs_bandwidth(self, csd_data):

        with pytest.raises(CPYValueError, match="bandwidth"):
            cpy.connectivityanalysis(csd_data, method='psi')

        data = cpy.FreqData(crsspctrm=csd_data.crsspctrm, label=labels,
                            dimord='rpt_chan_chan_freq')
        with pytest.raises(CPYValueError, match="freq"):
            cpy.connectivityanalysis(data, method='psi', bandwidth=1)


class TestMVAR:

    def test_pdc(self, mvar_data):

        res = cpy.connectivityanalysis(mvar_data, method='pdc', jackknife=True)
        assert res.pdcspctrm.shape == (3, 3, 4)
        assert res.pdcspctrmvar.shape == (3, 3, 4)
        assert np.all(res.pdcspctrm <= 1)

    def test_dtf(self, mvar_data):

        res = cpy.connectivityanalysis(mvar_data, method='dtf')
        # averaged transfer function, rows normalized
        assert np.allclose(np.sum(res.dtfspctrm ** 2, axis=1), 1)
        assert 'dtfspctrmvar' not in res

    def test_granger(self, mvar_data):

        res = cpy.connectivityanalysis(mvar_data, method='granger', fsample=2)
        G = res.grangerspctrm

        assert G.shape == (3, 3, 4)
        assert res.nrpt == 1
        for i in range(3):
            assert np.all(G[i, i] == 0)

        # replicates get averaged beforehand
        ref = cpy.connectivity.granger.granger(mvar_data.transfer.mean(axis=0),
                                               mvar_data.noisecov,
                                               mvar_data.crsspctrm.mean(axis=0),
                                               fs=2)
        assert np.allclose(G, ref)

    def test_granger_ignores_jackknife(self, mvar_data):

        res = cpy.connectivityanalysis(mvar_data, method='granger', jackknife=True)
        assert 'grangerspctrmvar' not in res

    def test_granger_needs_noisecov(self, mvar_data):

        data = cpy.FreqData(crsspctrm=mvar_data.crsspctrm, transfer=mvar_data.transfer,
                            label=labels, dimord='rpt_chan_chan_freq')
        with pytest.raises(CPYValueError, match="noisecov"):
            cpy.connectivityanalysis(data, method='granger')

    def test_missing_transfer(self, csd_data):

        with pytest.raises(CPYValueError, match="transfer"):
            cpy.connectivityanalysis(csd_data, method='dtf')


class TestFrontendErrors:

    @pytest.mark.parametrize("method", placeholderMethods)
    def test_placeholders(self, csd_data, method):
        with pytest.raises(UnsupportedMethodError):
            cpy.connectivityanalysis(csd_data, method=method)

    def test_invalid_output(self, csd_data):
        with pytest.raises(UnsupportedModeError, match="output"):
            cpy.connectivityanalysis(csd_data, method='coh', output='magnitude')

    def test_invalid_jackknife(self, csd_data):
        with pytest.raises(CPYTypeError, match="jackknife"):
            cpy.connectivityanalysis(csd_data, method='coh', jackknife=1)

    def test_no_data(self):
        with pytest.raises(cpy.shared.errors.CPYError, match="FreqData"):
            cpy.connectivityanalysis(method='coh')


class TestCfg:

    def test_cfg_call_styles(self, csd_data):

        cfg = cpy.StructDict()
        cfg.method = 'coh'
        cfg.jackknife = True

        ref = cpy.connectivityanalysis(csd_data, method='coh', jackknife=True)
        for res in (cpy.connectivityanalysis(cfg, csd_data),
                    cpy.connectivityanalysis(csd_data, cfg),
                    cpy.connectivityanalysis(csd_data, cfg=cfg)):
            assert np.allclose(res.cohspctrm, ref.cohspctrm)
            assert np.allclose(res.cohspctrmvar, ref.cohspctrmvar)

        cfg.data = csd_data
        res = cpy.connectivityanalysis(cfg)
        assert np.allclose(res.cohspctrm, ref.cohspctrm)

    def test_cfg_yes_no(self, csd_data):

        res = cpy.connectivityanalysis(csd_data, {'method': 'coh', 'jackknife': 'yes'})
        assert 'cohspctrmvar' in res

    def test_cfg_replay(self, csd_data):

        res = cpy.connectivityanalysis(csd_data, method='psi', bandwidth=1)
        replay = cpy.connectivityanalysis(csd_data, res.cfg)
        assert np.allclose(res.psispctrm, replay.psispctrm)

    def test_cfg_conflicts(self, csd_data):

        cfg = cpy.StructDict(method='coh')
        with pytest.raises(CPYValueError, match="method"):
            cpy.connectivityanalysis(csd_data, cfg, method='plv')

        with pytest.raises(CPYValueError, match="cfg"):
            cpy.connectivityanalysis(csd_data, cfg, cfg=cfg)

        with pytest.raises(CPYValueError, match="tapsmofrq"):
            cpy.connectivityanalysis(csd_data, {'tapsmofrq': 2})

    def test_defaults(self):

        defaults = cpy.get_defaults(cpy.connectivityanalysis)
        assert defaults.method == 'coh'
        assert defaults.output == 'abs'
        assert defaults.jackknife is False


def test_feedback(csd_data):

    calls = []
    cpy.connectivityanalysis(csd_data, method='coh', jackknife=True,
                             feedback=lambda k, n, desc: calls.append(k))
    assert calls == list(range(1, nTrials + 1))
