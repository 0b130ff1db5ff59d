"""Tests for the internal synapse and its short-term plasticity."""

import numpy as np
import pytest

from rcsynapse.errors import InvalidConfiguration
from rcsynapse.neuron import NeuronRef, NeuronRole, SignalType
from rcsynapse.synapse import (
    InternalSynapse,
    PlasticityParams,
    PostSynapticCurrentParams,
)

EXC = NeuronRole.EXCITATORY


def spiking():
    return NeuronRef(EXC, SignalType.SPIKE)


def analog():
    return NeuronRef(EXC, SignalType.ANALOG)


def fire(neuron, leak, after_first_spike=True):
    """Put the source in a spiking state with the given spike leak."""
    neuron.output_signal = 1.0
    neuron.spike_leak = leak
    neuron.after_first_spike = after_first_spike


@pytest.fixture
def params():
    return PlasticityParams(resting_efficacy=0.5, tau_depression=100.0,
                            tau_facilitation=50.0)


@pytest.fixture
def synapse(params):
    return InternalSynapse(spiking(), spiking(), 1.0, plasticity=params)


class TestInternalSynapse:
    def test_initial_state(self, synapse):
        assert synapse.facilitation == 0.5
        assert synapse.depression == 1.0

    def test_before_first_spike_uses_resting_state(self, synapse):
        fire(synapse.source, 10.0, after_first_spike=False)
        assert synapse.get_signal() == pytest.approx(0.5)
        assert synapse.depression == 1.0

    def test_efficacy_after_spike(self, synapse):
        fire(synapse.source, 10.0)
        x = np.exp(-10.0 / 50.0)
        y = np.exp(-10.0 / 100.0)
        f = 0.5 * x + 0.5 * (1.0 - x)
        d = 1.0 * (1.0 - f) * y + (1.0 - y)
        assert synapse.get_signal(True) == pytest.approx(f * d)
        assert synapse.facilitation == pytest.approx(f)
        assert synapse.depression == pytest.approx(d)
        assert synapse.efficacy_stat.arith_avg == pytest.approx(f * d)

    def test_zero_signal_short_circuit(self, synapse):
        synapse.source.after_first_spike = True
        synapse.source.spike_leak = 3.0
        synapse.source.output_signal = 0.0
        assert synapse.get_signal(True) == 0.0
        assert synapse.depression == 1.0
        assert synapse.efficacy_stat.is_empty

    def test_efficacy_bounds_under_repeated_spikes(self, synapse, params):
        rng = np.random.default_rng(11)
        for leak in rng.integers(0, 200, size=300):
            fire(synapse.source, float(leak))
            synapse.get_signal(True)
            assert 0.0 <= synapse.depression <= 1.0
            assert params.resting_efficacy - 1e-12 <= synapse.facilitation <= 1.0
        stat = synapse.efficacy_stat
        assert stat.num_samples == 300
        assert stat.min >= 0.0
        assert stat.max <= 1.0

    def test_plasticity_off(self):
        params = PlasticityParams(0.3, 100.0, 50.0, apply_short_term_plasticity=False)
        syn = InternalSynapse(spiking(), spiking(), 0.7, plasticity=params)
        fire(syn.source, 5.0)
        assert syn.get_signal(True) == pytest.approx(0.7)
        assert syn.efficacy_stat.min == 1.0

    def test_analog_source_has_unit_efficacy(self, params):
        syn = InternalSynapse(analog(), analog(), 0.7, plasticity=params)
        syn.source.emit(0.5)
        assert syn.get_signal() == pytest.approx(0.35)

    def test_zero_time_constants(self):
        params = PlasticityParams(0.2, 0.0, 0.0)
        syn = InternalSynapse(spiking(), spiking(), 1.0, plasticity=params)
        fire(syn.source, 4.0)
        assert syn.get_signal() == pytest.approx(0.2)

    def test_reset_restores_resting_state(self, synapse):
        for leak in (1.0, 2.0, 3.0):
            fire(synapse.source, leak)
            synapse.get_signal(True)
        synapse.reset()
        assert synapse.facilitation == 0.5
        assert synapse.depression == 1.0
        assert synapse.efficacy_stat.is_empty

    def test_delay_only_zero(self, synapse):
        synapse.set_delay(0)
        with pytest.raises(InvalidConfiguration):
            synapse.set_delay(1)

    def test_rejects_input_neurons(self, params):
        inp = NeuronRef(NeuronRole.INPUT, SignalType.ANALOG)
        with pytest.raises(InvalidConfiguration):
            InternalSynapse(inp, spiking(), 1.0, plasticity=params)

    def test_post_synaptic_current(self):
        psc = PostSynapticCurrentParams(tau_decay=2.0, apply=True)
        syn = InternalSynapse(analog(), analog(), 1.0,
                              plasticity=PlasticityParams(apply_short_term_plasticity=False),
                              post_synaptic_current=psc)
        syn.source.emit(0.5)
        assert syn.get_signal() == pytest.approx(0.5 + np.exp(-0.5))
        assert syn.get_signal() == pytest.approx(0.5 + np.exp(-1.0))
        syn.reset()
        assert syn.get_signal() == pytest.approx(0.5 + np.exp(-0.5))

    def test_post_synaptic_current_fades_out(self):
        psc = PostSynapticCurrentParams(tau_decay=0.5, apply=True)
        syn = InternalSynapse(analog(), analog(), 1.0,
                              plasticity=PlasticityParams(apply_short_term_plasticity=False),
                              post_synaptic_current=psc)
        syn.source.emit(1.0)
        for _ in range(100):
            last = syn.get_signal()
        assert last == pytest.approx(1.0)
