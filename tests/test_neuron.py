"""Tests for the neuron side of the synapse contract."""

import pytest

from rcsynapse.errors import InvalidConfiguration, UnsupportedConfigurationValue
from rcsynapse.neuron import (
    NeuronRef,
    NeuronRole,
    OutputRange,
    Placement,
    SignalType,
    parse_neuron_role,
    parse_signal_type,
)


class TestOutputRange:
    def test_span_and_mid(self):
        r = OutputRange(-1.0, 1.0)
        assert r.span == 2.0
        assert r.mid == 0.0

    def test_inverted_range_rejected(self):
        with pytest.raises(InvalidConfiguration):
            OutputRange(1.0, 0.0)


class TestPlacement:
    def test_distance(self):
        assert Placement((0, 0, 0)).distance_to(Placement((3, 4, 0))) == pytest.approx(5.0)

    def test_dimension_mismatch(self):
        with pytest.raises(InvalidConfiguration):
            Placement((0, 0)).distance_to(Placement((0, 0, 0)))


class TestNeuronRef:
    def test_flags(self):
        n = NeuronRef(NeuronRole.INPUT, SignalType.ANALOG)
        assert n.is_input
        assert not n.is_spiking

    def test_emit_tracks_output_leak(self):
        n = NeuronRef(NeuronRole.EXCITATORY, SignalType.ANALOG)
        n.emit(0.3)
        assert n.output_signal_leak == 0.0
        n.emit(0.3)
        n.emit(0.3)
        assert n.output_signal_leak == 2.0
        n.emit(0.1)
        assert n.output_signal_leak == 0.0

    def test_emit_tracks_spikes(self):
        n = NeuronRef(NeuronRole.EXCITATORY, SignalType.SPIKE)
        n.emit(0.0)
        assert not n.after_first_spike
        n.emit(1.0)
        assert n.after_first_spike
        assert n.spike_leak == 0.0
        n.emit(0.0)
        n.emit(0.0)
        assert n.spike_leak == 2.0

    def test_explicit_leak(self):
        n = NeuronRef(NeuronRole.EXCITATORY, SignalType.ANALOG)
        n.emit(0.5, leak=7)
        assert n.output_signal_leak == 7.0


class TestParsing:
    def test_role(self):
        assert parse_neuron_role("Excitatory") == NeuronRole.EXCITATORY

    def test_signal_type(self):
        assert parse_signal_type("SPIKE") == SignalType.SPIKE

    def test_unknown(self):
        with pytest.raises(UnsupportedConfigurationValue):
            parse_signal_type("burst")
