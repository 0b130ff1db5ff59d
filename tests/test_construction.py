"""Tests for the synapse construction policy: delays, scopes, factory."""

import numpy as np
import pytest

from rcsynapse.errors import InvalidConfiguration, UnsupportedConfigurationValue
from rcsynapse.neuron import NeuronRef, NeuronRole, Placement, SignalType
from rcsynapse.stats import BasicStat
from rcsynapse.synapse import (
    DelayState,
    DynamicSynapse,
    InputSynapse,
    InternalSynapse,
    PlasticityParams,
    StaticSynapse,
    SynapticDelayMethod,
    SynapticTargetScope,
    assign_delays,
    build_synapse,
    default_internal_params,
    jitter_params,
    parse_delay_method,
    parse_target_scope,
)
from rcsynapse.synapse.construction import distance_delay

EXC = NeuronRole.EXCITATORY
INH = NeuronRole.INHIBITORY


def spiking(role=EXC, x=0.0):
    return NeuronRef(role, SignalType.SPIKE, placement=Placement((x, 0.0, 0.0)))


@pytest.fixture
def fan_out():
    """Three static synapses at distances 1, 2 and 3."""
    src = spiking()
    return [StaticSynapse(src, spiking(x=float(x)), 0.5) for x in (1, 2, 3)]


# ---------------------------------------------------------------------------
# Token parsing
# ---------------------------------------------------------------------------

class TestParsing:
    def test_delay_method(self):
        assert parse_delay_method("Random") == SynapticDelayMethod.RANDOM
        assert parse_delay_method("DISTANCE") == SynapticDelayMethod.DISTANCE

    def test_target_scope(self):
        assert parse_target_scope("all") == SynapticTargetScope.ALL
        assert parse_target_scope("Inhibitory") == SynapticTargetScope.INHIBITORY

    def test_unknown_tokens(self):
        with pytest.raises(UnsupportedConfigurationValue) as info:
            parse_delay_method("nearest")
        assert info.value.kind == "synaptic delay method"
        assert "random" in str(info.value)
        with pytest.raises(UnsupportedConfigurationValue):
            parse_target_scope("input")

    def test_scope_admits(self):
        assert SynapticTargetScope.ALL.admits(INH)
        assert SynapticTargetScope.EXCITATORY.admits(EXC)
        assert not SynapticTargetScope.EXCITATORY.admits(INH)
        assert SynapticTargetScope.INHIBITORY.admits(INH)
        assert not SynapticTargetScope.INHIBITORY.admits(EXC)


# ---------------------------------------------------------------------------
# Delay assignment
# ---------------------------------------------------------------------------

class TestAssignDelays:
    def test_random_is_reproducible(self):
        def build():
            src = spiking()
            return [StaticSynapse(src, spiking(x=float(i)), 0.5) for i in range(50)]
        a = assign_delays(build(), "random", 3, rng=42)
        b = assign_delays(build(), "random", 3, rng=42)
        assert np.array_equal(a, b)

    def test_random_within_bounds(self):
        src = spiking()
        synapses = [StaticSynapse(src, spiking(), 0.5) for _ in range(200)]
        delays = assign_delays(synapses, SynapticDelayMethod.RANDOM, 4,
                               rng=np.random.default_rng(1))
        assert delays.min() >= 0
        assert delays.max() <= 4
        assert [s.delay for s in synapses] == list(delays)

    def test_distance_scaling(self, fan_out):
        delays = assign_delays(fan_out, "distance", 4)
        assert list(delays) == [0, 2, 4]
        assert fan_out[0].delay_state == DelayState.NO_DELAY
        assert fan_out[2].delay_state == DelayState.DELAYED

    def test_distance_against_external_range(self, fan_out):
        stat = BasicStat([0.0, 3.0])
        delays = assign_delays(fan_out, "distance", 3, distance_stat=stat)
        assert list(delays) == [1, 2, 3]

    def test_zero_span_gives_no_delay(self):
        assert distance_delay(2.0, BasicStat([2.0, 2.0]), 5) == 0

    def test_zero_max_delay(self, fan_out):
        delays = assign_delays(fan_out, "random", 0, rng=0)
        assert list(delays) == [0, 0, 0]
        assert all(s.delay_state == DelayState.NO_DELAY for s in fan_out)

    @pytest.mark.parametrize("max_delay", [-1, 1.5, float("nan"), float("inf")])
    def test_invalid_max_delay(self, fan_out, max_delay):
        with pytest.raises(InvalidConfiguration):
            assign_delays(fan_out, "random", max_delay)


# ---------------------------------------------------------------------------
# Factory and defaults
# ---------------------------------------------------------------------------

class TestBuildSynapse:
    def test_kinds(self):
        inp = NeuronRef(NeuronRole.INPUT, SignalType.ANALOG)
        assert isinstance(build_synapse("static", spiking(), spiking(), 0.5), StaticSynapse)
        assert isinstance(build_synapse("Dynamic", spiking(), spiking(), 0.5), DynamicSynapse)
        assert isinstance(build_synapse("input", inp, spiking(), 0.5), InputSynapse)
        assert isinstance(build_synapse("internal", spiking(), spiking(), 0.5), InternalSynapse)

    def test_unknown_kind(self):
        with pytest.raises(UnsupportedConfigurationValue):
            build_synapse("gap_junction", spiking(), spiking(), 0.5)

    def test_internal_defaults_by_role(self):
        syn = build_synapse("internal", spiking(EXC), spiking(INH), 0.5)
        assert syn.plasticity.resting_efficacy == pytest.approx(0.05)
        assert syn.plasticity.tau_facilitation == pytest.approx(1200.0)

    def test_internal_analog_target_has_no_plasticity(self):
        target = NeuronRef(EXC, SignalType.ANALOG)
        syn = build_synapse("internal", spiking(), target, 0.5)
        assert not syn.plasticity.apply_short_term_plasticity

    def test_explicit_plasticity_wins(self):
        params = PlasticityParams(0.2, 10.0, 10.0)
        syn = build_synapse("internal", spiking(), spiking(), 0.5, plasticity=params)
        assert syn.plasticity == params

    def test_jitter(self):
        syn = build_synapse("internal", spiking(), spiking(), 0.5,
                            jitter=True, rng=np.random.default_rng(3))
        assert syn.plasticity != default_internal_params(spiking(), spiking())


class TestParams:
    def test_default_database(self):
        p = default_internal_params(spiking(INH), spiking(EXC))
        assert (p.resting_efficacy, p.tau_depression, p.tau_facilitation) == (0.25, 700.0, 20.0)

    def test_no_default_for_input_source(self):
        inp = NeuronRef(NeuronRole.INPUT, SignalType.ANALOG)
        with pytest.raises(KeyError):
            default_internal_params(inp, spiking())

    def test_jitter_stays_within_bounds(self):
        base = PlasticityParams(0.5, 1100.0, 50.0)
        rng = np.random.default_rng(0)
        for _ in range(50):
            p = jitter_params(base, rng)
            assert 0.375 <= p.resting_efficacy <= 0.625
            assert 825.0 <= p.tau_depression <= 1375.0
            assert 37.5 <= p.tau_facilitation <= 62.5

    def test_jitter_is_reproducible(self):
        base = PlasticityParams(0.5, 1100.0, 50.0)
        a = jitter_params(base, np.random.default_rng(9))
        b = jitter_params(base, np.random.default_rng(9))
        assert a == b

    def test_jitter_skips_disabled_plasticity(self):
        base = PlasticityParams(0.5, 1100.0, 50.0, apply_short_term_plasticity=False)
        assert jitter_params(base, np.random.default_rng(0)) is base
