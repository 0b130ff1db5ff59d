"""Internal synapse: short-term plasticity between two reservoir neurons.

Continuous-time Tsodyks-Markram style efficacy, driven by the time elapsed
since the source neuron's last spike (its spike leak):

    f <- f * exp(-leak/tau_f) + U * (1 - exp(-leak/tau_f))
    d <- d * (1 - f) * exp(-leak/tau_d) + (1 - exp(-leak/tau_d))
    efficacy = f * d

with f (facilitation) starting at the resting efficacy U and d
(depression) at 1. The state advances only on non-zero reads and only once
the source has spiked at least once. Non-spiking sources, or plasticity
switched off, give efficacy 1.

References:
    Tsodyks M, Markram H (1997). PNAS 94(2):719-723.
    Maass W, Natschlaeger T, Markram H (2002). Neural Comput 14:2531-2560.
"""

from rcsynapse.errors import InvalidConfiguration
from rcsynapse.synapse.base import Synapse, decay
from rcsynapse.synapse.conversion import WeightRule
from rcsynapse.synapse.params import PlasticityParams, PostSynapticCurrentParams

MIN_POST_SYNAPTIC_CURRENT = 1e-15


class InternalSynapse(Synapse):
    """Reservoir-to-reservoir synapse with short-term plasticity.

    Parameters
    ----------
    source, target : NeuronRef
        Reservoir neurons.
    weight : float
        Nominal weight.
    plasticity : PlasticityParams, optional
        Facilitation/depression constants. Default: PlasticityParams().
    post_synaptic_current : PostSynapticCurrentParams, optional
        Decaying current added to each delivered signal. Off by default.
    weight_rule : WeightRule or str
        Signal conversion strategy.
    """

    kind = "internal"

    def __init__(self, source, target, weight, plasticity=None,
                 post_synaptic_current=None,
                 weight_rule=WeightRule.RANGE_MAPPING):
        if source.is_input or target.is_input:
            raise InvalidConfiguration(
                "InternalSynapse connects two reservoir neurons; use "
                "InputSynapse for input neurons."
            )
        super().__init__(source, target, weight, weight_rule)
        self.plasticity = plasticity or PlasticityParams()
        self.post_synaptic_current = post_synaptic_current or PostSynapticCurrentParams()
        self._apply_plasticity = (self.plasticity.apply_short_term_plasticity
                                  and source.is_spiking)
        self._reset_dynamics()

    @property
    def facilitation(self):
        return self._facilitation

    @property
    def depression(self):
        return self._depression

    def set_delay(self, delay):
        """Internal synapses deliver immediately; only 0 is accepted."""
        if delay != 0:
            raise InvalidConfiguration(
                f"Invalid delay {delay}. Internal synapses do not delay signals."
            )

    def _reset_dynamics(self):
        self._facilitation = self.plasticity.resting_efficacy
        self._depression = 1.0
        self._t = 0
        self._current_stopped = False

    def _efficacy(self):
        if not self._apply_plasticity:
            return 1.0
        if self.source.after_first_spike:
            leak = self.source.spike_leak
            resting = self.plasticity.resting_efficacy
            x = decay(leak, self.plasticity.tau_facilitation)
            self._facilitation = self._facilitation * x + resting * (1.0 - x)
            y = decay(leak, self.plasticity.tau_depression)
            self._depression = self._depression * (1.0 - self._facilitation) * y + (1.0 - y)
        return self._facilitation * self._depression

    def _current(self):
        self._t += 1
        if not self.post_synaptic_current.apply or self._current_stopped:
            return 0.0
        current = decay(self._t, self.post_synaptic_current.tau_decay)
        if current < MIN_POST_SYNAPTIC_CURRENT:
            self._current_stopped = True
            return 0.0
        return current

    def _compute_signal(self, collect_statistics):
        source_signal = self.source.output_signal
        if source_signal == 0:
            return 0.0
        efficacy = self._efficacy()
        self._record(efficacy, collect_statistics)
        return source_signal * self._weight * efficacy + self._current()
