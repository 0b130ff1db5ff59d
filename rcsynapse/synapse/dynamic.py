"""Dynamic synapse: pre-synaptic utilization/recovery and post-synaptic decay.

Pre-synaptic efficacy (spiking sources only), with leak the source's
output leak:

    x = exp(-leak/tau_f)
    u = x + U * (1 - x)                     (utilization)
    y = exp(-leak/tau_r)
    a <- a * (1 - u) * y + (1 - y)          (available fraction)
    pre = u * a

Post-synaptic efficacy (spiking targets only): exp(-target leak / tau_decay).

With a delay, the pre-synaptic part is computed when the signal enters the
queue and the post-synaptic part when it leaves, from the target's leak at
delivery time.
"""

from rcsynapse.synapse.base import Synapse, decay
from rcsynapse.synapse.conversion import WeightRule
from rcsynapse.synapse.params import DynamicParams


class DynamicSynapse(Synapse):
    """Synapse with Tsodyks-Markram pre-synaptic and exponential post-synaptic efficacy.

    Parameters
    ----------
    source, target : NeuronRef
        Connected neurons (any role).
    weight : float
        Nominal weight.
    dynamics : DynamicParams, optional
        Time constants and resting efficacy. Default: DynamicParams().
    weight_rule : WeightRule or str
        Signal conversion strategy.
    """

    kind = "dynamic"

    def __init__(self, source, target, weight, dynamics=None,
                 weight_rule=WeightRule.RANGE_MAPPING):
        super().__init__(source, target, weight, weight_rule)
        self.dynamics = dynamics or DynamicParams()
        self._apply_pre = source.is_spiking
        self._apply_post = target.is_spiking
        self._reset_dynamics()

    @property
    def utilization(self):
        return self._utilization

    @property
    def available_fraction(self):
        return self._available_fraction

    def _reset_dynamics(self):
        self._utilization = self.dynamics.resting_efficacy
        self._available_fraction = 1.0

    def pre_synaptic_efficacy(self):
        """Advance and return the pre-synaptic efficacy."""
        if not self._apply_pre:
            return 1.0
        leak = self.source.output_signal_leak
        x = decay(leak, self.dynamics.tau_facilitation)
        self._utilization = x + self.dynamics.resting_efficacy * (1.0 - x)
        y = decay(leak, self.dynamics.tau_recovery)
        self._available_fraction = (self._available_fraction
                                    * (1.0 - self._utilization) * y + (1.0 - y))
        return self._utilization * self._available_fraction

    def post_synaptic_efficacy(self):
        """Post-synaptic efficacy from the target's current leak."""
        if not self._apply_post:
            return 1.0
        return decay(self.target.output_signal_leak, self.dynamics.tau_decay)

    def _compute_signal(self, collect_statistics):
        source_signal = self.source.output_signal
        if self._queue is None:
            if source_signal == 0:
                return 0.0
            efficacy = self.pre_synaptic_efficacy() * self.post_synaptic_efficacy()
            self._record(efficacy, collect_statistics)
            return source_signal * self._weight * efficacy

        signal = self._travel(source_signal, self.pre_synaptic_efficacy)
        if signal is None or signal.weighted_signal == 0:
            return 0.0
        efficacy = signal.pre_synaptic_efficacy * self.post_synaptic_efficacy()
        self._record(efficacy, collect_statistics)
        return signal.weighted_signal * efficacy
