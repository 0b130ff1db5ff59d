"""Shared state and contract of all synapses.

A synapse is an edge from one source neuron to one target neuron. Once per
simulation cycle, after the neurons have been updated, the reservoir asks
every synapse for the signal it delivers to its target:

    synapse.get_signal(collect_statistics)

That call advances the synapse's internal state (delay queue, efficacy
dynamics), so it must happen exactly once per cycle. Passing the cycle
number (``get_signal(..., cycle=t)``) turns on a cheap guard that raises
ProtocolMisuse on a second read within the same cycle.

Delay-capable synapses switch between two states:

    NO_DELAY  no queue, the signal read is delivered in the same cycle
    DELAYED   a queue of capacity delay + 1; the first ``delay`` reads
              after (re)allocation deliver 0
"""

import math
from abc import ABC, abstractmethod
from enum import Enum

from rcsynapse.errors import InvalidConfiguration, ProtocolMisuse, check_count
from rcsynapse.stats import BasicStat
from rcsynapse.synapse.conversion import WeightRule, signal_conversion
from rcsynapse.synapse.queue import DelayQueue


class DelayState(Enum):
    NO_DELAY = "no_delay"
    DELAYED = "delayed"


def decay(leak, tau):
    """exp(-leak / tau), with tau == 0 meaning instantaneous decay."""
    if tau <= 0:
        return 0.0
    return math.exp(-leak / tau)


class Synapse(ABC):
    """Base class of the four synapse kinds.

    Parameters
    ----------
    source : NeuronRef
        Signal emitter.
    target : NeuronRef
        Signal receiver.
    weight : float
        Nominal weight. The conversion rule decides its final sign.
    weight_rule : WeightRule or str
        Signal conversion strategy (see rcsynapse.synapse.conversion).
    """

    kind = "synapse"

    def __init__(self, source, target, weight, weight_rule=WeightRule.RANGE_MAPPING):
        self.source = source
        self.target = target
        conversion = signal_conversion(source, target, weight, weight_rule)
        self._weight = conversion.weight
        self._offset = conversion.offset
        self._divisor = conversion.divisor
        self._distance = source.placement.distance_to(target.placement)
        self._delay = 0
        self._queue = None
        self._efficacy_stat = BasicStat()
        self._last_cycle = None

    # -- read-only attributes ------------------------------------------------

    @property
    def weight(self):
        return self._weight

    @property
    def distance(self):
        return self._distance

    @property
    def delay(self):
        return self._delay

    @property
    def efficacy_stat(self):
        return self._efficacy_stat

    @property
    def delay_state(self):
        return DelayState.NO_DELAY if self._queue is None else DelayState.DELAYED

    @property
    def offset(self):
        return self._offset

    @property
    def divisor(self):
        return self._divisor

    # -- operations ----------------------------------------------------------

    def rescale(self, factor):
        """Multiply the weight by a non-negative factor."""
        if factor < 0:
            raise InvalidConfiguration(
                f"Invalid rescale factor {factor}. A negative factor would "
                "flip the weight sign."
            )
        self._weight *= factor

    def set_delay(self, delay):
        """Set the delay in cycles. Any in-flight signal is discarded."""
        delay = check_count("delay", delay)
        self._delay = delay
        self._queue = DelayQueue(delay + 1) if delay > 0 else None

    def reset(self, statistics=True):
        """Reinitialize the transient state, optionally the statistics too.

        Weight, distance and delay are kept.
        """
        if self._queue is not None:
            self._queue.reset()
        self._last_cycle = None
        self._reset_dynamics()
        if statistics:
            self._efficacy_stat.reset()

    def get_signal(self, collect_statistics=False, cycle=None):
        """Signal delivered to the target in the current cycle.

        Parameters
        ----------
        collect_statistics : bool
            Record the efficacy of a delivered non-zero signal.
        cycle : int, optional
            Current cycle number. When given, a second call within the
            same cycle raises ProtocolMisuse.
        """
        if cycle is not None:
            if cycle == self._last_cycle:
                raise ProtocolMisuse(
                    f"{type(self).__name__} read twice in cycle {cycle}."
                )
            self._last_cycle = cycle
        return self._compute_signal(collect_statistics)

    # -- helpers for subclasses ------------------------------------------------

    @abstractmethod
    def _compute_signal(self, collect_statistics):
        """One cycle of signal computation."""

    def _reset_dynamics(self):
        """Restore the efficacy model to its initial state."""

    def _transform(self, raw_signal):
        return ((raw_signal + self._offset) / self._divisor) * self._weight

    def _record(self, efficacy, collect_statistics):
        if collect_statistics:
            self._efficacy_stat.add_sample(efficacy)

    def _travel(self, source_signal, pre_synaptic_efficacy=None):
        """Push this cycle's signal into the queue, pop the one arriving now.

        ``pre_synaptic_efficacy`` is a callable evaluated only for a
        non-zero source signal. Returns the arriving Signal, or None while
        the queue is still filling up.
        """
        if source_signal == 0:
            self._queue.enqueue(0.0, 1.0)
        else:
            pre = 1.0 if pre_synaptic_efficacy is None else pre_synaptic_efficacy()
            self._queue.enqueue(self._transform(source_signal), pre)
        if not self._queue.full:
            return None
        return self._queue.dequeue()

    def __repr__(self):
        return (f"{type(self).__name__}(weight={self._weight:.4g}, "
                f"distance={self._distance:.4g}, delay={self._delay})")

