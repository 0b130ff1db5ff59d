"""Synapse construction policy.

Decides, at reservoir wiring time, which synapse kind connects two
neurons, which source/target role combinations a configuration applies
to, and how many cycles each synapse delays its signal. All randomness is
drawn here, once, from a caller-supplied seedable generator; nothing
random happens during simulation.
"""

from enum import Enum

import numpy as np

from rcsynapse.errors import UnsupportedConfigurationValue, check_count
from rcsynapse.neuron import NeuronRole
from rcsynapse.stats import BasicStat
from rcsynapse.synapse.conversion import WeightRule
from rcsynapse.synapse.dynamic import DynamicSynapse
from rcsynapse.synapse.input import InputSynapse
from rcsynapse.synapse.internal import InternalSynapse
from rcsynapse.synapse.params import default_internal_params, jitter_params
from rcsynapse.synapse.static import StaticSynapse
from rcsynapse.utils import get_logger

LOG = get_logger("synapse.construction")


class SynapticDelayMethod(Enum):
    """How a synapse's delay is chosen."""
    RANDOM = "random"
    DISTANCE = "distance"


class SynapticTargetScope(Enum):
    """Which neurons a synapse configuration applies to."""
    ALL = "all"
    EXCITATORY = "excitatory"
    INHIBITORY = "inhibitory"

    def admits(self, role):
        """True if a neuron with this role is within the scope."""
        if self == SynapticTargetScope.ALL:
            return True
        if self == SynapticTargetScope.EXCITATORY:
            return role == NeuronRole.EXCITATORY
        return role == NeuronRole.INHIBITORY


def _parse(enum_cls, token, kind):
    if isinstance(token, enum_cls):
        return token
    code = str(token).strip().lower()
    for member in enum_cls:
        if member.value == code:
            return member
    raise UnsupportedConfigurationValue(kind, token, [m.value for m in enum_cls])


def parse_delay_method(token):
    """Parse "random" or "distance" (case-insensitive)."""
    return _parse(SynapticDelayMethod, token, "synaptic delay method")


def parse_target_scope(token):
    """Parse "all", "excitatory" or "inhibitory" (case-insensitive)."""
    return _parse(SynapticTargetScope, token, "synaptic target scope")


def make_rng(rng=None):
    """Return a numpy Generator from a Generator, an int seed or None."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


# ---------------------------------------------------------------------------
# Delays
# ---------------------------------------------------------------------------

def distance_delay(distance, distance_stat, max_delay):
    """Delay proportional to the distance's position within the observed range.

    Parameters
    ----------
    distance : float
        The synapse's distance.
    distance_stat : BasicStat
        Statistics of all distances being assigned (for min and span).
    max_delay : int
        Delay given to the longest synapse.

    Returns
    -------
    int
        round(max_delay * (distance - min) / span), or 0 for a zero span.
    """
    if distance_stat.span == 0:
        return 0
    relative = (distance - distance_stat.min) / distance_stat.span
    return int(round(max_delay * relative))


def assign_delays(synapses, method=SynapticDelayMethod.RANDOM, max_delay=0,
                  rng=None, distance_stat=None):
    """Set the delay of each synapse.

    Parameters
    ----------
    synapses : list of Synapse
        Delay-capable synapses (static, dynamic or input).
    method : SynapticDelayMethod or str
        RANDOM draws uniformly from [0, max_delay]; DISTANCE scales each
        synapse's distance into [0, max_delay].
    max_delay : int
        Largest delay (cycles), >= 0. With 0 all synapses get no delay.
    rng : numpy.random.Generator or int, optional
        Source of randomness for the RANDOM method.
    distance_stat : BasicStat, optional
        Distance range to scale against. Defaults to the distances of
        ``synapses`` themselves.

    Returns
    -------
    np.ndarray
        The assigned delays, in the order of ``synapses``.
    """
    method = parse_delay_method(method)
    max_delay = check_count("max_delay", max_delay)
    synapses = list(synapses)

    if max_delay == 0:
        delays = np.zeros(len(synapses), dtype=np.int64)
    elif method == SynapticDelayMethod.DISTANCE:
        if distance_stat is None:
            distance_stat = BasicStat([s.distance for s in synapses])
        delays = np.array([distance_delay(s.distance, distance_stat, max_delay)
                           for s in synapses], dtype=np.int64)
    else:
        delays = make_rng(rng).integers(0, max_delay + 1, size=len(synapses))

    for synapse, delay in zip(synapses, delays):
        synapse.set_delay(int(delay))

    if len(synapses) > 0:
        LOG.info("Assigned %s delays to %d synapses: mean %.2f, max %d cycles",
                 method.value, len(synapses), float(np.mean(delays)),
                 int(np.max(delays)))
    return delays


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

SYNAPSE_KINDS = {
    "static": StaticSynapse,
    "dynamic": DynamicSynapse,
    "internal": InternalSynapse,
    "input": InputSynapse,
}


def build_synapse(kind, source, target, weight,
                  weight_rule=WeightRule.RANGE_MAPPING,
                  plasticity=None, dynamics=None, post_synaptic_current=None,
                  jitter=False, rng=None):
    """Create a synapse of the given kind.

    Parameters
    ----------
    kind : str
        One of "static", "dynamic", "internal", "input".
    source, target : NeuronRef
        Connected neurons.
    weight : float
        Nominal weight.
    weight_rule : WeightRule or str
        Signal conversion strategy.
    plasticity : PlasticityParams, optional
        For "internal". Defaults to the role/type specific defaults.
    dynamics : DynamicParams, optional
        For "dynamic".
    post_synaptic_current : PostSynapticCurrentParams, optional
        For "internal".
    jitter : bool
        For "internal": draw per-synapse plasticity constants around the
        configured ones (requires ``rng``).
    rng : numpy.random.Generator or int, optional

    Returns
    -------
    Synapse
    """
    code = str(kind).strip().lower()
    if code not in SYNAPSE_KINDS:
        raise UnsupportedConfigurationValue("synapse kind", kind, SYNAPSE_KINDS)

    if code == "internal":
        if plasticity is None:
            plasticity = default_internal_params(source, target)
        if jitter:
            plasticity = jitter_params(plasticity, make_rng(rng))
        return InternalSynapse(source, target, weight,
                               plasticity=plasticity,
                               post_synaptic_current=post_synaptic_current,
                               weight_rule=weight_rule)
    if code == "dynamic":
        return DynamicSynapse(source, target, weight, dynamics=dynamics,
                              weight_rule=weight_rule)
    return SYNAPSE_KINDS[code](source, target, weight, weight_rule=weight_rule)


def input_synapse_admitted(config, target):
    """True if the input scopes of ``config`` admit ``target``.

    Spiking and analog targets have separate scopes.
    """
    scope = (config.spiking_target_scope if target.is_spiking
             else config.analog_target_scope)
    return scope.admits(target.role)
