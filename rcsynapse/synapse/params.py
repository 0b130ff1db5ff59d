"""Dynamics parameters of plastic synapses.

Each record is a frozen dataclass validated on construction, so an
out-of-range resting efficacy or a negative time constant fails before any
synapse exists. Time constants are expressed in simulation cycles, the
same unit as the neuron leaks they divide.

The default database reproduces the classical Tsodyks-Markram fits for
spiking targets, keyed by source/target role (E = excitatory,
I = inhibitory):

    E->E  depressing    U=0.50  tau_d=1100  tau_f=50
    E->I  facilitating  U=0.05  tau_d=125   tau_f=1200
    I->E  depressing    U=0.25  tau_d=700   tau_f=20
    I->I  depressing    U=0.32  tau_d=144   tau_f=60

Synapses targeting analog neurons get no short-term plasticity.

References:
    Markram H, Wang Y, Tsodyks M (1998). PNAS 95(9):5323-5328.
    Gupta A, Wang Y, Markram H (2000). Science 287(5451):273-278.
"""

from dataclasses import dataclass, replace

import numpy as np

from rcsynapse.errors import check_range
from rcsynapse.neuron import NeuronRole, SignalType


def _check_common(resting_efficacy, **taus):
    check_range("resting_efficacy", resting_efficacy, 0.0, 1.0)
    for name, value in taus.items():
        check_range(name, value, 0.0)


@dataclass(frozen=True)
class PlasticityParams:
    """Short-term plasticity of an internal (reservoir-to-reservoir) synapse.

    resting_efficacy: baseline release probability, in [0, 1]
    tau_depression: recovery from depression (cycles), >= 0
    tau_facilitation: facilitation decay (cycles), >= 0
    apply_short_term_plasticity: False pins the efficacy to 1
    """
    resting_efficacy: float = 0.5
    tau_depression: float = 1100.0
    tau_facilitation: float = 50.0
    apply_short_term_plasticity: bool = True

    def __post_init__(self):
        _check_common(self.resting_efficacy,
                      tau_depression=self.tau_depression,
                      tau_facilitation=self.tau_facilitation)

    def to_dict(self):
        return {
            "resting_efficacy": self.resting_efficacy,
            "tau_depression": self.tau_depression,
            "tau_facilitation": self.tau_facilitation,
            "apply_short_term_plasticity": self.apply_short_term_plasticity,
        }


@dataclass(frozen=True)
class DynamicParams:
    """Pre- and post-synaptic dynamics of a dynamic synapse.

    resting_efficacy: baseline utilization, in [0, 1]
    tau_facilitation: utilization decay (cycles), >= 0
    tau_recovery: recovery of the available fraction (cycles), >= 0
    tau_decay: post-synaptic efficacy decay (cycles), >= 0
    """
    resting_efficacy: float = 0.5
    tau_facilitation: float = 50.0
    tau_recovery: float = 1100.0
    tau_decay: float = 20.0

    def __post_init__(self):
        _check_common(self.resting_efficacy,
                      tau_facilitation=self.tau_facilitation,
                      tau_recovery=self.tau_recovery,
                      tau_decay=self.tau_decay)

    def to_dict(self):
        return {
            "resting_efficacy": self.resting_efficacy,
            "tau_facilitation": self.tau_facilitation,
            "tau_recovery": self.tau_recovery,
            "tau_decay": self.tau_decay,
        }


@dataclass(frozen=True)
class PostSynapticCurrentParams:
    """Optional decaying current injected by an internal synapse."""
    tau_decay: float = 10.0
    apply: bool = False

    def __post_init__(self):
        check_range("tau_post_synaptic_current_decay", self.tau_decay, 0.0)

    def to_dict(self):
        return {"tau_decay": self.tau_decay, "apply": self.apply}


# ---------------------------------------------------------------------------
# Default database
# ---------------------------------------------------------------------------

EXC = NeuronRole.EXCITATORY
INH = NeuronRole.INHIBITORY

SPIKING_TARGET_DEFAULTS = {
    (EXC, EXC): PlasticityParams(0.5, 1100.0, 50.0),
    (EXC, INH): PlasticityParams(0.05, 125.0, 1200.0),
    (INH, EXC): PlasticityParams(0.25, 700.0, 20.0),
    (INH, INH): PlasticityParams(0.32, 144.0, 60.0),
}

NO_PLASTICITY = PlasticityParams(0.0, 0.0, 0.0, apply_short_term_plasticity=False)


def default_internal_params(source, target):
    """Default PlasticityParams for a reservoir synapse from source to target.

    Parameters
    ----------
    source, target : NeuronRef
        Reservoir neurons (input neurons are not valid sources).

    Returns
    -------
    PlasticityParams
    """
    if target.output_type == SignalType.ANALOG:
        return NO_PLASTICITY
    key = (source.role, target.role)
    if key not in SPIKING_TARGET_DEFAULTS:
        raise KeyError(
            f"No default plasticity for {source.role.value} -> "
            f"{target.role.value}. Available: "
            f"{[(s.value, t.value) for s, t in SPIKING_TARGET_DEFAULTS]}"
        )
    return SPIKING_TARGET_DEFAULTS[key]


# ---------------------------------------------------------------------------
# Per-synapse variability
# ---------------------------------------------------------------------------

JITTER_COEFF = 0.25


def filtered_gaussian(rng, mean, sigma, low, high, max_attempts=1000):
    """Draw from N(mean, sigma) until the sample lands in [low, high]."""
    if sigma <= 0 or high <= low:
        return float(mean)
    for _ in range(max_attempts):
        value = rng.normal(mean, sigma)
        if low <= value <= high:
            return float(value)
    return float(np.clip(mean, low, high))


def jitter_params(params, rng):
    """Draw per-synapse plasticity constants around the configured values.

    Each constant c is replaced by a gaussian sample with sigma sqrt(c/2),
    restricted to [c * (1 - 0.25), c * (1 + 0.25)]. Parameters with
    plasticity disabled are returned unchanged. The resting efficacy stays
    clipped to [0, 1].

    Parameters
    ----------
    params : PlasticityParams
    rng : numpy.random.Generator

    Returns
    -------
    PlasticityParams
    """
    if not params.apply_short_term_plasticity:
        return params

    def draw(value):
        return filtered_gaussian(rng, value, np.sqrt(value / 2.0),
                                 value * (1.0 - JITTER_COEFF),
                                 value * (1.0 + JITTER_COEFF))

    return replace(
        params,
        resting_efficacy=min(1.0, draw(params.resting_efficacy)),
        tau_depression=draw(params.tau_depression),
        tau_facilitation=draw(params.tau_facilitation),
    )
