"""The neuron side of the synapse contract.

Synapses never drive neurons; they only read them. A neuron exposes its
role, its signal type, its current output and the elapsed-time "leaks"
used by the decay formulas. Everything else about the neuron (activation,
membrane dynamics, readout) belongs to the reservoir and is out of reach
here.

NeuronRef is a plain mutable implementation of that contract. A reservoir
driver (or a test) writes its outputs once per cycle, after the neuron
update and before the synapses are read.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

import numpy as np

from rcsynapse.errors import InvalidConfiguration, UnsupportedConfigurationValue


class NeuronRole(Enum):
    """Role of a neuron within the reservoir."""
    INPUT = "input"
    EXCITATORY = "excitatory"
    INHIBITORY = "inhibitory"


class SignalType(Enum):
    """Kind of output signal a neuron emits."""
    SPIKE = "spike"
    ANALOG = "analog"


def parse_neuron_role(token):
    """Parse a case-insensitive neuron role token."""
    return _parse_enum(NeuronRole, token, "neuron role")


def parse_signal_type(token):
    """Parse a case-insensitive signal type token ("spike" or "analog")."""
    return _parse_enum(SignalType, token, "neuron signal type")


def _parse_enum(enum_cls, token, kind):
    if isinstance(token, enum_cls):
        return token
    code = str(token).strip().lower()
    for member in enum_cls:
        if member.value == code:
            return member
    raise UnsupportedConfigurationValue(kind, token,
                                        [m.value for m in enum_cls])


@dataclass(frozen=True)
class OutputRange:
    """Closed interval of values a neuron's output signal can take."""
    min: float = 0.0
    max: float = 1.0

    def __post_init__(self):
        if self.max < self.min:
            raise InvalidConfiguration(
                f"Invalid output range [{self.min}, {self.max}]: max < min."
            )

    @property
    def span(self):
        return self.max - self.min

    @property
    def mid(self):
        return self.min + self.span / 2.0


@dataclass(frozen=True)
class Placement:
    """Spatial coordinates of a neuron inside the reservoir."""
    coordinates: Tuple[float, ...] = (0.0, 0.0, 0.0)

    def distance_to(self, other):
        """Euclidean distance to another placement."""
        a = np.asarray(self.coordinates, dtype=np.float64)
        b = np.asarray(other.coordinates, dtype=np.float64)
        if a.shape != b.shape:
            raise InvalidConfiguration(
                f"Cannot measure distance between {len(a)}-D and "
                f"{len(b)}-D placements."
            )
        return float(np.linalg.norm(a - b))


@dataclass
class NeuronRef:
    """A neuron as seen by its synapses.

    Attributes
    ----------
    role : NeuronRole
        Input, excitatory or inhibitory.
    output_type : SignalType
        Spike or analog.
    output_range : OutputRange
        Range of the output signal (used by the conversion rule).
    placement : Placement
        Spatial position (used for synapse distance).
    output_signal : float
        Current output value, fixed for the whole propagation cycle.
    output_signal_leak : float
        Time elapsed since the last change of the output.
    spike_leak : float
        Time elapsed since the last spike.
    after_first_spike : bool
        True once the neuron has spiked at least once.
    """
    role: NeuronRole
    output_type: SignalType
    output_range: OutputRange = field(default_factory=OutputRange)
    placement: Placement = field(default_factory=Placement)
    output_signal: float = 0.0
    output_signal_leak: float = 0.0
    spike_leak: float = 0.0
    after_first_spike: bool = False

    @property
    def is_spiking(self):
        return self.output_type == SignalType.SPIKE

    @property
    def is_input(self):
        return self.role == NeuronRole.INPUT

    def emit(self, signal, leak=None):
        """Set this cycle's output and update the elapsed-time bookkeeping.

        A spiking neuron that emits a non-zero signal has just spiked: its
        spike leak restarts from 0 and it is flagged as having spiked.
        Otherwise both leaks advance by one cycle unless ``leak`` is given.
        """
        signal = float(signal)
        changed = signal != self.output_signal
        self.output_signal = signal
        if leak is not None:
            self.output_signal_leak = float(leak)
        elif changed:
            self.output_signal_leak = 0.0
        else:
            self.output_signal_leak += 1.0

        if self.is_spiking and signal != 0.0:
            self.spike_leak = 0.0
            self.after_first_spike = True
        else:
            self.spike_leak += 1.0
