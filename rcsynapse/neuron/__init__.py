"""neuron — The read-only neuron interface consumed by synapses.

Roles, signal types, output ranges and placements, plus NeuronRef, a plain
mutable neuron record that drivers update once per cycle.
"""

from .neuron import (
    NeuronRole,
    SignalType,
    OutputRange,
    Placement,
    NeuronRef,
    parse_neuron_role,
    parse_signal_type,
)
