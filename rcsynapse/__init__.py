"""rcsynapse — Synapse models for spiking/analog reservoir computing.

Heterogeneous reservoir neurons exchange signals through synapses that
convert signal ranges, delay delivery by whole simulation cycles, and
modulate efficacy with short-term plasticity.

Subpackages:
    neuron      Read-only neuron interface (roles, signal types, placement)
    synapse     Conversion rule, delay queue, synapse kinds, construction
    simulation  Network wiring, cycle loop and efficacy summaries
    stats       Running statistics
    utils       Print-based logging
"""

__version__ = "0.1.0"
