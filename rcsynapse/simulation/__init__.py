"""simulation — Cycle-stepped signal propagation through a synaptic network.

The neuron update stays outside: the engine calls a user-supplied drive
function, then reads every synapse exactly once per cycle.
"""

from .network import (
    SynapticNetwork,
    build_network,
)
from .engine import (
    SimulationResult,
    simulate,
    replay,
)
from .analysis import (
    efficacy_summary,
    efficacy_by_kind,
)
