"""Cycle-stepped propagation loop.

The neuron update is not part of this package: the caller supplies it as
``drive(cycle, inputs)``, which receives the input accumulated for each
neuron in the previous cycle and writes the neurons' new outputs. The
engine then reads the synapses once, strictly after the update.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from rcsynapse.utils import get_logger

LOG = get_logger("simulation.engine")


@dataclass
class SimulationResult:
    """Delivered input per neuron and cycle.

    Attributes
    ----------
    inputs : np.ndarray
        Shape (n_neurons, n_cycles); inputs[i, t] is the sum of the signals
        delivered to neuron i in cycle t.
    n_cycles : int
        Number of simulated cycles.
    """
    inputs: np.ndarray
    n_cycles: int = 0

    @property
    def n_neurons(self):
        return self.inputs.shape[0]

    def total_input(self):
        """Input summed over all cycles, per neuron."""
        return self.inputs.sum(axis=1)

    def to_frame(self):
        """Long-format DataFrame with columns neuron, cycle, input."""
        neuron, cycle = np.indices(self.inputs.shape)
        return pd.DataFrame({
            "neuron": neuron.ravel(),
            "cycle": cycle.ravel(),
            "input": self.inputs.ravel(),
        })


def simulate(network, drive, n_cycles, collect_statistics=True):
    """Run ``n_cycles`` propagation cycles.

    Parameters
    ----------
    network : SynapticNetwork
        Synapses to read.
    drive : callable
        drive(cycle, inputs) -> None. Updates the neurons for this cycle;
        ``inputs`` is the delivery of the previous cycle (zeros at cycle 0).
    n_cycles : int
        Number of cycles.
    collect_statistics : bool
        Record efficacies.

    Returns
    -------
    SimulationResult
    """
    n = network.n_neurons
    trace = np.zeros((n, n_cycles), dtype=np.float64)
    inputs = np.zeros(n, dtype=np.float64)

    LOG.info("Starting propagation: %d neurons, %d synapses, %d cycles",
             n, network.n_synapses, n_cycles)

    for cycle in range(n_cycles):
        drive(cycle, inputs)
        inputs = network.deliver(cycle=cycle, collect_statistics=collect_statistics)
        trace[:, cycle] = inputs

    LOG.info("Propagation complete: total delivered input %.4g",
             float(trace.sum()))
    return SimulationResult(inputs=trace, n_cycles=n_cycles)


def replay(neurons, signals):
    """A drive function that replays recorded outputs.

    Parameters
    ----------
    neurons : list of NeuronRef
        Neurons to drive (typically input neurons).
    signals : array-like
        Shape (len(neurons), n_cycles). Column t is emitted at cycle t;
        cycles beyond the last column emit 0.

    Returns
    -------
    callable
        drive(cycle, inputs)
    """
    signals = np.atleast_2d(np.asarray(signals, dtype=np.float64))

    def drive(cycle, inputs):
        column = signals[:, cycle] if cycle < signals.shape[1] else np.zeros(len(neurons))
        for neuron, value in zip(neurons, column):
            neuron.emit(value)

    return drive
