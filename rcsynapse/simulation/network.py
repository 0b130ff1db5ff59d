"""Wire neurons and synapses into a cycle-ready synaptic network.

A SynapticNetwork owns the synapses of a reservoir, grouped by target
neuron. Each cycle, once the neurons have written their outputs,
``deliver`` reads every synapse exactly once and sums what arrives at each
target.
"""

import numpy as np
import pandas as pd

from rcsynapse.config import SynapseConfig
from rcsynapse.errors import InvalidConfiguration
from rcsynapse.stats import BasicStat
from rcsynapse.synapse.construction import (
    assign_delays,
    build_synapse,
    input_synapse_admitted,
    make_rng,
)
from rcsynapse.utils import get_logger

LOG = get_logger("simulation.network")


class SynapticNetwork:
    """Synapses of a reservoir, indexed by target neuron.

    Parameters
    ----------
    neurons : list of NeuronRef
        All neurons; list position is the neuron index.
    synapses : list of Synapse
        Synapses whose source and target are in ``neurons``.
    check_cycles : bool
        Pass the cycle number to every read so a double read raises
        ProtocolMisuse.
    """

    def __init__(self, neurons, synapses, check_cycles=False):
        self.neurons = list(neurons)
        self.synapses = list(synapses)
        self.check_cycles = check_cycles
        index = {id(n): i for i, n in enumerate(self.neurons)}
        try:
            self._target_idx = np.array(
                [index[id(s.target)] for s in self.synapses], dtype=np.int64)
        except KeyError as e:
            raise InvalidConfiguration(
                "Synapse target is not part of the network's neurons."
            ) from e
        self._signals = np.zeros(len(self.synapses), dtype=np.float64)

    @property
    def n_neurons(self):
        return len(self.neurons)

    @property
    def n_synapses(self):
        return len(self.synapses)

    def synapses_to(self, target_index):
        """Synapses delivering to neuron ``target_index``."""
        return [s for s, t in zip(self.synapses, self._target_idx) if t == target_index]

    def deliver(self, cycle=None, collect_statistics=False):
        """Read every synapse once and sum the signals per target.

        Parameters
        ----------
        cycle : int, optional
            Current cycle number (required when check_cycles is on).
        collect_statistics : bool
            Record efficacies of delivered signals.

        Returns
        -------
        np.ndarray
            Accumulated input per neuron, shape (n_neurons,).
        """
        guard = cycle if self.check_cycles else None
        for i, synapse in enumerate(self.synapses):
            self._signals[i] = synapse.get_signal(collect_statistics, cycle=guard)
        inputs = np.zeros(self.n_neurons, dtype=np.float64)
        np.add.at(inputs, self._target_idx, self._signals)
        return inputs

    def reset(self, statistics=True):
        for synapse in self.synapses:
            synapse.reset(statistics)

    def summary(self):
        """Return a summary string."""
        kinds = pd.Series([s.kind for s in self.synapses], dtype=object).value_counts()
        delays = np.array([s.delay for s in self.synapses]) if self.synapses else np.array([0])
        weights = np.array([s.weight for s in self.synapses])
        lines = [
            f"SynapticNetwork: {self.n_neurons:,} neurons, {self.n_synapses:,} synapses",
            f"  kinds: {dict(kinds)}",
            f"  delay range: [{delays.min()}, {delays.max()}] cycles",
            f"  weight range: [{weights.min():.3f}, {weights.max():.3f}]" if len(weights) > 0 else "  weight range: (no synapses)",
        ]
        return "\n".join(lines)


def build_network(neurons, edges, config=None, rng=None):
    """Build a SynapticNetwork from an edge table.

    Parameters
    ----------
    neurons : list of NeuronRef
        All neurons; the edge table refers to them by list index.
    edges : pd.DataFrame
        Must have: pre, post, weight. Optional: kind ("static", "dynamic",
        "internal", "input"). Without a kind, edges from input neurons
        become input synapses and the others internal synapses.
    config : SynapseConfig, optional
        Defaults to SynapseConfig().
    rng : numpy.random.Generator or int, optional
        Randomness for delays and plasticity jitter.

    Returns
    -------
    SynapticNetwork
    """
    config = config or SynapseConfig()
    rng = make_rng(rng)
    n = len(neurons)

    valid = edges["pre"].between(0, n - 1) & edges["post"].between(0, n - 1)
    if not valid.all():
        LOG.warning("Dropped %d edges referring to unknown neurons",
                    int((~valid).sum()))
    edges = edges[valid]

    synapses = []
    dropped_scope = 0
    for row in edges.itertuples(index=False):
        source, target = neurons[int(row.pre)], neurons[int(row.post)]
        kind = getattr(row, "kind", None)
        if kind is None or (isinstance(kind, float) and np.isnan(kind)):
            kind = "input" if source.is_input else "internal"
        if source.is_input and not input_synapse_admitted(config, target):
            dropped_scope += 1
            continue
        synapses.append(build_synapse(
            kind, source, target, float(row.weight),
            weight_rule=config.weight_rule,
            plasticity=config.internal,
            dynamics=config.dynamic,
            post_synaptic_current=config.post_synaptic_current,
            jitter=config.jitter_plasticity,
            rng=rng,
        ))
    if dropped_scope:
        LOG.info("Skipped %d input edges outside the configured target scopes",
                 dropped_scope)

    # Distance range over every synapse, as seen by the delay assignment
    distance_stat = BasicStat([s.distance for s in synapses])
    from_input = [s for s in synapses if s.source.is_input]
    delayable = [s for s in synapses if not s.source.is_input and s.kind != "internal"]
    assign_delays(from_input, config.delay_method, config.max_input_delay,
                  rng=rng, distance_stat=distance_stat)
    assign_delays(delayable, config.delay_method, config.max_internal_delay,
                  rng=rng, distance_stat=distance_stat)

    network = SynapticNetwork(neurons, synapses, check_cycles=config.check_cycles)
    LOG.info("Built synaptic network: %d neurons, %d synapses",
             network.n_neurons, network.n_synapses)
    return network
