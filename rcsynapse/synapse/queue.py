"""Fixed-capacity delay queue.

A ring buffer of (weighted_signal, pre_synaptic_efficacy) records. A
synapse with delay d owns a queue of capacity d + 1 and, every cycle,
enqueues the value it reads and dequeues once the queue is full: the
value read at cycle t leaves the queue at cycle t + d.
"""

from collections import namedtuple

import numpy as np

from rcsynapse.errors import InvalidConfiguration, ProtocolMisuse

Signal = namedtuple("Signal", ["weighted_signal", "pre_synaptic_efficacy"])


class DelayQueue:
    """Circular FIFO of in-flight signals.

    Parameters
    ----------
    capacity : int
        Number of slots (>= 1).
    """

    def __init__(self, capacity):
        self._allocate(capacity)

    def _allocate(self, capacity):
        capacity = int(capacity)
        if capacity < 1:
            raise InvalidConfiguration(
                f"Invalid queue capacity {capacity}. Capacity must be GE to 1."
            )
        self._weighted = np.zeros(capacity, dtype=np.float64)
        self._efficacy = np.ones(capacity, dtype=np.float64)
        self._head = 0
        self._count = 0

    @property
    def capacity(self):
        return len(self._weighted)

    @property
    def count(self):
        return self._count

    @property
    def full(self):
        return self._count == self.capacity

    @property
    def empty(self):
        return self._count == 0

    def enqueue(self, weighted_signal, pre_synaptic_efficacy=1.0):
        if self.full:
            raise ProtocolMisuse(
                "Delay queue is full; the oldest signal must be dequeued "
                "before the next cycle's signal is enqueued."
            )
        tail = (self._head + self._count) % self.capacity
        self._weighted[tail] = weighted_signal
        self._efficacy[tail] = pre_synaptic_efficacy
        self._count += 1

    def dequeue(self):
        if self._count == 0:
            raise ProtocolMisuse("Cannot dequeue from an empty delay queue.")
        signal = Signal(float(self._weighted[self._head]),
                        float(self._efficacy[self._head]))
        self._head = (self._head + 1) % self.capacity
        self._count -= 1
        return signal

    def reset(self):
        """Drop all in-flight signals."""
        self._weighted[:] = 0.0
        self._efficacy[:] = 1.0
        self._head = 0
        self._count = 0

    def resize(self, capacity):
        """Change the capacity. In-flight signals are discarded."""
        self._allocate(capacity)

    def __len__(self):
        return self._count

    def __repr__(self):
        return f"DelayQueue(capacity={self.capacity}, count={self._count})"
