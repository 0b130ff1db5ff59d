"""Static synapse: constant efficacy, optional fixed delay."""

from rcsynapse.synapse.base import Synapse


class StaticSynapse(Synapse):
    """Delivers the converted, weighted source signal with efficacy 1.

    A zero source signal is delivered as 0 without touching the
    statistics. Each delivered non-zero sample records efficacy 1.0 when
    statistics are collected.
    """

    kind = "static"

    def _compute_signal(self, collect_statistics):
        source_signal = self.source.output_signal
        if self._queue is None:
            if source_signal == 0:
                return 0.0
            value = self._transform(source_signal)
            if value == 0:
                return 0.0
            self._record(1.0, collect_statistics)
            return value

        signal = self._travel(source_signal)
        if signal is None or signal.weighted_signal == 0:
            return 0.0
        self._record(1.0, collect_statistics)
        return signal.weighted_signal
