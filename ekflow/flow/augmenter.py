from typing import Any, List, Optional
import logging

from .labeler import NO_ARC, PhaseLabels
from .residual import ResidualNetwork

# Configure logging for the module
logger = logging.getLogger(__name__)


class PathAugmenter:
    """
    Push flow along the augmenting paths recorded by a BFS phase.

    Vertices walked during one augmentation are marked with the current tag.
    A path that runs into a marked vertex shares a prefix with a path handled
    earlier in the same phase and is dropped whole; whatever it could have
    carried is picked up by a later phase.
    """

    def __init__(self, network: ResidualNetwork):
        self.network = network
        self._marks: List[int] = [0] * network.num_vertices
        self._tag = 0
        self.pushed_paths = 0
        self.dropped_paths = 0

    def augment(self, labels: PhaseLabels, source: int, sink: int) -> Any:
        """Augment every recorded path into the sink and return the flow gained."""
        net = self.network
        self._tag += 1
        self.pushed_paths = 0
        self.dropped_paths = 0
        flow_increase = 0

        for last_arc in labels.sink_arcs:
            start = net.tail[last_arc]
            delta = min(labels.excess[start], net.residual(last_arc))

            path = self._trace_back(labels, source, start)
            if path is None:
                self.dropped_paths += 1
                continue

            for arc in path:
                net.push(arc, delta)
            net.push(last_arc, delta)
            flow_increase += delta
            self.pushed_paths += 1

        logger.debug(
            f"Augmented {self.pushed_paths} path(s), dropped {self.dropped_paths}, "
            f"flow increase {flow_increase} into vertex {sink}"
        )
        return flow_increase

    def _trace_back(self, labels: PhaseLabels, source: int, start: int) -> Optional[List[int]]:
        """Collect the predecessor arcs from start back to the source, or None on conflict."""
        net = self.network
        marks = self._marks
        tag = self._tag

        path = []
        node = start
        while node != source:
            if marks[node] == tag:
                return None
            marks[node] = tag

            arc = labels.entering[node]
            if arc == NO_ARC:
                raise AssertionError(f"vertex {node} was labelled without an entering arc")
            path.append(arc)
            node = net.tail[arc]

        return path
