from collections import deque
from typing import Any, List
import logging
import math

from .residual import ResidualNetwork

# Configure logging for the module
logger = logging.getLogger(__name__)

NO_ARC = -1


class PhaseLabels:
    """Scratch buffers filled by one BFS phase."""

    def __init__(self, num_vertices: int):
        self.visited: List[bool] = [False] * num_vertices
        self.excess: List[Any] = [0] * num_vertices
        self.entering: List[int] = [NO_ARC] * num_vertices
        self.sink_arcs: List[int] = []

    def reset(self) -> None:
        n = len(self.visited)
        self.visited[:] = [False] * n
        self.excess[:] = [0] * n
        self.entering[:] = [NO_ARC] * n
        self.sink_arcs = []


class BreadthFirstLabeler:
    """
    Label the residual network with shortest augmenting paths.

    Once the sink has been reached no new vertex is admitted to the queue,
    but the vertices already queued are still explored. Every residual arc
    they have into the sink is recorded, so one phase can yield several
    augmenting paths of the same length.
    """

    def __init__(self, network: ResidualNetwork):
        self.network = network
        self.labels = PhaseLabels(network.num_vertices)

    def label(self, source: int, sink: int) -> PhaseLabels:
        net = self.network
        labels = self.labels
        labels.reset()

        visited = labels.visited
        excess = labels.excess
        entering = labels.entering
        sink_arcs = labels.sink_arcs

        visited[source] = True
        excess[source] = math.inf
        queue = deque([source])
        seen_sink = False

        while queue:
            u = queue.popleft()
            for arc in net.outgoing[u]:
                residual = net.capacity[arc] - net.flow[arc]
                if residual <= net.epsilon:
                    continue

                v = net.head[arc]
                if v == sink:
                    visited[v] = True
                    sink_arcs.append(arc)
                    excess[v] += min(excess[u], residual)
                    seen_sink = True
                elif not visited[v]:
                    visited[v] = True
                    excess[v] = min(excess[u], residual)
                    entering[v] = arc
                    if not seen_sink:
                        queue.append(v)

        logger.debug(
            f"BFS phase reached sink: {visited[sink]}, "
            f"{len(sink_arcs)} arc(s) into sink, sink excess {excess[sink]}"
        )
        return labels
