"""
Evaluation order for logic units.

Logic units that only talk through registers are independent within a
cycle: every one of them reads committed values and writes staged ones.
Wires add same-cycle dependencies (driver before readers), so the order
is a topological sort of the wire graph. A strongly connected component
with more than one unit, or a unit reading a wire it drives itself, is
a combinational loop.
"""

from __future__ import annotations
import heapq
import logging
from typing import Sequence

import numpy as np
from scipy import sparse
from scipy.sparse.csgraph import connected_components

from rtlsim.core.errors import CombinationalLoopError, WiringError
from rtlsim.core.logic import Logic
from rtlsim.core.wire import Wire

logger = logging.getLogger(__name__)


def wire_drivers(logics: Sequence[Logic]) -> dict[Wire, Logic]:
    """Map each wire to its single driving unit."""
    drivers: dict[Wire, Logic] = {}
    for unit in logics:
        for w in unit.wires_out:
            if w in drivers and drivers[w] is not unit:
                raise WiringError(
                    f"wire {w.name} has more than one driver: "
                    f"{drivers[w].name}, {unit.name}"
                )
            drivers[w] = unit
    return drivers


def dependency_matrix(logics: Sequence[Logic]) -> sparse.csr_matrix:
    """
    Adjacency matrix of the logic graph.

    Entry [i, j] is 1 when unit j reads a wire driven by unit i,
    i.e. i must be evaluated before j.
    """
    n = len(logics)
    index = {id(unit): i for i, unit in enumerate(logics)}
    drivers = wire_drivers(logics)

    rows, cols = [], []
    for j, unit in enumerate(logics):
        for w in unit.wires_in:
            driver = drivers.get(w)
            if driver is not None:
                rows.append(index[id(driver)])
                cols.append(j)

    data = np.ones(len(rows), dtype=np.int8)
    adj = sparse.csr_matrix((data, (rows, cols)), shape=(n, n))
    # several wires between the same pair still count as one edge
    adj.sum_duplicates()
    adj.data[:] = 1
    return adj


def find_loops(logics: Sequence[Logic], adj: sparse.csr_matrix) -> list[list[Logic]]:
    """Groups of units that form combinational loops."""
    n = len(logics)
    if n == 0:
        return []
    _, labels = connected_components(adj, directed=True, connection="strong")

    loops = []
    for label in np.unique(labels):
        members = np.flatnonzero(labels == label)
        if len(members) > 1 or adj[members[0], members[0]]:
            loops.append([logics[i] for i in members])
    return loops


def compute_order(logics: Sequence[Logic]) -> list[Logic]:
    """
    Topological evaluation order.

    Ties are broken by position in `logics`, so designs without wires
    evaluate in registration order and the order never varies between
    runs.

    Raises:
        CombinationalLoopError: if the wire graph has a cycle
        WiringError: if a wire has more than one driver
    """
    logics = list(logics)
    adj = dependency_matrix(logics)

    loops = find_loops(logics, adj)
    if loops:
        names = [unit.name for unit in loops[0]]
        logger.debug("combinational loop detected: %s", names)
        raise CombinationalLoopError(names + names[:1])

    n = len(logics)
    indegree = np.asarray(adj.sum(axis=0)).ravel().astype(np.int64)
    ready = [i for i in range(n) if indegree[i] == 0]
    heapq.heapify(ready)

    order = []
    while ready:
        i = heapq.heappop(ready)
        order.append(logics[i])
        for j in adj.indices[adj.indptr[i]:adj.indptr[i + 1]]:
            indegree[j] -= 1
            if indegree[j] == 0:
                heapq.heappush(ready, int(j))

    logger.debug("evaluation order: %s", [unit.name for unit in order])
    return order
