"""
Dependency resolver: orders tables so every referenced table precedes the
tables that reference it (Kahn's algorithm with an alphabetical tie-break).
"""
import heapq
import logging
from typing import Mapping, Optional, Sequence

from dbschema.core.exceptions import CircularDependencyError
from dbschema.models.schema import ForeignKey

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Topological sort over foreign-key edges between a fixed set of tables."""

    def sort_by_dependency(self, foreign_keys: Mapping[str, Optional[Sequence[ForeignKey]]]) -> list[str]:
        """
        Args:
            foreign_keys: table name -> its foreign keys (None / empty when it has none).
                The keys of the mapping are the full set of tables to order.

        Returns:
            Table names, dependencies first. Ties are broken alphabetically so
            repeated runs over the same edges give identical output.

        Raises:
            CircularDependencyError: foreign keys among the tables form a cycle.
        """
        graph = self._build_graph(foreign_keys)

        in_degree = {table: 0 for table in graph}
        for dependents in graph.values():
            for dependent in dependents:
                in_degree[dependent] += 1

        ready = [table for table, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)
        ordered: list[str] = []
        while ready:
            current = heapq.heappop(ready)
            ordered.append(current)
            for dependent in sorted(graph[current]):
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    heapq.heappush(ready, dependent)

        if len(ordered) != len(graph):
            done = set(ordered)
            remaining = sorted(t for t in graph if t not in done)
            logger.error("Foreign-key cycle among tables: %s", ", ".join(remaining))
            raise CircularDependencyError(remaining)
        return ordered

    @staticmethod
    def _build_graph(foreign_keys: Mapping[str, Optional[Sequence[ForeignKey]]]) -> dict[str, set[str]]:
        """Edge referenced -> referencing. External and self references add no edge."""
        graph: dict[str, set[str]] = {table: set() for table in foreign_keys}
        for table, fks in foreign_keys.items():
            for fk in fks or []:
                referenced = fk.ref_container
                if referenced in graph and referenced != table:
                    graph[referenced].add(table)
        return graph
