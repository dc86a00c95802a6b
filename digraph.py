from typing import Iterable, List, Set, Tuple

from pydantic import BaseModel, ConfigDict


class GraphQueries:
    """Read-only operations shared by Digraph and FrozenDigraph"""

    def validate_vertex(self, v: int):
        """Raise if v is not a vertex of this graph"""
        if v < 0 or v >= self.vertex_count:
            raise ValueError(f"vertex {v} is not between 0 and {self.vertex_count - 1}")

    def validate_adjacency(self):
        if len(self.adj) != self.vertex_count:
            raise ValueError(
                f"Digraph has {self.vertex_count} vertices but {len(self.adj)} adjacency lists"
            )
        for targets in self.adj:
            for w in targets:
                self.validate_vertex(w)

    def adjacent(self, v: int) -> Tuple[int, ...]:
        self.validate_vertex(v)
        return tuple(self.adj[v])

    def vertices(self) -> range:
        return range(self.vertex_count)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adj)

    def print_graph(self):
        """Print the graph one edge per line in the format: v,w"""
        for v in self.vertices():
            for w in self.adj[v]:
                print(f"{v},{w}")


class Digraph(GraphQueries, BaseModel):
    """Directed graph over the vertices 0..vertex_count-1, open for new edges"""
    vertex_count: int
    adj: List[List[int]] = []

    def model_post_init(self, __context):
        if self.vertex_count < 0:
            raise ValueError("Number of vertices in a Digraph must be non-negative")

        if not self.adj:
            self.adj = [[] for _ in range(self.vertex_count)]
        self.validate_adjacency()

    def add_edge(self, v: int, w: int):
        """Add the directed edge v->w"""
        self.validate_vertex(v)
        self.validate_vertex(w)
        self.adj[v].append(w)

    def freeze(self) -> "FrozenDigraph":
        """Return an immutable copy of the graph"""
        return FrozenDigraph(
            vertex_count=self.vertex_count,
            adj=tuple(tuple(targets) for targets in self.adj),
        )


class FrozenDigraph(GraphQueries, BaseModel):
    """Directed graph whose edges can no longer change"""
    model_config = ConfigDict(frozen=True)

    vertex_count: int
    adj: Tuple[Tuple[int, ...], ...]

    def model_post_init(self, __context):
        if self.vertex_count < 0:
            raise ValueError("Number of vertices in a Digraph must be non-negative")
        self.validate_adjacency()


def reachable(graph: GraphQueries, sources: Iterable[int]) -> Set[int]:
    """Return every vertex reachable from any of the sources (sources included)"""
    marked = set()
    stack = []

    for s in sources:
        graph.validate_vertex(s)
        stack.append(s)

    # Iterative DFS so long patterns do not hit the recursion limit
    while stack:
        v = stack.pop()
        if v in marked:
            continue

        marked.add(v)
        for w in graph.adj[v]:
            if w not in marked:
                stack.append(w)

    return marked
