import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import networkx as nx
import numpy as np
import tsplib95

from .errors import ConfigurationError, DataConsistencyError
from .operators import tour_cost


@dataclass
class Instance:
    name: str
    path: Path
    graph: nx.Graph
    optimum: Optional[float]

    @property
    def num_cities(self) -> int:
        return self.graph.number_of_nodes()


def graph_from_matrix(matrix) -> nx.DiGraph:
    """Directed cost graph from a square matrix; the diagonal is ignored."""
    mat = np.asarray(matrix, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ConfigurationError(f"cost matrix must be square, got shape {mat.shape}")
    if (mat < 0).any():
        raise ConfigurationError("cost matrix contains negative costs")
    n = mat.shape[0]
    graph = nx.DiGraph()
    graph.add_nodes_from(range(n))
    for i in range(n):
        for j in range(n):
            if i != j:
                graph.add_edge(i, j, weight=float(mat[i, j]))
    return graph


def validate_graph(graph: nx.Graph) -> None:
    n = graph.number_of_nodes()
    if n < 2:
        raise DataConsistencyError(f"cost graph needs at least 2 cities, got {n}")
    if set(graph.nodes()) != set(range(n)):
        raise DataConsistencyError("cost graph nodes must be labelled 0..N-1")
    for a in range(n):
        for b in range(n):
            if a == b:
                continue
            if not graph.has_edge(a, b):
                raise DataConsistencyError(f"cost graph has no edge from {a} to {b}")
            weight = graph[a][b].get("weight")
            if weight is None or weight < 0:
                raise DataConsistencyError(f"edge {a} -> {b} has invalid cost {weight!r}")


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
        return None
    except OSError:
        return None


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(graph: nx.Graph, path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.load(candidate)
        if not tour_file.tours:
            continue
        # Tour files are 1-based; the graph is normalised to 0-based.
        route = [node - 1 for node in tour_file.tours[0]]
        return tour_cost(graph, route)
    return None


def _load_tsplib(path: Path) -> Instance:
    problem = tsplib95.load(path)
    graph = problem.get_graph(normalize=True)
    optimum = _load_optimum(graph, path)
    return Instance(name=problem.name or path.stem, path=path, graph=graph, optimum=optimum)


def _load_xml(path: Path) -> Instance:
    """TSPLIB XML layout: one <vertex> per city holding <edge cost="...">dest</edge> children."""
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise DataConsistencyError(f"{path}: malformed XML ({e})") from e
    vertices = root.findall("./graph/vertex")
    if not vertices:
        raise DataConsistencyError(f"{path}: no <graph><vertex> entries")
    graph = nx.DiGraph()
    graph.add_nodes_from(range(len(vertices)))
    for src, vertex in enumerate(vertices):
        for edge in vertex.findall("edge"):
            try:
                dest = int((edge.text or "").strip())
                cost = float(edge.get("cost"))
            except (TypeError, ValueError) as e:
                raise DataConsistencyError(f"{path}: malformed edge on vertex {src} ({e})") from e
            if not 0 <= dest < len(vertices):
                raise DataConsistencyError(f"{path}: vertex {src} has an edge to unknown city {dest}")
            graph.add_edge(src, dest, weight=cost)
    name = root.findtext("name") or path.stem
    optimum = _load_optimum(graph, path)
    return Instance(name=name.strip(), path=path, graph=graph, optimum=optimum)


def load_instance(path: Union[str, Path]) -> Instance:
    path = Path(path)
    if path.suffix.lower() == ".xml":
        return _load_xml(path)
    return _load_tsplib(path)


def _expand(paths: Iterable[Union[str, Path]]) -> List[Path]:
    files: List[Path] = []
    for p in map(Path, paths):
        if p.is_dir():
            files.extend(sorted(list(p.glob("*.tsp")) + list(p.glob("*.xml"))))
        else:
            files.append(p)
    return files


def load_instances(
    paths: Iterable[Union[str, Path]],
    max_nodes: Optional[int] = None,
    max_instances: Optional[int] = None,
) -> List[Instance]:
    instances: List[Instance] = []
    seen = set()
    for p in _expand(paths):
        if max_nodes is not None and p.suffix.lower() == ".tsp":
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        inst = load_instance(p)
        if max_nodes is not None and inst.num_cities > max_nodes:
            continue
        if inst.name in seen:
            continue
        seen.add(inst.name)
        instances.append(inst)
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances
