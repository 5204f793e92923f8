"""
This module provides the abstract base class of zoneflect's reflector graphs.

A reflector graph is built in two stages. `_setup` walks the reflectors of
interest and fills a networkx `DiGraph`; every node keeps the reflector it
stands for under the `reflector` attribute and its kind under `type`. `build`
then renders that graph with graphviz:

- Nodes are filled by kind. A reflector no decorator targeted is drawn
  grey and dashed, whatever its kind.
- The context a node's reflector holds in the graph's zone becomes the node
  tooltip, so the rendered SVG shows what the decorators stored.
- Edges are styled by their `relation` attribute.
"""

from abc import ABC, abstractmethod

import graphviz
from networkx import DiGraph

from ..reflector import Reflector
from ..zone import Zone

# Fill of reflectors no decorator targeted
_UNDECORATED_COLOR = "#d3d3d3"


class _BaseGraph(ABC):
    """Abstract base class for all graphs of reflectors.

    Args:
        zone (Zone | None, optional): The zone whose context is shown as node
            tooltips. Defaults to `Zone.DEFAULT`.
    """

    def __init__(self, zone: Zone | None = None):
        self.graph = DiGraph()
        self.zone = zone if zone is not None else Zone.DEFAULT

    @property
    @abstractmethod
    def _title(self) -> str:
        """Return the name shown in the graph label."""

    @property
    @abstractmethod
    def _node_styles(self) -> dict[str, tuple[str, str, str]]:
        """Map each node type to `(shape, fill color, legend label)`."""

    @abstractmethod
    def _edge_attrs(self, relation: str | None) -> dict[str, str]:
        """Return the graphviz attributes of an edge with the given relation."""

    @abstractmethod
    def _setup(self, **options) -> None:
        """Populate `self.graph` with reflector nodes and their relations."""

    def _add_reflector_node(
        self, node: str, reflector: Reflector, node_type: str, **attrs
    ) -> None:
        self.graph.add_node(node, reflector=reflector, type=node_type, **attrs)

    def _tooltip(self, reflector: Reflector) -> str | None:
        """Render the reflector's context in the graph's zone, if any."""
        context = reflector.get_context(self.zone)
        if not context:
            return None
        return ", ".join(f"{key}={value!r}" for key, value in context.items())

    def _graph_attr(
        self, size: int, additional_graph_attr: dict[str, str] | None
    ) -> dict[str, str]:
        graph_attr = {
            "rankdir": "LR",
            "nodesep": "0.2",
            "ranksep": "0.8",
            "fontname": "Helvetica",
            "fontsize": "10",
            "size": f"{size},{size}!",
            "label": f"<<b>{type(self).__name__} for {self._title!r}</b>>",
            "labelloc": "t",
        }
        if self.zone.label:
            graph_attr["tooltip"] = f"zone {self.zone.label}"
        return graph_attr | (additional_graph_attr or {})

    def _draw_nodes(self, g: graphviz.Digraph) -> None:
        for node, data in self.graph.nodes(data=True):
            shape, color, _ = self._node_styles[data["type"]]
            reflector = data["reflector"]

            attrs = {"shape": shape, "height": "0.35", "label": data.get("label", node)}
            if reflector.is_decorated:
                attrs.update(style="filled", fillcolor=color)
            else:
                attrs.update(style="filled,dashed", fillcolor=_UNDECORATED_COLOR)

            tooltip = self._tooltip(reflector)
            if tooltip:
                attrs["tooltip"] = tooltip
            g.node(node, **attrs)

    def _draw_edges(self, g: graphviz.Digraph) -> None:
        for source, target, data in self.graph.edges(data=True):
            g.edge(source, target, **self._edge_attrs(data.get("relation")))

    def _draw_legend(self, g: graphviz.Digraph) -> None:
        """Add one sample node per node type, plus the undecorated style."""
        entries = [(label, color, "filled") for _, color, label in self._node_styles.values()]
        entries.append(("Undecorated", _UNDECORATED_COLOR, "filled,dashed"))

        with g.subgraph(name="cluster_legend") as legend:
            legend.attr(label="<<b>Legend</b>>", fontsize="12", style="rounded")
            for index, (label, color, style) in enumerate(entries):
                legend.node(
                    f"legend_{index}",
                    label=label,
                    shape="box",
                    style=style,
                    fillcolor=color,
                    height="0.12",
                    fontsize="10",
                )

    def build(
        self,
        graph: graphviz.Digraph | None = None,
        additional_graph_attr: dict[str, str] | None = None,
        size: int = 12,
        legend: bool = True,
        **setup_options,
    ) -> graphviz.Digraph:
        """Rebuild the networkx graph and render it as a Graphviz Digraph.

        Args:
            graph (graphviz.Digraph | None, optional): An existing graphviz
                graph to draw into. If None, a new graph is created.
            additional_graph_attr (dict[str, str] | None, optional): Graph
                attributes overriding the defaults.
            size (int, optional): The size of the graph in inches. Defaults to 12.
            legend (bool, optional): If True, adds a legend of the node styles.
                Defaults to True.
            **setup_options: Passed on to `_setup`.

        Returns:
            graphviz.Digraph: The rendered graph. It needs no Graphviz binary
                until `.render()` is called.
        """
        self.graph.clear()
        self._setup(**setup_options)

        g = graph or graphviz.Digraph(graph_attr=self._graph_attr(size, additional_graph_attr))
        self._draw_nodes(g)
        self._draw_edges(g)
        if legend:
            self._draw_legend(g)

        return g


__all__ = ["_BaseGraph"]
