"""
This module provides the graph visualization of class reflectors.

It uses the `networkx` library for the graph data structure and the
`graphviz` library for rendering the final visual output.

- **`ClassGraph`**: Visualizes a class reflector together with its ancestor
  chain (followed through `Class.get_parent()`). Every class becomes a node;
  its methods, accessors and properties hang off it as member nodes named
  `"<Class>.<member>"`. Members no decorator targeted are drawn in a neutral
  color, and each node carries the context stored under the graph's zone as
  its tooltip. Dashed edges point from a class to its parent.

The graph can also produce a `ReflectMatrix` for a tabular view of the same
class through `build_matrix()`.
"""

from typing import override

import graphviz
from pandas import DataFrame

from ._abstracts import _BaseGraph
from ._matrix import ReflectMatrix, _member_kind
from .reflector import Class
from .zone import Zone


class ClassGraph(_BaseGraph):
    """Generates and visualizes the member graph of a class reflector.

    Attributes:
        class_reflector (Class): The class reflector at the root of the graph.
        zone (Zone): The zone whose context is shown as node tooltips.
    """

    def __init__(self, class_reflector: Class, zone: Zone | None = None):
        """Initializes the ClassGraph with a class reflector.

        Args:
            class_reflector (Class): The class reflector to visualize.
            zone (Zone | None, optional): The zone to read context from.
                Defaults to `Zone.DEFAULT`.

        Raises:
            InvalidReflectorError: If `class_reflector` is not a `Class`.
        """
        super().__init__(zone)
        # Validates the reflector as a side effect
        self._matrix = ReflectMatrix(class_reflector, zone)
        self.class_reflector = class_reflector

    @property
    def _title(self) -> str:
        return self.class_reflector.name

    @property
    def _node_styles(self) -> dict[str, tuple[str, str, str]]:
        return {
            "class": ("box3d", "#9999ff", "Classes"),
            "method": ("box", "#99ff99", "Methods"),
            "accessor": ("box", "#fbec5d", "Accessors"),
            "property": ("box", "#ffb6c1", "Properties"),
        }

    def _edge_attrs(self, relation: str | None) -> dict[str, str]:
        if relation == "inherits":
            return {"style": "dashed", "penwidth": "2.0"}
        return {"arrowhead": "none"}

    def _lineage(self) -> list[Class]:
        """Return the class reflector followed by its ancestors."""
        lineage = []
        current = self.class_reflector
        while current is not None:
            lineage.append(current)
            current = current.get_parent()
        return lineage

    def _setup(self, decorated_only: bool = False):
        """Builds the internal networkx graph from the class lineage.

        Args:
            decorated_only (bool, optional): If True, members no decorator
                targeted are left out. Defaults to False.
        """
        lineage = self._lineage()

        for class_reflector in lineage:
            cls_node = class_reflector.name
            self._add_reflector_node(cls_node, class_reflector, "class")

            for member in class_reflector.members():
                if decorated_only and not member.is_decorated:
                    continue

                node = f"{cls_node}.{member.name}"
                self._add_reflector_node(node, member, _member_kind(member), label=member.name)
                self.graph.add_edge(cls_node, node, relation="member")

        self.graph.add_edges_from(
            [(c.name, p.name) for c, p in zip(lineage, lineage[1:], strict=False)],
            relation="inherits",
        )

    def _members_of(self, cls_node: str) -> list[str]:
        return [
            node
            for node in self.graph.successors(cls_node)
            if self.graph.edges[cls_node, node]["relation"] == "member"
        ]

    def _cluster_classes(self, g: graphviz.Digraph):
        """Groups each class with its member nodes into a visual cluster."""
        for class_reflector in self._lineage():
            cls_node = class_reflector.name
            with g.subgraph(name=f"cluster_{cls_node}") as c:
                c.attr(label=cls_node, style="rounded", color="gray", fontcolor="gray", fontsize="10")
                c.node(cls_node)
                for member_node in self._members_of(cls_node):
                    c.node(member_node)

    def _rank_classes(self, g: graphviz.Digraph):
        """Puts every class of the lineage on one rank."""
        with g.subgraph() as s:
            s.attr(rank="same")
            for class_reflector in self._lineage():
                s.node(class_reflector.name)

    @override
    def build(
        self,
        graph: graphviz.Digraph | None = None,
        additional_graph_attr: dict[str, str] | None = None,
        size: int = 12,
        legend: bool = True,
        decorated_only: bool = False,
        cluster_classes: bool = False,
        rank_classes: bool = False,
    ) -> graphviz.Digraph:
        """Builds and returns the Graphviz Digraph object for the class lineage.

        Args:
            graph (graphviz.Digraph | None, optional): An existing graphviz
                graph to add nodes and edges to. If None, a new graph is created.
                Defaults to None.
            additional_graph_attr (dict[str, str] | None, optional): Additional
                attributes to add to the graph. Defaults to None.
            size (int, optional): The size of the graph in inches (e.g., "12,12!").
                Defaults to 12.
            legend (bool, optional): If True, includes a color-coded legend
                explaining the different node types. Defaults to True.
            decorated_only (bool, optional): If True, only members a decorator
                explicitly targeted are drawn. Defaults to False.
            cluster_classes (bool, optional): If True, groups each class and
                its members into a distinct visual cluster. Defaults to False.
            rank_classes (bool, optional): If True, the class and its
                ancestors are drawn side by side on one rank. Ignored when
                `cluster_classes` is set. Defaults to False.

        Returns:
            graphviz.Digraph: A Graphviz Digraph object representing the class
                graph.

        Example:
            ```python
            import zoneflect as zf

            graph = zf.ClassGraph(zf.get_class(Bunny))
            g = graph.build(decorated_only=True)
            g.render("assets/output/graphs/bunny", format="png", cleanup=True)
            ```
        """
        g = super().build(
            graph=graph,
            additional_graph_attr=additional_graph_attr,
            size=size,
            legend=legend,
            decorated_only=decorated_only,
        )

        if cluster_classes:
            self._cluster_classes(g)
        elif rank_classes:
            self._rank_classes(g)

        return g

    def build_matrix(self) -> DataFrame:
        """Construct and return the ReflectMatrix of the root class.

        Returns:
            pd.DataFrame: One row per member of the root class, with the
                context of the graph's zone as columns.

        Example:
            ```python
            graph = zf.ClassGraph(zf.get_class(Bunny))
            print(graph.build_matrix())
            ```
        """
        return self._matrix.build()
