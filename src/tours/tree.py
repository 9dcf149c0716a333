"""Tagged tree-node snapshot for tree views.

A tree view shows one root, one child per tour and one grandchild per step.
Each level is its own frozen record so consumers dispatch on the node type
instead of inspecting an untyped payload::

    RootNode -> TourNode(tour) -> StepNode(step, tour_id, index)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from tours.domain.models import Step, Tour

__all__ = ["TREE_TITLE", "RootNode", "TourNode", "StepNode", "TreeNode", "build_tree", "label_of"]

TREE_TITLE = "Code Tours"


@dataclass(frozen=True, slots=True)
class StepNode:
    step: Step
    tour_id: str
    index: int


@dataclass(frozen=True, slots=True)
class TourNode:
    tour: Tour
    children: Tuple[StepNode, ...]
    active: bool = False


@dataclass(frozen=True, slots=True)
class RootNode:
    children: Tuple[TourNode, ...]
    title: str = TREE_TITLE


TreeNode = Union[RootNode, TourNode, StepNode]


def build_tree(tours: Iterable[Tour], active_tour_id: Optional[str] = None) -> RootNode:
    nodes = []
    for tour in tours:
        steps = tuple(StepNode(step=s, tour_id=tour.id, index=i) for i, s in enumerate(tour.steps))
        nodes.append(TourNode(tour=tour, children=steps, active=tour.id == active_tour_id))
    return RootNode(children=tuple(nodes))


def label_of(node: TreeNode) -> str:
    if isinstance(node, RootNode):
        return node.title
    if isinstance(node, TourNode):
        return node.tour.title
    if isinstance(node, StepNode):
        return node.step.title
    raise TypeError(f"unknown tree node {node!r}")
