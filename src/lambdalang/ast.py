"""
Minimal parse-tree node for lambdalang expressions.

The parser that builds these trees lives outside the value core. This
module only provides the node shape the core depends on (an ordered list
of children, the first of which is the head/operator) and the printer used
to render wrapped subtrees.

    (+ 1 (* x 2))

is represented as

    AstNode("", [AstNode("+"), AstNode("1"),
                 AstNode("", [AstNode("*"), AstNode("x"), AstNode("2")])])
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(eq=False)
class AstNode:
    """
    A parse-tree node.

    Leaves carry the raw token text in `token` and have no children.
    Interior nodes carry their operands in `children`; `token` is unused.
    Nodes compare by identity.
    """
    token: str = ""
    children: List["AstNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: "AstNode") -> "AstNode":
        self.children.append(child)
        return child


def leaf(token: str) -> AstNode:
    """Create a leaf node for a raw token."""
    return AstNode(token=token)


def node(*children: AstNode) -> AstNode:
    """Create an interior node from its children."""
    return AstNode(children=list(children))


def format_node(n: AstNode) -> str:
    """Render a node as an s-expression."""
    if n.is_leaf:
        return n.token
    return "(" + " ".join(format_node(c) for c in n.children) + ")"
