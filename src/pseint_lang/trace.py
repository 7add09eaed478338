"""
Execution trace (flowchart) built while a program runs.
One node per executed statement, bracketed by a start and an end node.
"""

import csv
import io

NODE_KINDS = ('start', 'end', 'process', 'decision', 'input', 'output')


class TraceNode:
    def __init__(self, id, kind, label):
        self.id = id          # "node_<n>", unique within one run
        self.kind = kind      # One of NODE_KINDS
        self.label = label    # Text shown in the diagram
        self.children = []    # Ids of the nodes this one links to, in order

    def __repr__(self):
        return f"TraceNode({self.id!r}, {self.kind!r}, {self.label!r}, children={self.children!r})"


class TraceBuilder:
    def __init__(self):
        self.nodes = []
        self._counter = 0

    def add_node(self, kind, label):
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown trace node kind '{kind}'")
        node = TraceNode(f"node_{self._counter}", kind, label)
        self._counter += 1
        self.nodes.append(node)
        return node

    def link(self, parent, child):
        if child.id not in parent.children:
            parent.children.append(child.id)

    def stitch(self):
        """Link every adjacent pair of nodes in creation order."""
        for current, following in zip(self.nodes, self.nodes[1:]):
            self.link(current, following)

    def kinds(self):
        return [node.kind for node in self.nodes]

    def to_csv(self):
        return trace_to_csv(self.nodes)


def trace_to_csv(nodes):
    """Returns a trace in CSV format (id, kind, label, children joined by ';').

    Args:
        nodes (list): TraceNode list, in creation order

    Returns:
        str: CSV representation of the trace, header row included
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['id', 'kind', 'label', 'children'])
    for node in nodes:
        writer.writerow([node.id, node.kind, node.label, ';'.join(node.children)])
    return output.getvalue()
