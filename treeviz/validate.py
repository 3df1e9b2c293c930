"""
Structural checks used by the tests and the player's status line.

Each validator returns ``(is_valid, error_list)`` instead of raising,
so callers can show every problem at once.
"""

from treeviz.heap import parent_index


def collect_values(node) -> list:
    """In-order values of a linked subtree."""
    if node is None:
        return []
    return collect_values(node.left) + [node.value] + collect_values(node.right)


def validate_bst(node, min_val=float("-inf"), max_val=float("inf")) -> tuple:
    """
    Validate BST ordering on a linked tree.

    Each node's value must satisfy: min_val < value < max_val

    Returns:
        (is_valid, error_list)
    """
    if node is None:
        return True, []

    errors = []
    if node.value <= min_val:
        errors.append(f"BST violation: node {node.value} <= {min_val}")
    if node.value >= max_val:
        errors.append(f"BST violation: node {node.value} >= {max_val}")

    _, lerr = validate_bst(node.left, min_val, node.value)
    _, rerr = validate_bst(node.right, node.value, max_val)
    errors.extend(lerr)
    errors.extend(rerr)
    return len(errors) == 0, errors


def validate_links(root) -> tuple:
    """
    Check every parent/child pair points both ways and ids are unique.

    Returns:
        (is_valid, error_list)
    """
    errors = []
    if root is not None and root.parent is not None:
        errors.append(f"root {root.id} has parent {root.parent.id}")
    seen = set()
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        if node.id in seen:
            errors.append(f"id {node.id} appears twice")
            continue
        seen.add(node.id)
        for child in (node.left, node.right):
            if child is None:
                continue
            if child.parent is not node:
                errors.append(f"{child.id}.parent is not {node.id}")
            stack.append(child)
    return len(errors) == 0, errors


def validate_heap(values) -> tuple:
    """
    Check the min-heap property on array storage.

    Returns:
        (is_valid, error_list)
    """
    errors = []
    for i in range(1, len(values)):
        p = parent_index(i)
        if values[p] > values[i]:
            errors.append(f"heap violation: [{p}]={values[p]} > [{i}]={values[i]}")
    return len(errors) == 0, errors
