"""Toast messages shared by the structures and the session."""

from treeviz.scene import Toast


def found(value) -> Toast:
    return Toast("Found", f"Node with value {value} found.")


def not_found(value) -> Toast:
    return Toast("Not Found", f"Node with value {value} not found.", "destructive")


def duplicate(value) -> Toast:
    return Toast("Duplicate", f"Node with value {value} already exists.", "destructive")


def deleted(value) -> Toast:
    return Toast("Deleted", f"Node with value {value} deleted.")


def heap_empty() -> Toast:
    return Toast("Heap is empty", "Cannot extract from an empty heap.", "destructive")


def extracted(value) -> Toast:
    return Toast("Extracted Min", f"Extracted minimum value: {value}")


def not_applicable(operation: str, structure: str) -> Toast:
    return Toast("Not Applicable",
                 f"{operation} is not a standard operation for a {structure}.",
                 "destructive")


def busy() -> Toast:
    return Toast("Animation in progress",
                 "Please wait for the current animation to finish.",
                 "destructive")
