"""
Operation Executors Registry.

This module provides a centralized registry for pixel operation executors. It
enables registration, lookup, and execution of operation nodes, and running a
chain of single-input nodes where each result feeds the next one.

Classes:
    OperationExecutorRegistry: Registry for operation executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_executors: Register all built-in operation executors
    execute_chain: Run single-input operation nodes in sequence
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
import logging

from PL_Libs.constants import (
    FIELD_NODE_TYPE,
    NODE_TYPE_ARITHMETIC,
    NODE_TYPE_BINARY,
    NODE_TYPE_BOOLEAN,
    NODE_TYPE_BRIGHTNESS,
    NODE_TYPE_FLIP,
    NODE_TYPE_GRAYSCALE,
    NODE_TYPE_ROTATE,
)
from PL_Libs.PixelEngineLib.pixel_models import InvalidParameterError, MissingInputError, PixelBuffer

logger = logging.getLogger(__name__)

# Type alias for executor function
ExecutorFunction = Callable[[Dict[str, Any], List[PixelBuffer]], PixelBuffer]


class OperationExecutorRegistry:
    """
    Registry for operation executors.

    Each operation type records the minimum number of input buffers it needs;
    execute() rejects calls with fewer inputs before the executor runs.

    Example:
        >>> registry = OperationExecutorRegistry()
        >>> registry.register("Grayscale", execute_grayscale_node, input_count=1)
        >>> result = registry.execute("Grayscale", node_dict, [buffer])
    """

    def __init__(self):
        self._executors: Dict[str, ExecutorFunction] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    def register(
        self,
        operation_type: str,
        executor: ExecutorFunction,
        description: str = "",
        input_count: int = 1,
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register an operation executor.

        Args:
            operation_type: Unique identifier for the operation (e.g., "Grayscale")
            executor: Callable accepting (node_dict, inputs) and returning a PixelBuffer
            description: Human-readable description of the operation
            input_count: Minimum number of input buffers the operation needs
            tags: Optional list of tags for categorization (e.g., ["geometry"])

        Raises:
            ValueError: If operation_type is empty, executor is not callable
                or input_count is below 1
            RuntimeError: If operation_type is already registered
        """
        operation_type = str(operation_type).strip()

        if not operation_type:
            raise ValueError("operation_type cannot be empty")

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if int(input_count) < 1:
            raise ValueError(f"input_count must be at least 1, got {input_count}")

        if operation_type in self._executors:
            raise RuntimeError(f"Operation type '{operation_type}' is already registered")

        self._executors[operation_type] = executor
        self._metadata[operation_type] = {
            "description": str(description),
            "input_count": int(input_count),
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered executor for operation type: {operation_type}")

    def get_executor(self, operation_type: str) -> ExecutorFunction:
        """
        Get the executor for an operation type.

        Raises:
            KeyError: If operation_type is not registered
        """
        operation_type = str(operation_type).strip()

        if operation_type not in self._executors:
            available = ", ".join(self.list_operation_types())
            raise KeyError(
                f"No executor registered for operation type '{operation_type}'. "
                f"Available types: {available}"
            )

        return self._executors[operation_type]

    def execute(
        self,
        operation_type: str,
        node_dict: Dict[str, Any],
        inputs: List[PixelBuffer],
    ) -> PixelBuffer:
        """
        Execute an operation by looking up its executor.

        Args:
            operation_type: The operation type to execute
            node_dict: Operation node configuration dictionary
            inputs: Input buffers, primary image first

        Returns:
            Result buffer from the executor

        Raises:
            KeyError: If operation_type is not registered
            MissingInputError: If fewer inputs than the registered input_count are given
            PixelEngineError: Any engine error raised by the executor
        """
        executor = self.get_executor(operation_type)
        operation_type = str(operation_type).strip()

        required = self._metadata[operation_type]["input_count"]
        if len(inputs) < required:
            raise MissingInputError(
                f"Operation '{operation_type}' needs {required} input(s), got {len(inputs)}"
            )

        logger.debug(f"Executing operation '{operation_type}' with {len(inputs)} input(s)")
        return executor(node_dict, inputs)

    def list_operation_types(self) -> List[str]:
        """Get a sorted list of all registered operation types."""
        return sorted(self._executors.keys())

    def get_metadata(self, operation_type: str) -> Dict[str, Any]:
        """
        Get a copy of the metadata for an operation type.

        Raises:
            KeyError: If operation_type is not registered
        """
        operation_type = str(operation_type).strip()

        if operation_type not in self._metadata:
            raise KeyError(f"No metadata for operation type: {operation_type}")

        meta = self._metadata[operation_type]
        return {**meta, "tags": list(meta["tags"])}

    def filter_by_tag(self, tag: str) -> List[str]:
        """Get all operation types carrying a tag (case-insensitive)."""
        tag = str(tag).strip().lower()
        return sorted(
            operation_type
            for operation_type, meta in self._metadata.items()
            if tag in [t.lower() for t in meta["tags"]]
        )


# Global singleton registry
_default_registry: Optional[OperationExecutorRegistry] = None


def get_default_registry() -> OperationExecutorRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in operations.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = OperationExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: OperationExecutorRegistry) -> None:
    """
    Register all built-in operation executors.

    This function registers the grayscale, binary, brightness, arithmetic,
    boolean, rotate and flip operations.
    """
    from PL_Libs.OpsLib.op_nodes import (
        execute_grayscale_node,
        execute_binary_node,
        execute_brightness_node,
        execute_arithmetic_node,
        execute_boolean_node,
        execute_rotate_node,
        execute_flip_node,
    )

    registry.register(
        operation_type=NODE_TYPE_GRAYSCALE,
        executor=execute_grayscale_node,
        description="Convert to grayscale using the luminance formula",
        input_count=1,
        tags=["color", "conversion"],
    )

    registry.register(
        operation_type=NODE_TYPE_BINARY,
        executor=execute_binary_node,
        description="Threshold luminance to black and white",
        input_count=1,
        tags=["color", "conversion"],
    )

    registry.register(
        operation_type=NODE_TYPE_BRIGHTNESS,
        executor=execute_brightness_node,
        description="Shift brightness of every pixel",
        input_count=1,
        tags=["color", "adjustment"],
    )

    registry.register(
        operation_type=NODE_TYPE_ARITHMETIC,
        executor=execute_arithmetic_node,
        description="Add, subtract or multiply by a constant or a second image",
        input_count=1,
        tags=["color", "arithmetic"],
    )

    registry.register(
        operation_type=NODE_TYPE_BOOLEAN,
        executor=execute_boolean_node,
        description="Bitwise AND, OR or XOR with a second image",
        input_count=2,
        tags=["color", "boolean"],
    )

    registry.register(
        operation_type=NODE_TYPE_ROTATE,
        executor=execute_rotate_node,
        description="Rotate clockwise by 90, 180 or 270 degrees",
        input_count=1,
        tags=["geometry"],
    )

    registry.register(
        operation_type=NODE_TYPE_FLIP,
        executor=execute_flip_node,
        description="Mirror horizontally or vertically",
        input_count=1,
        tags=["geometry"],
    )

    logger.info("Registered default operation executors")


def execute_chain(
    nodes: Sequence[Dict[str, Any]],
    source: PixelBuffer,
    registry: Optional[OperationExecutorRegistry] = None,
) -> PixelBuffer:
    """
    Run operation nodes in order, feeding each result into the next node.

    Args:
        nodes: Operation node dictionaries, each with a 'type' key
        source: Buffer fed to the first node
        registry: Registry to dispatch through (default registry if None)

    Returns:
        The result of the last node, or source when nodes is empty

    Raises:
        InvalidParameterError: If a node has no type
        KeyError: If a node type is not registered
        MissingInputError: If a node needs a second input buffer
    """
    registry = registry or get_default_registry()

    result = source
    for node in nodes:
        operation_type = node.get(FIELD_NODE_TYPE)
        if not operation_type:
            raise InvalidParameterError(f"Operation node has no type: {node!r}")
        result = registry.execute(operation_type, node, [result])
    return result
