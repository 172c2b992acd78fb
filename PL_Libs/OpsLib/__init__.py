"""
Pixel Lab Operations Library.

This module contains the operation executor registry and the operation node
implementations that wrap the pixel engine.

Modules:
    op_executors: Registry, default registration and chained execution
    op_nodes: Operation node configs, executors and factories
"""

from PL_Libs.OpsLib.op_executors import (
    OperationExecutorRegistry,
    get_default_registry,
    register_default_executors,
    execute_chain,
)
from PL_Libs.OpsLib.op_nodes import (
    BinaryNodeConfig,
    BrightnessNodeConfig,
    ArithmeticNodeConfig,
    BooleanNodeConfig,
    RotateNodeConfig,
    FlipNodeConfig,
    create_grayscale_node,
    create_binary_node,
    create_brightness_node,
    create_arithmetic_node,
    create_boolean_node,
    create_rotate_node,
    create_flip_node,
)

__all__ = [
    "OperationExecutorRegistry",
    "get_default_registry",
    "register_default_executors",
    "execute_chain",
    "BinaryNodeConfig",
    "BrightnessNodeConfig",
    "ArithmeticNodeConfig",
    "BooleanNodeConfig",
    "RotateNodeConfig",
    "FlipNodeConfig",
    "create_grayscale_node",
    "create_binary_node",
    "create_brightness_node",
    "create_arithmetic_node",
    "create_boolean_node",
    "create_rotate_node",
    "create_flip_node",
]
