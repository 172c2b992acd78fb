"""
Operation Nodes for Pixel Lab.

Wraps the pixel engine operations for use through the operation registry.
Each node is a plain dictionary holding an 'id', a 'type' and the fields of
the matching config dataclass; each executor takes (node, inputs) and returns
a new PixelBuffer.

Example:
    >>> from PL_Libs.OpsLib.op_nodes import create_binary_node
    >>> from PL_Libs.OpsLib.op_executors import get_default_registry
    >>>
    >>> node = create_binary_node("binary-1", threshold=100)
    >>> result = get_default_registry().execute("Binary", node, [buffer])

Classes:
    BinaryNodeConfig, BrightnessNodeConfig, ArithmeticNodeConfig,
    BooleanNodeConfig, RotateNodeConfig, FlipNodeConfig

Functions:
    execute_*_node: Registry executors
    create_*_node: Node dictionary factories
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional, Union

from PL_Libs.constants import (
    ARITHMETIC_MODE_CONSTANT,
    ARITHMETIC_MODE_IMAGE,
    DEFAULT_ARITHMETIC_CONSTANT,
    DEFAULT_BINARY_THRESHOLD,
    DEFAULT_BRIGHTNESS_DELTA,
    DEFAULT_FLIP_DIRECTION,
    DEFAULT_ROTATION_DEGREES,
    FIELD_NODE_ID,
    FIELD_NODE_TYPE,
    NODE_TYPE_ARITHMETIC,
    NODE_TYPE_BINARY,
    NODE_TYPE_BOOLEAN,
    NODE_TYPE_BRIGHTNESS,
    NODE_TYPE_FLIP,
    NODE_TYPE_GRAYSCALE,
    NODE_TYPE_ROTATE,
)
from PL_Libs.PixelEngineLib.geometry_ops import flip, rotate
from PL_Libs.PixelEngineLib.pixel_models import (
    ArithmeticOp,
    BooleanOp,
    FlipDirection,
    InvalidParameterError,
    MissingInputError,
    PixelBuffer,
    RotationAngle,
)
from PL_Libs.PixelEngineLib.pixel_ops import (
    adjust_brightness,
    arithmetic_constant,
    arithmetic_image,
    boolean_op,
    to_binary,
    to_grayscale,
)

Number = Union[int, float]


def _as_number(value: Any, name: str) -> Number:
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"{name} must be a number, got {value!r}") from e
    return int(number) if number.is_integer() else number


class _NodeConfig:
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create from dictionary, ignoring keys that are not config fields."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


@dataclass
class BinaryNodeConfig(_NodeConfig):
    """Configuration for the binary node.

    Attributes:
        threshold: Pixels with rounded luminance >= threshold become white.
            Values outside [0, 255] are accepted.
    """
    threshold: Number = DEFAULT_BINARY_THRESHOLD

    def __post_init__(self) -> None:
        self.threshold = _as_number(self.threshold, "threshold")


@dataclass
class BrightnessNodeConfig(_NodeConfig):
    delta: Number = DEFAULT_BRIGHTNESS_DELTA

    def __post_init__(self) -> None:
        self.delta = _as_number(self.delta, "delta")


@dataclass
class ArithmeticNodeConfig(_NodeConfig):
    """Configuration for the arithmetic node.

    Attributes:
        operation: 'add', 'subtract' or 'multiply'
        mode: 'constant' combines with `constant`, 'image' with a second input
        constant: Scalar operand for constant mode
    """
    operation: str = ArithmeticOp.ADD.value
    mode: str = ARITHMETIC_MODE_CONSTANT
    constant: Number = DEFAULT_ARITHMETIC_CONSTANT

    def __post_init__(self) -> None:
        self.operation = ArithmeticOp.coerce(self.operation).value
        self.mode = str(self.mode).strip().lower()
        if self.mode not in (ARITHMETIC_MODE_CONSTANT, ARITHMETIC_MODE_IMAGE):
            raise InvalidParameterError(
                f"Unknown arithmetic mode '{self.mode}'. "
                f"Valid modes: {ARITHMETIC_MODE_CONSTANT}, {ARITHMETIC_MODE_IMAGE}"
            )
        self.constant = _as_number(self.constant, "constant")


@dataclass
class BooleanNodeConfig(_NodeConfig):
    operation: str = BooleanOp.AND.value

    def __post_init__(self) -> None:
        self.operation = BooleanOp.coerce(self.operation).value


@dataclass
class RotateNodeConfig(_NodeConfig):
    degrees: int = DEFAULT_ROTATION_DEGREES

    def __post_init__(self) -> None:
        self.degrees = RotationAngle.coerce(self.degrees).value


@dataclass
class FlipNodeConfig(_NodeConfig):
    direction: str = DEFAULT_FLIP_DIRECTION

    def __post_init__(self) -> None:
        self.direction = FlipDirection.coerce(self.direction).value


def _require_inputs(inputs: List[Any], count: int, node_type: str) -> None:
    if not inputs or len(inputs) < count:
        plural = "image" if count == 1 else "images"
        raise MissingInputError(f"{node_type} node requires {count} input {plural}")

    for buffer in inputs[:count]:
        if not isinstance(buffer, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")


def execute_grayscale_node(node: Dict[str, Any], inputs: List[Any]) -> PixelBuffer:
    _require_inputs(inputs, 1, NODE_TYPE_GRAYSCALE)
    return to_grayscale(inputs[0])


def execute_binary_node(node: Dict[str, Any], inputs: List[Any]) -> PixelBuffer:
    _require_inputs(inputs, 1, NODE_TYPE_BINARY)
    config = BinaryNodeConfig.from_dict(node)
    return to_binary(inputs[0], config.threshold)


def execute_brightness_node(node: Dict[str, Any], inputs: List[Any]) -> PixelBuffer:
    _require_inputs(inputs, 1, NODE_TYPE_BRIGHTNESS)
    config = BrightnessNodeConfig.from_dict(node)
    return adjust_brightness(inputs[0], config.delta)


def execute_arithmetic_node(node: Dict[str, Any], inputs: List[Any]) -> PixelBuffer:
    """
    Execute an arithmetic node.

    Inputs:
        - [0]: Primary image
        - [1]: Second image, required in 'image' mode

    Raises:
        MissingInputError: If a required input is missing
        DimensionMismatchError: If the images differ in size ('image' mode)
        InvalidParameterError: If the configuration is invalid
    """
    config = ArithmeticNodeConfig.from_dict(node)

    if config.mode == ARITHMETIC_MODE_IMAGE:
        _require_inputs(inputs, 2, NODE_TYPE_ARITHMETIC)
        return arithmetic_image(inputs[0], inputs[1], config.operation)

    _require_inputs(inputs, 1, NODE_TYPE_ARITHMETIC)
    return arithmetic_constant(inputs[0], config.operation, config.constant)


def execute_boolean_node(node: Dict[str, Any], inputs: List[Any]) -> PixelBuffer:
    """
    Execute a boolean node.

    Inputs:
        - [0]: Primary image
        - [1]: Second image of the same size

    Raises:
        MissingInputError: If either input is missing
        DimensionMismatchError: If the images differ in size
    """
    _require_inputs(inputs, 2, NODE_TYPE_BOOLEAN)
    config = BooleanNodeConfig.from_dict(node)
    return boolean_op(inputs[0], inputs[1], config.operation)


def execute_rotate_node(node: Dict[str, Any], inputs: List[Any]) -> PixelBuffer:
    _require_inputs(inputs, 1, NODE_TYPE_ROTATE)
    config = RotateNodeConfig.from_dict(node)
    return rotate(inputs[0], config.degrees)


def execute_flip_node(node: Dict[str, Any], inputs: List[Any]) -> PixelBuffer:
    _require_inputs(inputs, 1, NODE_TYPE_FLIP)
    config = FlipNodeConfig.from_dict(node)
    return flip(inputs[0], config.direction)


def _build_node(node_id: str, node_type: str, config: Optional[_NodeConfig] = None) -> Dict[str, Any]:
    node = {
        FIELD_NODE_ID: node_id,
        FIELD_NODE_TYPE: node_type,
    }
    if config is not None:
        node.update(config.to_dict())
    return node


def create_grayscale_node(node_id: str) -> Dict[str, Any]:
    return _build_node(node_id, NODE_TYPE_GRAYSCALE)


def create_binary_node(node_id: str, threshold: Number = DEFAULT_BINARY_THRESHOLD) -> Dict[str, Any]:
    return _build_node(node_id, NODE_TYPE_BINARY, BinaryNodeConfig(threshold))


def create_brightness_node(node_id: str, delta: Number = DEFAULT_BRIGHTNESS_DELTA) -> Dict[str, Any]:
    return _build_node(node_id, NODE_TYPE_BRIGHTNESS, BrightnessNodeConfig(delta))


def create_arithmetic_node(
    node_id: str,
    operation: Union[str, ArithmeticOp] = ArithmeticOp.ADD,
    constant: Optional[Number] = None,
) -> Dict[str, Any]:
    """
    Helper to create an arithmetic node dictionary.

    Args:
        node_id: Unique node identifier
        operation: 'add', 'subtract' or 'multiply'
        constant: Scalar operand; None selects image mode

    Returns:
        Node dictionary ready for the registry
    """
    if constant is None:
        config = ArithmeticNodeConfig(operation, ARITHMETIC_MODE_IMAGE)
    else:
        config = ArithmeticNodeConfig(operation, ARITHMETIC_MODE_CONSTANT, constant)
    return _build_node(node_id, NODE_TYPE_ARITHMETIC, config)


def create_boolean_node(
    node_id: str,
    operation: Union[str, BooleanOp] = BooleanOp.AND,
) -> Dict[str, Any]:
    return _build_node(node_id, NODE_TYPE_BOOLEAN, BooleanNodeConfig(operation))


def create_rotate_node(
    node_id: str,
    degrees: Union[int, str, RotationAngle] = DEFAULT_ROTATION_DEGREES,
) -> Dict[str, Any]:
    return _build_node(node_id, NODE_TYPE_ROTATE, RotateNodeConfig(degrees))


def create_flip_node(
    node_id: str,
    direction: Union[str, FlipDirection] = DEFAULT_FLIP_DIRECTION,
) -> Dict[str, Any]:
    return _build_node(node_id, NODE_TYPE_FLIP, FlipNodeConfig(direction))
