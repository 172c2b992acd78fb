"""
Editing session state for Pixel Lab.

An EditSession holds everything a presentation layer needs between calls:
the original image, the latest result of each tab and the second images
loaded for the two-image tabs. The pixel engine itself stays stateless; the
session is passed around explicitly instead of living in globals.

Color tabs always start from the original image. The geometry tab chains:
every rotation or flip is applied to the tab's previous result.

Classes:
    EditSession: Per-caller session with one result slot per tab
"""

import logging
from typing import Dict, List, Optional

from PL_Libs.constants import (
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    DEFAULT_BINARY_THRESHOLD,
    FIELD_NODE_TYPE,
    SECOND_IMAGE_TABS,
    SESSION_TABS,
    TAB_ARITHMETIC,
    TAB_BINARY,
    TAB_BOOLEAN,
    TAB_BRIGHTNESS,
    TAB_GEOMETRY,
    TAB_GRAYSCALE,
)
from PL_Libs.OpsLib.op_executors import OperationExecutorRegistry, get_default_registry
from PL_Libs.OpsLib.op_nodes import (
    create_arithmetic_node,
    create_binary_node,
    create_boolean_node,
    create_brightness_node,
    create_flip_node,
    create_grayscale_node,
    create_rotate_node,
)
from PL_Libs.PixelEngineLib.image_bridge import resize_to_match
from PL_Libs.PixelEngineLib.pixel_models import (
    InvalidParameterError,
    MissingInputError,
    PixelBuffer,
    PixelEngineError,
)

logger = logging.getLogger(__name__)


class EditSession:
    """
    Session state for one loaded image.

    Example:
        >>> session = EditSession(load_buffer("photo.png"))
        >>> session.apply_binary(threshold=100)
        >>> session.set_second_image("boolean", load_buffer("mask.png"))
        >>> session.apply_boolean("and")
        >>> session.apply_rotation(90)
        >>> session.apply_rotation(90)   # now rotated 180 degrees
    """

    def __init__(self, original: PixelBuffer, registry: Optional[OperationExecutorRegistry] = None):
        if not isinstance(original, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(original)}")

        self._original = original
        self._registry = registry or get_default_registry()
        self._results: Dict[str, PixelBuffer] = {}
        self._second_images: Dict[str, PixelBuffer] = {}

    @property
    def original(self) -> PixelBuffer:
        return self._original

    def result(self, tab: str) -> PixelBuffer:
        """Latest result of a tab, or the original image if the tab has none."""
        return self._results.get(self._check_tab(tab), self._original)

    def has_result(self, tab: str) -> bool:
        return self._check_tab(tab) in self._results

    def second_image(self, tab: str) -> Optional[PixelBuffer]:
        return self._second_images.get(self._check_second_image_tab(tab))

    def set_second_image(self, tab: str, buffer: PixelBuffer) -> bool:
        """
        Store the second image for the arithmetic or boolean tab.

        Args:
            tab: 'arithmetic' or 'boolean'
            buffer: Second image in any size

        Returns:
            True if the image will be resized to the original's size when used
        """
        tab = self._check_second_image_tab(tab)
        if not isinstance(buffer, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")

        self._second_images[tab] = buffer
        needs_resize = not buffer.same_size_as(self._original)
        if needs_resize:
            logger.info(
                f"Second image for '{tab}' is {buffer.width}x{buffer.height}; "
                f"it will be resized to {self._original.width}x{self._original.height}"
            )
        return needs_resize

    def apply_grayscale(self) -> PixelBuffer:
        return self._run(TAB_GRAYSCALE, create_grayscale_node(TAB_GRAYSCALE), [self._original])

    def apply_binary(self, threshold: float = DEFAULT_BINARY_THRESHOLD) -> PixelBuffer:
        node = create_binary_node(TAB_BINARY, threshold)
        return self._run(TAB_BINARY, node, [self._original])

    def apply_brightness(self, delta: float) -> PixelBuffer:
        """
        Shift brightness of the original image.

        Raises:
            InvalidParameterError: If delta is outside the slider range [-100, 100]
        """
        if not BRIGHTNESS_MIN <= delta <= BRIGHTNESS_MAX:
            raise InvalidParameterError(
                f"Brightness must be between {BRIGHTNESS_MIN} and {BRIGHTNESS_MAX}, got {delta}"
            )
        node = create_brightness_node(TAB_BRIGHTNESS, delta)
        return self._run(TAB_BRIGHTNESS, node, [self._original])

    def apply_arithmetic(self, operation, constant: Optional[float] = None) -> PixelBuffer:
        """
        Apply an arithmetic operation to the original image.

        Args:
            operation: 'add', 'subtract' or 'multiply'
            constant: Scalar operand; None combines with the second image

        Raises:
            MissingInputError: If image mode is used before a second image is set
        """
        node = create_arithmetic_node(TAB_ARITHMETIC, operation, constant)
        second_image_tab = None if constant is not None else TAB_ARITHMETIC
        return self._run(TAB_ARITHMETIC, node, [self._original], second_image_tab)

    def apply_boolean(self, operation) -> PixelBuffer:
        """
        Combine the original image with the boolean tab's second image.

        Raises:
            MissingInputError: If no second image has been set
        """
        node = create_boolean_node(TAB_BOOLEAN, operation)
        return self._run(TAB_BOOLEAN, node, [self._original], TAB_BOOLEAN)

    def apply_rotation(self, degrees) -> PixelBuffer:
        node = create_rotate_node(TAB_GEOMETRY, degrees)
        return self._run(TAB_GEOMETRY, node, [self.result(TAB_GEOMETRY)])

    def apply_flip(self, direction) -> PixelBuffer:
        node = create_flip_node(TAB_GEOMETRY, direction)
        return self._run(TAB_GEOMETRY, node, [self.result(TAB_GEOMETRY)])

    def reset(self, tab: str) -> PixelBuffer:
        """Discard a tab's result and return the original image."""
        self._results.pop(self._check_tab(tab), None)
        logger.debug(f"Reset tab '{tab}'")
        return self._original

    def reset_all(self) -> None:
        self._results.clear()
        logger.debug("Reset all tabs")

    def _resized_second_image(self, tab: str) -> PixelBuffer:
        second = self._second_images.get(tab)
        if second is None:
            raise MissingInputError(f"Load a second image for '{tab}' first")
        return resize_to_match(second, self._original.width, self._original.height)

    def _run(
        self,
        tab: str,
        node: Dict,
        inputs: List[PixelBuffer],
        second_image_tab: Optional[str] = None,
    ) -> PixelBuffer:
        operation_type = node[FIELD_NODE_TYPE]
        try:
            if second_image_tab is not None:
                inputs = inputs + [self._resized_second_image(second_image_tab)]
            result = self._registry.execute(operation_type, node, inputs)
        except PixelEngineError as e:
            logger.warning(f"{operation_type} on tab '{tab}' rejected: {e}")
            raise

        self._results[tab] = result
        logger.debug(f"Applied {operation_type} on tab '{tab}' -> {result.width}x{result.height}")
        return result

    @staticmethod
    def _check_tab(tab: str) -> str:
        if tab not in SESSION_TABS:
            raise InvalidParameterError(
                f"Unknown tab '{tab}'. Valid tabs: {', '.join(SESSION_TABS)}"
            )
        return tab

    @staticmethod
    def _check_second_image_tab(tab: str) -> str:
        if tab not in SECOND_IMAGE_TABS:
            raise InvalidParameterError(
                f"Tab '{tab}' takes no second image. Valid tabs: {', '.join(SECOND_IMAGE_TABS)}"
            )
        return tab
