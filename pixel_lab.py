import os
import sys

from PL_Libs.constants import (
    NODE_TYPE_ARITHMETIC,
    NODE_TYPE_BINARY,
    NODE_TYPE_BOOLEAN,
    NODE_TYPE_BRIGHTNESS,
    NODE_TYPE_FLIP,
    NODE_TYPE_GRAYSCALE,
    NODE_TYPE_ROTATE,
)
from PL_Libs.OpsLib.op_executors import get_default_registry
from PL_Libs.PixelEngineLib.image_bridge import load_buffer, save_buffer
from PL_Libs.PixelEngineLib.pixel_models import PixelEngineError
from PL_Libs.SessionLib.edit_session import EditSession

# Operation name -> (registry operation type, argument hint, argument required)
OPERATIONS = {
    "grayscale": (NODE_TYPE_GRAYSCALE, "", False),
    "binary": (NODE_TYPE_BINARY, "[threshold]", False),
    "brightness": (NODE_TYPE_BRIGHTNESS, "[delta]", False),
    "add": (NODE_TYPE_ARITHMETIC, "<value|image>", True),
    "subtract": (NODE_TYPE_ARITHMETIC, "<value|image>", True),
    "multiply": (NODE_TYPE_ARITHMETIC, "<value|image>", True),
    "and": (NODE_TYPE_BOOLEAN, "<image>", True),
    "or": (NODE_TYPE_BOOLEAN, "<image>", True),
    "xor": (NODE_TYPE_BOOLEAN, "<image>", True),
    "rotate": (NODE_TYPE_ROTATE, "[90|180|270]", False),
    "flip": (NODE_TYPE_FLIP, "[horizontal|vertical]", False),
}

# Usage sections, by registry tag
USAGE_GROUPS = (("color", "Color operations"), ("geometry", "Geometry operations"))


def _parse_number(text):
    try:
        return float(text)
    except ValueError:
        return None


def apply_operation(session, operation, argument=None):
    """
    Apply one named operation to a session.

    Args:
        session: EditSession holding the input image
        operation: One of the keys of OPERATIONS
        argument: Operation argument as given on the command line
              - binary: threshold (default 128)
              - brightness: delta in [-100, 100] (default 0)
              - add/subtract/multiply: constant, or path to a second image
              - and/or/xor: path to a second image
              - rotate: 90, 180 or 270 (default 90)
              - flip: 'horizontal' or 'vertical' (default horizontal)

    Returns:
        The resulting PixelBuffer
    """
    if operation == "grayscale":
        return session.apply_grayscale()

    if operation == "binary":
        threshold = 128 if argument is None else _parse_number(argument)
        if threshold is None:
            raise ValueError(f"Threshold must be a number, got '{argument}'")
        return session.apply_binary(threshold)

    if operation == "brightness":
        delta = 0 if argument is None else _parse_number(argument)
        if delta is None:
            raise ValueError(f"Brightness must be a number, got '{argument}'")
        return session.apply_brightness(delta)

    if operation in ("add", "subtract", "multiply"):
        constant = _parse_number(argument)
        if constant is not None:
            return session.apply_arithmetic(operation, constant)
        session.set_second_image("arithmetic", load_buffer(argument))
        return session.apply_arithmetic(operation)

    if operation in ("and", "or", "xor"):
        session.set_second_image("boolean", load_buffer(argument))
        return session.apply_boolean(operation)

    if operation == "rotate":
        return session.apply_rotation(argument or 90)

    if operation == "flip":
        return session.apply_flip(argument or "horizontal")

    raise ValueError(f"Invalid operation: {operation}")


def print_usage(registry=None):
    registry = registry or get_default_registry()

    print("Usage:")
    print("  python pixel_lab.py <input_image> <operation> [argument] [output_image]")
    for tag, title in USAGE_GROUPS:
        operation_types = registry.filter_by_tag(tag)
        print(f"\n{title}:")
        for name, (operation_type, hint, _) in OPERATIONS.items():
            if operation_type not in operation_types:
                continue
            meta = registry.get_metadata(operation_type)
            print(f"  {name + ' ' + hint:<36} - {meta['description']}")
    print("\nExamples:")
    print("  python pixel_lab.py input.png grayscale")
    print("  python pixel_lab.py input.png binary 100 output.png")
    print("  python pixel_lab.py input.png xor mask.png")


def main(argv=None):
    """Run the pixel tool. Returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)

    if len(args) < 2:
        print_usage()
        return 1

    input_path = args[0]
    operation = args[1].lower()

    if operation not in OPERATIONS:
        print(f"Error: Invalid operation '{operation}'")
        print(f"Valid options: {', '.join(OPERATIONS)}")
        return 1

    if not os.path.isfile(input_path):
        print(f"Error: {input_path} is not a valid file")
        return 1

    _, argument_hint, argument_required = OPERATIONS[operation]
    rest = args[2:]
    argument = rest.pop(0) if argument_hint and rest else None
    if argument_required and argument is None:
        print(f"Error: '{operation}' requires an argument")
        return 1

    # Determine output path
    if rest:
        output_path = rest[0]
    else:
        base, ext = os.path.splitext(input_path)
        output_path = f"{base}_{operation}{ext}"

    print(f"Applying {operation} to {input_path}...")
    try:
        session = EditSession(load_buffer(input_path))
        result = apply_operation(session, operation, argument)
        save_buffer(result, output_path, image_format=None)
    except (PixelEngineError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Saved {result.width}x{result.height} result to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
