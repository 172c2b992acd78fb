"""
Constants and configuration values for Pixel Lab.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Pixel buffer layout
CHANNELS_PER_PIXEL = 4
CHANNEL_MIN = 0
CHANNEL_MAX = 255
BUFFER_MODE = "RGBA"

# Luminance weights (R, G, B)
LUMA_RED = 0.299
LUMA_GREEN = 0.587
LUMA_BLUE = 0.114

# Operation defaults
DEFAULT_BINARY_THRESHOLD = 128
DEFAULT_BRIGHTNESS_DELTA = 0
BRIGHTNESS_MIN = -100
BRIGHTNESS_MAX = 100
DEFAULT_ARITHMETIC_CONSTANT = 0.0
DEFAULT_ROTATION_DEGREES = 90
DEFAULT_FLIP_DIRECTION = "horizontal"

# Pixel matrix view
DEFAULT_MATRIX_SIZE = 100
LIGHT_BACKGROUND_THRESHOLD = 180

# Search result statuses
SEARCH_FOUND = "found"
SEARCH_OUT_OF_RANGE = "out_of_range"
SEARCH_NOT_VISIBLE = "not_visible"

# Arithmetic modes
ARITHMETIC_MODE_CONSTANT = "constant"
ARITHMETIC_MODE_IMAGE = "image"

# Operation node types
NODE_TYPE_GRAYSCALE = "Grayscale"
NODE_TYPE_BINARY = "Binary"
NODE_TYPE_BRIGHTNESS = "Brightness"
NODE_TYPE_ARITHMETIC = "Arithmetic"
NODE_TYPE_BOOLEAN = "Boolean"
NODE_TYPE_ROTATE = "Rotate"
NODE_TYPE_FLIP = "Flip"

# Node field names
FIELD_NODE_ID = "id"
FIELD_NODE_TYPE = "type"

# Session tabs
TAB_GRAYSCALE = "grayscale"
TAB_BINARY = "binary"
TAB_BRIGHTNESS = "brightness"
TAB_ARITHMETIC = "arithmetic"
TAB_BOOLEAN = "boolean"
TAB_GEOMETRY = "geometry"
SESSION_TABS = (
    TAB_GRAYSCALE,
    TAB_BINARY,
    TAB_BRIGHTNESS,
    TAB_ARITHMETIC,
    TAB_BOOLEAN,
    TAB_GEOMETRY,
)
SECOND_IMAGE_TABS = (TAB_ARITHMETIC, TAB_BOOLEAN)

# File naming
DEFAULT_OUTPUT_FORMAT = "PNG"
