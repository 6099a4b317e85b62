"""
Configuration settings for diff utilities.

This module provides centralized configuration for the diff engine. Defaults
can be overridden through environment variables.
"""

# Unified diff settings
DEFAULT_CONTEXT_LINES = 3         # Leading/trailing context lines around each hunk

# Edit application settings
DEFAULT_APPLY_CHUNK_SIZE = 64 * 1024  # Characters copied per read when applying edits

# Search settings
DEFAULT_LARGE_INPUT_THRESHOLD = 10000  # Units (n + m) above which the quadratic trace cost is logged

# Validation settings
DEFAULT_VALIDATE_PATCH = False    # Whether rendered diffs are re-applied and checked

# Environment variable names for configuration overrides
ENV_PREFIX = "EDITSCRIPT_DIFF_"
ENV_CONTEXT_LINES = f"{ENV_PREFIX}CONTEXT_LINES"
ENV_APPLY_CHUNK_SIZE = f"{ENV_PREFIX}APPLY_CHUNK_SIZE"
ENV_LARGE_INPUT_THRESHOLD = f"{ENV_PREFIX}LARGE_INPUT_THRESHOLD"
ENV_VALIDATE_PATCH = f"{ENV_PREFIX}VALIDATE_PATCH"

import os

def get_config_value(env_var: str, default_value):
    """
    Get a configuration value from environment variable or use default.

    Args:
        env_var: The environment variable name
        default_value: The default value to use if env var is not set

    Returns:
        The configuration value
    """
    value = os.environ.get(env_var)
    if value is None:
        return default_value

    # Try to convert to the same type as default_value
    try:
        if isinstance(default_value, bool):
            return value.lower() in ('true', 'yes', '1', 'y')
        elif isinstance(default_value, int):
            return int(value)
        elif isinstance(default_value, float):
            return float(value)
        else:
            return value
    except (ValueError, TypeError):
        return default_value

def get_context_lines():
    """Get the configured number of context lines for unified diffs."""
    context_lines = get_config_value(ENV_CONTEXT_LINES, DEFAULT_CONTEXT_LINES)
    return max(0, context_lines)

def get_apply_chunk_size():
    """Get the number of characters copied per read when applying edits."""
    chunk_size = get_config_value(ENV_APPLY_CHUNK_SIZE, DEFAULT_APPLY_CHUNK_SIZE)
    return chunk_size if chunk_size > 0 else DEFAULT_APPLY_CHUNK_SIZE

def get_large_input_threshold():
    """Get the input size above which a diff logs its memory cost."""
    return get_config_value(ENV_LARGE_INPUT_THRESHOLD, DEFAULT_LARGE_INPUT_THRESHOLD)

def is_patch_validation_enabled():
    """Check if rendered patches should be validated before being returned."""
    return get_config_value(ENV_VALIDATE_PATCH, DEFAULT_VALIDATE_PATCH)
