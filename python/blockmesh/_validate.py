# python/blockmesh/_validate.py
# Array and parameter validation helpers shared by buffers, textures, and config
# Exists to keep error messages consistent wherever numpy data crosses the API
# RELEVANT FILES: python/blockmesh/geometry.py, python/blockmesh/textures.py, python/blockmesh/config.py

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np


def is_c_contiguous(arr: np.ndarray) -> bool:
    """Check if a NumPy array is C-contiguous."""
    return arr.flags['C_CONTIGUOUS']


def validate_array(
    arr: np.ndarray,
    name: str,
    dtype: Optional[Sequence[type]] = None,
    ndim: Optional[int] = None,
    min_size: int = 0,
    require_contiguous: bool = True,
    context: str = ""
) -> np.ndarray:
    """
    Array validation with detailed error messages.

    Args:
        arr: NumPy array to validate
        name: Parameter name for error messages
        dtype: Allowed dtypes (None = any numeric)
        ndim: Expected number of dimensions (None = any)
        min_size: Minimum total array size
        require_contiguous: Require C-contiguous memory layout
        context: Additional context for error messages

    Returns:
        The validated array

    Raises:
        TypeError: Invalid array type
        ValueError: Invalid shape, dtype, or memory layout
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError(
            f"{name} must be numpy.ndarray, got {type(arr).__name__}. "
            f"Context: {context}"
        )

    if ndim is not None and arr.ndim != ndim:
        raise ValueError(
            f"{name} must be {ndim}D, got shape {arr.shape}. Context: {context}"
        )

    if arr.size < min_size:
        raise ValueError(
            f"{name} array too small: {arr.size} elements < {min_size} minimum. "
            f"Shape: {arr.shape}. Context: {context}"
        )

    if require_contiguous and not is_c_contiguous(arr):
        raise ValueError(
            f"{name} must be C-contiguous (row-major). "
            f"Use np.ascontiguousarray() to fix. Context: {context}"
        )

    if dtype:
        if arr.dtype not in dtype:
            valid_dtypes = [np.dtype(dt).name for dt in dtype]
            raise ValueError(
                f"{name} has invalid dtype: {arr.dtype}. "
                f"Expected one of: {valid_dtypes}. Context: {context}"
            )
    elif not np.issubdtype(arr.dtype, np.number):
        raise ValueError(
            f"{name} must have numeric dtype, got {arr.dtype}. "
            f"Context: {context}"
        )

    return arr


def validate_numeric_parameter(
    value: Any,
    name: str,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None,
    expected_type: type = float,
    exclusive_min: bool = False,
    context: str = ""
) -> Union[float, int]:
    """
    Validate numeric parameter with range checking.

    Args:
        value: Value to validate
        name: Parameter name for error messages
        min_val: Minimum allowed value (inclusive unless exclusive_min)
        max_val: Maximum allowed value (inclusive)
        expected_type: Expected return type (float or int)
        exclusive_min: Reject values equal to min_val
        context: Additional context for error messages

    Returns:
        Validated value converted to expected_type

    Raises:
        TypeError: Invalid type
        ValueError: Out of range
    """
    if isinstance(value, bool):
        raise TypeError(f"{name} must be numeric, got bool. Context: {context}")
    try:
        if expected_type == float:
            converted = float(value)
        elif expected_type == int:
            converted = int(value)
        else:
            raise ValueError(f"Unsupported expected_type: {expected_type}")
    except (TypeError, ValueError, OverflowError) as e:
        raise TypeError(
            f"{name} must be convertible to {expected_type.__name__}, "
            f"got {type(value).__name__}: {value}. Context: {context}"
        ) from e

    if expected_type == float and not np.isfinite(converted):
        raise ValueError(f"{name} must be finite, got {converted}. Context: {context}")

    if min_val is not None:
        if converted < min_val or (exclusive_min and converted == min_val):
            op = "<=" if exclusive_min else "<"
            raise ValueError(
                f"{name} too small: {converted} {op} {min_val}. Context: {context}"
            )

    if max_val is not None and converted > max_val:
        raise ValueError(
            f"{name} too large: {converted} > {max_val}. Context: {context}"
        )

    return converted
