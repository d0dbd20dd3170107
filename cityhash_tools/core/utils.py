"""Shared utilities for cityhash-tools."""

from __future__ import annotations

import sys
from pathlib import Path

MAX_DIGEST = 0xFFFFFFFF


def hexlify(data: bytes, upper: bool = False) -> str:
    """Convert bytes to hex string.

    Args:
        data: Binary data to convert
        upper: Use uppercase hex if True, lowercase if False

    Returns:
        Hex string representation of the data

    Example:
        >>> hexlify(b"hello")
        '68656c6c6f'
        >>> hexlify(b"hello", upper=True)
        '68656C6C6F'
    """
    result = data.hex()
    return result.upper() if upper else result


def unhexlify(hex_str: str) -> bytes:
    """Convert hex string to bytes.

    Whitespace between byte pairs is ignored.

    Raises:
        ValueError: If hex_str contains invalid hex characters

    Example:
        >>> unhexlify('68656c6c6f')
        b'hello'
    """
    return bytes.fromhex(hex_str)


def format_size(size: int) -> str:
    """Format byte size as human-readable string.

    Example:
        >>> format_size(1024)
        '1.0 KB'
        >>> format_size(1536)
        '1.5 KB'
    """
    if size < 0:
        return "0 B"

    size_float = float(size)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_float < 1024.0:
            if unit == "B":
                return f"{int(size_float)} {unit}"
            return f"{size_float:.1f} {unit}"
        size_float /= 1024.0
    return f"{size_float:.1f} PB"


def format_digest(value: int, style: str = "hex") -> str:
    """Render a 32-bit digest.

    Args:
        value: Digest value
        style: "hex" for eight lower-case hex digits, "decimal" for base 10

    Returns:
        Formatted digest

    Raises:
        ValueError: If style is unknown
    """
    if style == "hex":
        return f"{value:08x}"
    if style == "decimal":
        return str(value)
    raise ValueError(f"Unknown digest style: {style}")


def parse_digest(text: str, style: str | None = None) -> int:
    """Parse a 32-bit digest written as hex or decimal.

    A ``0x`` prefix always means hex. Otherwise style decides; without a
    style, values containing the letters a-f are hex and digit-only values
    are decimal.

    Args:
        text: Digest string
        style: "hex", "decimal" or None to detect from the text

    Returns:
        Digest value

    Raises:
        ValueError: If the text is not a valid 32-bit digest

    Example:
        >>> parse_digest("0xdc56d17a")
        3696677242
        >>> parse_digest("dc56d17a")
        3696677242
        >>> parse_digest("59987474")
        59987474
        >>> parse_digest("59987474", "hex")
        1503163508
    """
    value_str = text.strip().lower()
    if not value_str:
        raise ValueError("Empty digest")

    if value_str.startswith("0x"):
        value_str = value_str[2:]
        base = 16
    elif style == "hex":
        base = 16
    elif style == "decimal":
        base = 10
    elif style is None:
        base = 16 if any(ch in "abcdef" for ch in value_str) else 10
    else:
        raise ValueError(f"Unknown digest style: {style}")

    try:
        value = int(value_str, base)
    except ValueError as e:
        raise ValueError(f"Invalid digest: {text}") from e

    if not 0 <= value <= MAX_DIGEST:
        raise ValueError(f"Digest out of 32-bit range: {text}")
    return value


def read_input(path: Path | str, max_size: int = 0) -> bytes:
    """Read a whole input into memory.

    Args:
        path: File path, or "-" for standard input
        max_size: Largest accepted size in bytes, 0 for no limit

    Returns:
        File content

    Raises:
        OSError: If the file cannot be read
        ValueError: If the input is larger than max_size
    """
    if str(path) == "-":
        data = sys.stdin.buffer.read()
    else:
        file_path = Path(path)
        if max_size and file_path.stat().st_size > max_size:
            raise ValueError(
                f"{file_path} is larger than the {format_size(max_size)} limit"
            )
        data = file_path.read_bytes()

    if max_size and len(data) > max_size:
        raise ValueError(f"Input is larger than the {format_size(max_size)} limit")
    return data
