"""
Common/Shared Fixtures

Base factories and generators used across multiple test layers.
"""
import uuid
from typing import Optional


def make_suffix() -> str:
    """Short unique suffix for names"""
    return uuid.uuid4().hex[:8]


def make_filename(prefix: Optional[str] = None, extension: str = "png") -> str:
    """Generate a unique upload filename"""
    prefix = prefix or f"cover {make_suffix()}"
    return f"{prefix}.{extension}"
