"""Core type definitions for cityhash_tools."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Bracket(StrEnum):
    """Length brackets, each hashed by its own strategy."""
    BYTE_FOLD = "byte-fold"
    QUAD_WORD = "quad-word"
    SIX_WORD = "six-word"
    MAIN_LOOP = "main-loop"


class DigestResult(BaseModel):
    """Digest of a single input."""
    source: str = Field(..., description="Input description (path, string or hex)")
    length: int = Field(..., ge=0, description="Input length in bytes")
    digest: int = Field(..., ge=0, le=0xFFFFFFFF, description="32-bit digest")
    bracket: Bracket = Field(..., description="Strategy used for this length")
    iterations: int = Field(0, ge=0, description="Main loop iterations")

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hex(self) -> str:
        """Digest as 0x-prefixed, zero-padded hex."""
        return f"0x{self.digest:08x}"
