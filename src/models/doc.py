"""Documentation record produced by a successful lookup."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Identifier of the unit every Go program implicitly imports.
BUILTIN_UNIT = "builtin"


class DocRecord(BaseModel):
    """Rendered declaration, doc comment, and position of one symbol."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Resolved identifier")
    declaration_text: str = Field(description="Canonical declaration signature")
    doc_text: str = Field(default="", description="Doc comment text, if any")
    position: str = Field(default="", description="file:line:column, if known")
    unit_name: str = Field(default=BUILTIN_UNIT)
    module_name: str = Field(default=BUILTIN_UNIT)

    def to_text(self) -> str:
        """Format the record for terminal output."""
        parts = [self.declaration_text]
        if self.doc_text:
            parts.append("")
            parts.append(self.doc_text.rstrip("\n"))
        if self.position:
            parts.append("")
            parts.append(self.position)
        return "\n".join(parts) + "\n"


__all__ = ["BUILTIN_UNIT", "DocRecord"]
