"""Column metadata model."""

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import ColumnType


class ColumnMeta(BaseModel):
    """One result column as declared (or inferred) from the first page."""

    name: str = Field(..., min_length=1)
    declared_type: str | None = None
    ordinal: int = Field(..., ge=0)
    type_code: int | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def column_type(self) -> ColumnType:
        """Canonical type resolved from the declared type name."""
        return ColumnType.from_declared(self.declared_type)

    def same_shape(self, other: "ColumnMeta") -> bool:
        """Whether two columns describe the same slot of the result.

        Declared types are only compared when both sides declare one.
        """
        if self.name != other.name or self.ordinal != other.ordinal:
            return False
        if self.declared_type is None or other.declared_type is None:
            return True
        return self.declared_type.upper() == other.declared_type.upper()
