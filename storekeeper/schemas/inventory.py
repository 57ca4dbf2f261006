from typing import Optional

from pydantic import Base64Bytes, BaseModel, ConfigDict


class ItemPayload(BaseModel):
    """JSON body for creating or patching an item.

    Every field is optional here; required-ness is checked by the provider so
    that explicit nulls reach it and fail with the offending field name.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    price: Optional[str] = None
    quantity: Optional[int] = None
    image: Optional[Base64Bytes] = None
    supplier_name: Optional[str] = None
    supplier_email: Optional[str] = None
    supplier_phone: Optional[str] = None

    def to_values(self) -> dict:
        return self.model_dump(exclude_unset=True)
