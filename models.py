from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Merchant configuration, as stored under metafields/<namespace>/<key>
class DiscountConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    products: List[str] = Field(min_length=1)
    minQty: int = Field(gt=0)
    percentOff: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("minQty", "percentOff", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

# Cart snapshot
class ProductRef(BaseModel):
    id: Optional[str] = None

class Merchandise(BaseModel):
    product: Optional[ProductRef] = None

class CartLine(BaseModel):
    id: str
    quantity: int = Field(ge=0)
    merchandise: Optional[Merchandise] = None

    @property
    def productId(self) -> Optional[str]:
        if self.merchandise is None or self.merchandise.product is None:
            return None
        return self.merchandise.product.id

class Cart(BaseModel):
    lines: List[CartLine] = []

class Metafield(BaseModel):
    value: Optional[str] = None

class DiscountNode(BaseModel):
    metafield: Optional[Metafield] = None

class RunInput(BaseModel):
    discountNode: Optional[DiscountNode] = None
    cart: Cart

    @property
    def metafieldValue(self) -> Optional[str]:
        if self.discountNode is None or self.discountNode.metafield is None:
            return None
        return self.discountNode.metafield.value

class StoredRunInput(BaseModel):
    cart: Cart

# Evaluator decision
class VolumeDiscount(BaseModel):
    model_config = ConfigDict(frozen=True)

    targets: List[str]
    percentOff: float
    message: str

# Discount application output
class CartLineRef(BaseModel):
    id: str

class DiscountTarget(BaseModel):
    cartLine: CartLineRef

class Percentage(BaseModel):
    value: str  # number rendered as a string

class DiscountValue(BaseModel):
    percentage: Percentage

class DiscountApplication(BaseModel):
    targets: List[DiscountTarget]
    value: DiscountValue
    message: str

class FunctionRunResult(BaseModel):
    discountApplicationStrategy: Optional[str] = None
    discounts: List[DiscountApplication] = []
