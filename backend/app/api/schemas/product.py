"""Pydantic models describing Product payloads."""

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """Body accepted when creating a product."""

    name: str = Field(..., examples=["Teclado Red Dragon"])
    price: float = Field(..., gt=0, examples=[322])


class ProductUpdate(ProductCreate):
    """Body accepted when replacing a product."""

    availability: bool = Field(..., examples=[True])


class ProductRead(BaseModel):
    id: int = Field(..., description="Product Id", examples=[1])
    name: str = Field(..., description="Product Name", examples=["Mouse Logitech ZZW20"])
    price: float = Field(..., description="Product Price", examples=[342])
    availability: bool = Field(
        True, description="Product Availability", examples=[True]
    )

    model_config = {"from_attributes": True}


class ResponseWithDataSingle(BaseModel):
    data: ProductRead


class ResponseWithDataMulti(BaseModel):
    data: list[ProductRead]


class ResponseWithMessage(BaseModel):
    data: str = Field(..., examples=["Producto Eliminado"])
