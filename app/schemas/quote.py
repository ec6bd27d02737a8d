# app/schemas/quote.py

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """
    Cotação como a AwesomeAPI devolve. Os números chegam como string
    ("5.2345") e continuam string: nada é convertido para float/Decimal.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    code: str
    codein: str
    name: str
    high: str
    low: str
    var_bid: str = Field(alias="varBid")
    pct_change: str = Field(alias="pctChange")
    bid: str
    ask: str
    timestamp: str
    create_date: str


class EconomiaUSDBRL(BaseModel):
    usdbrl: Quote = Field(alias="USDBRL")


class DollarPrice(BaseModel):
    bid: str
