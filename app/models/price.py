# app/models/price.py

from sqlalchemy import Column, Integer, Text

from app.core.database import Base


class Price(Base):
    """
    Cópia integral de cada cotação USD-BRL buscada na AwesomeAPI.
    Todos os campos são texto, exatamente como vieram do upstream.
    """
    __tablename__ = "prices"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)

    code = Column(Text)
    codein = Column(Text)
    name = Column(Text)
    high = Column(Text)
    low = Column(Text)
    # Nomes de coluna iguais às chaves do JSON da AwesomeAPI
    var_bid = Column("varBid", Text)
    pct_change = Column("pctChange", Text)
    bid = Column(Text)
    ask = Column(Text)
    timestamp = Column(Text)
    create_date = Column(Text)

    def __repr__(self):
        return f"<Price(id={self.id}, code={self.code}, codein={self.codein}, bid={self.bid})>"
