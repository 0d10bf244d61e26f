# app_inscriptions/models/base.py
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Text
from typing import Optional
from datetime import datetime, timezone


class StockageCle(SQLModel, table=True):
    """Entrée clé/valeur : une clé nommée, un contenu JSON sérialisé"""
    cle: str = Field(primary_key=True, max_length=100)
    valeur: str = Field(sa_column=Column(Text, nullable=False))
    modifie_le: Optional[datetime] = Field(default_factory=lambda: datetime.now(timezone.utc))
