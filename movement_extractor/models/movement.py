"""
Pydantic models for extracted movements.
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Any, Dict, Literal
import datetime
from decimal import Decimal

from movement_extractor.utils.money import MIN_AMOUNT, MAX_AMOUNT

EXPENSE = "expense"


class MovementConfidence(BaseModel):
    """Per-field confidence (0-100) plus the overall mean."""
    model_config = ConfigDict(frozen=True)

    amount: Optional[int] = Field(default=None, ge=0, le=100)
    date: Optional[int] = Field(default=None, ge=0, le=100)
    vendor: Optional[int] = Field(default=None, ge=0, le=100)
    overall: int = Field(default=0, ge=0, le=100)


class ExtractedMovement(BaseModel):
    """
    Structured movement extracted from a receipt or invoice.

    Every recognized document is treated as spending, so transaction_type
    is always "expense" whatever the source of the payload.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    amount: Optional[Decimal] = Field(default=None, ge=MIN_AMOUNT, le=MAX_AMOUNT)
    date: Optional[datetime.date] = None
    vendor: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    transaction_type: Literal["expense"] = EXPENSE

    # Auxiliary invoice fields (unscored)
    tax_id: Optional[str] = None
    invoice_number: Optional[str] = None
    subtotal: Optional[Decimal] = Field(default=None, ge=MIN_AMOUNT, le=MAX_AMOUNT)
    tax: Optional[Decimal] = Field(default=None, ge=MIN_AMOUNT, le=MAX_AMOUNT)

    confidence: MovementConfidence = Field(default_factory=MovementConfidence)

    @field_validator('transaction_type', mode='before')
    @classmethod
    def _force_expense(cls, value: Any) -> str:
        return EXPENSE

    @field_serializer('amount', 'subtotal', 'tax', when_used='json')
    def _serialize_money(self, value: Optional[Decimal]) -> Optional[float]:
        return float(value) if value is not None else None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'ExtractedMovement':
        """
        Validate a payload produced by another extraction path.

        Accepts both camelCase and snake_case keys.
        """
        return cls.model_validate(payload)

    def to_dict(self) -> Dict[str, Any]:
        """Plain key/value form for API responses; unknown fields are omitted."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)
