"""
Tests for the ExtractedMovement model.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from movement_extractor.models.movement import ExtractedMovement, MovementConfidence
from datetime import date
from decimal import Decimal
from pydantic import ValidationError
import pytest


class TestExtractedMovement:

    def test_defaults(self):
        movement = ExtractedMovement()
        assert movement.transaction_type == "expense"
        assert movement.confidence.overall == 0
        assert movement.amount is None

    def test_from_payload_accepts_camel_case(self):
        movement = ExtractedMovement.from_payload({
            "amount": "150.00",
            "date": "2024-03-15",
            "vendor": "OXXO",
            "taxId": "CCO8605231N4",
            "invoiceNumber": "A-12345",
            "confidence": {"amount": 95, "overall": 95},
        })
        assert movement.amount == Decimal("150.00")
        assert movement.date == date(2024, 3, 15)
        assert movement.tax_id == "CCO8605231N4"
        assert movement.confidence.amount == 95

    def test_transaction_type_is_always_expense(self):
        movement = ExtractedMovement.from_payload({"transactionType": "income"})
        assert movement.transaction_type == "expense"

    def test_amount_range(self):
        with pytest.raises(ValidationError):
            ExtractedMovement(amount=Decimal("0"))
        with pytest.raises(ValidationError):
            ExtractedMovement(amount=Decimal("1000000000.00"))
        assert ExtractedMovement(amount=Decimal("0.01")).amount == Decimal("0.01")

    def test_confidence_range(self):
        with pytest.raises(ValidationError):
            MovementConfidence(amount=101)

    def test_is_frozen(self):
        movement = ExtractedMovement(vendor="OXXO")
        with pytest.raises(ValidationError):
            movement.vendor = "Walmart"

    def test_to_dict_omits_absent_fields(self):
        movement = ExtractedMovement(
            amount=Decimal("1234.56"),
            date=date(2024, 3, 15),
            invoice_number="A-12345",
            confidence=MovementConfidence(amount=95, date=95, overall=95),
        )
        assert movement.to_dict() == {
            "amount": 1234.56,
            "date": "2024-03-15",
            "transactionType": "expense",
            "invoiceNumber": "A-12345",
            "confidence": {"amount": 95, "date": 95, "overall": 95},
        }
        assert isinstance(movement.to_dict()["amount"], float)

    def test_money_fields_serialize_as_numbers(self):
        movement = ExtractedMovement(
            amount=Decimal("1234.56"),
            subtotal=Decimal("1064.28"),
            tax=Decimal("170.28"),
        )
        data = movement.to_dict()
        assert data["subtotal"] == 1064.28
        assert data["tax"] == 170.28
        assert data["amount"] > 0
        # Python-mode dumps keep the exact Decimal
        assert movement.model_dump()["amount"] == Decimal("1234.56")
