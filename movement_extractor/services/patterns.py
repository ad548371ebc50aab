"""
Static regex tables for receipt and invoice extraction.

Tables are compiled once at import and shared read-only across calls.
Label patterns target Mexican / Latin American invoices (RFC, folio, IVA).
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))


# Line keywords that anchor the labeled cascade tiers
TOTAL_LINE_PATTERN = re.compile(r'total', re.IGNORECASE)
DATE_LINE_PATTERN = re.compile(r'fecha|\bdate\b', re.IGNORECASE)

# A vendor capture stops at the tax ID or at the next field label
_VENDOR_END = r'(?=\s*(?:\bR\.?F\.?C\b|\b(?:fecha|folio|factura|subtotal|total|iva|tel)\b)|$)'

VENDOR_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='razon_social',
        pattern=r'raz[oó]n\s+social[:\s]*(.+?)' + _VENDOR_END,
        example='Razón Social: Cadena Comercial OXXO SA de CV',
        notes='Legal name on CFDI invoices',
    ),
    PatternSpec(
        name='empresa',
        pattern=r'empresa[:\s]*(.+?)' + _VENDOR_END,
        example='Empresa: OXXO',
    ),
    PatternSpec(
        name='proveedor',
        pattern=r'proveedor[:\s]*(.+?)' + _VENDOR_END,
        example='Proveedor: Farmacias Guadalajara',
    ),
    PatternSpec(
        name='expedido_por',
        pattern=r'expedido\s+por[:\s]*(.+?)' + _VENDOR_END,
        example='Expedido por: Telmex',
    ),
)

TAX_ID_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='rfc_labeled',
        pattern=r'R\.?F\.?C\.?[:\s]*([A-Z&Ñ]{3,4}\d{6}[A-Z0-9]{3})',
        example='RFC: CCO8605231N4',
    ),
    PatternSpec(
        name='rfc_bare',
        pattern=r'\b([A-Z&Ñ]{3,4}\d{6}[A-Z0-9]{3})\b',
        example='CCO8605231N4',
        notes='Unlabeled RFC shape; case-sensitive to avoid matching words',
        flags=0,
    ),
)

# Folio captures must contain a digit so labels like "Factura Electrónica" are skipped
_FOLIO_VALUE = r'([A-Z0-9\-]*\d[A-Z0-9\-]*)'

INVOICE_NUMBER_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='folio',
        pattern=r'folio[:\s]*' + _FOLIO_VALUE,
        example='Folio: A-12345',
    ),
    PatternSpec(
        name='factura',
        pattern=r'factura[:\s]*(?:no\.?|n[úu]m\.?)?[:\s]*' + _FOLIO_VALUE,
        example='Factura: 98765',
    ),
    PatternSpec(
        name='numero',
        pattern=r'n[úu]mero[:\s]*' + _FOLIO_VALUE,
        example='Número: 4521',
    ),
)

_NUMERIC_VALUE = r'\$?\s*([0-9,]+\.?[0-9]*)'

SUBTOTAL_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='subtotal',
        pattern=r'subtotal[:\s]*' + _NUMERIC_VALUE,
        example='Subtotal: $1,064.28',
    ),
    PatternSpec(
        name='base',
        pattern=r'\bbase[:\s]*' + _NUMERIC_VALUE,
        example='Base: 1064.28',
    ),
)

TAX_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='iva',
        pattern=r'\biva(?:\s*\(?\d{1,2}(?:\.\d+)?\s*%\)?)?[:\s]*' + _NUMERIC_VALUE,
        example='IVA 16%: $170.28',
        notes='Skips an inline rate so the percentage is not read as the amount',
    ),
    PatternSpec(
        name='impuesto',
        pattern=r'impuesto[:\s]*' + _NUMERIC_VALUE,
        example='Impuesto: 170.28',
    ),
    PatternSpec(
        name='rate_16',
        pattern=r'16%[:\s]*' + _NUMERIC_VALUE,
        example='16%: 170.28',
    ),
)
