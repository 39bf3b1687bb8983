"""Pricing package: variant/price selection and currency conversion."""

from .exchange_rate import ExchangeRateService
from .selector import (
    VariantPrices,
    find_variant_prices,
    normalize_grading_company,
    select_best_price,
)

__all__ = [
    "ExchangeRateService",
    "VariantPrices",
    "find_variant_prices",
    "select_best_price",
    "normalize_grading_company",
]
