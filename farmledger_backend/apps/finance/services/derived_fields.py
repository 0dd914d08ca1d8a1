"""
Derived Field Calculator

Handles:
- Seed rate per kg
- Daily labour, machinery, crop sale and rental totals
- The effective monetary amount of an expense or income row
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional


TWO_PLACES = Decimal('0.01')

# amount is stored as DECIMAL(12, 2)
MAX_AMOUNT = Decimal('10000000000')


def to_decimal(value) -> Decimal:
    """Convert a JSON number to Decimal without float artifacts"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    if abs(value) >= MAX_AMOUNT:
        raise ValueError(f"Amount must be less than {MAX_AMOUNT:,}")
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class DerivedFieldCalculator:
    """Pure calculation service - no database operations"""

    # record_type -> derived key written into details
    DERIVED_FIELDS = {
        'seed': 'rate_per_kg',
        'labour_daily': 'total_cost',
        'machinery': 'total_cost',
        'crop_sale': 'total_amount',
        'rental_income': 'total_amount',
    }

    # record_type -> key holding the row's monetary value
    AMOUNT_FIELDS = {
        'seed': 'total_cost',
        'fertilizer': 'total_cost',
        'pesticide': 'cost',
        'labour_daily': 'total_cost',
        'labour_contract': 'amount_given',
        'machinery': 'total_cost',
        'crop_sale': 'total_amount',
        'subsidy': 'amount',
        'rental_income': 'total_amount',
        'other_income': 'amount',
    }

    @staticmethod
    def seed_rate_per_kg(total_cost, quantity_kg) -> Optional[Decimal]:
        """
        Price paid per kg of seed.

        Returns:
            Rounded rate, or None when no quantity was recorded
        """
        quantity_kg = to_decimal(quantity_kg)
        if quantity_kg <= 0:
            return None
        return round_money(to_decimal(total_cost) / quantity_kg)

    @staticmethod
    def labour_daily_total(number_of_people, days, daily_rate) -> Decimal:
        """
        Wage bill for daily labour: people x days x daily rate (not rounded).

        Raises:
            ValueError: If people or days is below 1
        """
        if to_decimal(number_of_people) < 1 or to_decimal(days) < 1:
            raise ValueError("number_of_people and days must be at least 1")
        return to_decimal(number_of_people) * to_decimal(days) * to_decimal(daily_rate)

    @staticmethod
    def machinery_total(hours_or_acres, rate) -> Decimal:
        return round_money(to_decimal(hours_or_acres) * to_decimal(rate))

    @staticmethod
    def crop_sale_total(quantity_kg, price_per_kg) -> Decimal:
        return round_money(to_decimal(quantity_kg) * to_decimal(price_per_kg))

    @staticmethod
    def rental_total(hours_or_days, rate_per_unit) -> Decimal:
        return round_money(to_decimal(hours_or_days) * to_decimal(rate_per_unit))

    @classmethod
    def _derive(cls, record_type: str, details: Dict[str, Any]) -> Optional[Decimal]:
        if record_type == 'seed':
            return cls.seed_rate_per_kg(details['total_cost'], details['quantity_kg'])
        if record_type == 'labour_daily':
            return cls.labour_daily_total(
                details['number_of_people'],
                details['days'],
                details['daily_rate']
            )
        if record_type == 'machinery':
            return cls.machinery_total(details['hours_or_acres'], details['rate'])
        if record_type == 'crop_sale':
            return cls.crop_sale_total(details['quantity_kg'], details['price_per_kg'])
        if record_type == 'rental_income':
            return cls.rental_total(details['hours_or_days'], details['rate_per_unit'])
        return None

    @classmethod
    def compute(cls, record_type: str, details: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return a copy of ``details`` with its derived field recomputed.

        Any derived value already present is discarded first, so stale or
        client-supplied values never survive. Applying it twice gives the
        same result.

        Raises:
            ValueError: If record_type is unknown or a raw field is missing
        """
        if record_type not in cls.AMOUNT_FIELDS:
            raise ValueError(f"Unknown record type: {record_type}")

        result = dict(details or {})
        derived_key = cls.DERIVED_FIELDS.get(record_type)
        if derived_key is None:
            return result

        result.pop(derived_key, None)
        try:
            value = cls._derive(record_type, result)
        except KeyError as e:
            raise ValueError(f"{record_type} is missing field {e.args[0]}")

        if value is not None:
            # JSON storage: keep numbers as numbers
            result[derived_key] = float(value)
        return result

    @classmethod
    def effective_amount(cls, record_type: str, details: Dict[str, Any]) -> Decimal:
        """Monetary value of a row, rounded to 2 places"""
        computed = cls.compute(record_type, details)
        value = computed.get(cls.AMOUNT_FIELDS[record_type])
        if value is None:
            return Decimal('0.00')
        return round_money(to_decimal(value))
