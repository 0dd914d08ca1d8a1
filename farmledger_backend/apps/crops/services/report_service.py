"""
Financial Report Service

Handles:
- Yearly profit/loss per crop
- Season breakdown
- Year summary totals
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from django.db import DatabaseError
from django.db.models import Sum
from django.utils import timezone

from apps.crops.models import Crop
from apps.finance.models import Expense, Income

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


class FinancialReportService:
    """Aggregates a farmer's expense and income rows per crop"""

    @staticmethod
    def empty_summary() -> Dict[str, Any]:
        return {
            'total_income': ZERO,
            'total_expense': ZERO,
            'net_profit': ZERO,
            'total_crops': 0,
            'total_area': ZERO,
        }

    @staticmethod
    def _totals_by_crop(model, crop_ids: Iterable[int]) -> Dict[int, Decimal]:
        rows = (
            model.objects
            .filter(crop_id__in=crop_ids)
            .values('crop_id')
            .annotate(total=Sum('amount'))
        )
        return {row['crop_id']: row['total'] or ZERO for row in rows}

    @staticmethod
    def yearly_report(user, year: Optional[int] = None) -> Dict[str, Any]:
        """
        Build the yearly financial report for a user.

        Area is summed as stored, without converting between units.

        Returns:
            {
                'year': int,
                'crops': [{..., 'income', 'expense', 'profit'}],
                'season_breakdown': {season: {income, expense, profit, crop_count, area}},
                'summary': {total_income, total_expense, net_profit, total_crops, total_area}
            }
        """
        year = year or timezone.localdate().year

        crops = list(Crop.objects.filter(user=user, year=year).order_by('created_at'))

        if not crops:
            return {
                'year': year,
                'crops': [],
                'season_breakdown': {},
                'summary': FinancialReportService.empty_summary(),
            }

        crop_ids = [crop.id for crop in crops]

        try:
            expense_totals = FinancialReportService._totals_by_crop(Expense, crop_ids)
            income_totals = FinancialReportService._totals_by_crop(Income, crop_ids)
        except DatabaseError as e:
            logger.exception(f"Report aggregation failed for user {user.id}, year {year}: {e}")
            expense_totals, income_totals = {}, {}

        crop_rows = []
        seasons = {}
        total_income = ZERO
        total_expense = ZERO
        total_area = ZERO

        for crop in crops:
            income = income_totals.get(crop.id, ZERO)
            expense = expense_totals.get(crop.id, ZERO)
            profit = income - expense

            crop_rows.append({
                'id': crop.id,
                'crop_name': crop.crop_name,
                'crop_emoji': crop.crop_emoji,
                'sub_type': crop.sub_type,
                'batch_label': crop.batch_label,
                'season': crop.season,
                'area': crop.area,
                'area_unit': crop.area_unit,
                'status': crop.status,
                'income': income,
                'expense': expense,
                'profit': profit,
            })

            total_income += income
            total_expense += expense
            total_area += crop.area

            season = seasons.setdefault(crop.season, {
                'income': ZERO,
                'expense': ZERO,
                'profit': ZERO,
                'crop_count': 0,
                'area': ZERO,
            })
            season['income'] += income
            season['expense'] += expense
            season['profit'] += profit
            season['crop_count'] += 1
            season['area'] += crop.area

        # Keep seasons in calendar order
        season_breakdown = {
            key: seasons[key]
            for key, _label in Crop.SEASON_CHOICES
            if key in seasons
        }

        return {
            'year': year,
            'crops': crop_rows,
            'season_breakdown': season_breakdown,
            'summary': {
                'total_income': total_income,
                'total_expense': total_expense,
                'net_profit': total_income - total_expense,
                'total_crops': len(crops),
                'total_area': total_area,
            },
        }
