# apps/finance/services/income_summary.py

from decimal import Decimal

from django.db.models import Count, Sum
from apps.finance.models import Income


class IncomeSummaryService:

    @staticmethod
    def by_category(user, year=None):
        """
        Total income per category, largest first

        Args:
            user: User instance
            year: Optional calendar year to restrict to

        Returns:
            dict: {'year', 'summary': [{category, total_amount, count}], 'grand_total'}
        """
        incomes = Income.objects.filter(user=user)
        if year:
            incomes = incomes.filter(date__year=year)

        rows = (
            incomes
            .values('category')
            .annotate(total_amount=Sum('amount'), count=Count('id'))
            .order_by('-total_amount', 'category')
        )

        summary = [
            {
                'category': row['category'],
                'total_amount': row['total_amount'] or Decimal('0.00'),
                'count': row['count'],
            }
            for row in rows
        ]

        return {
            'year': year or 'all',
            'summary': summary,
            'grand_total': sum((row['total_amount'] for row in summary), Decimal('0.00')),
        }
