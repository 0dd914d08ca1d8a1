# apps/finance/urls.py

from django.urls import path
from . import views

app_name = 'finance'

urlpatterns = [
    # Expenses
    path('expenses/', views.ExpenseListCreateView.as_view(), name='expense_list'),
    path('expenses/<int:pk>/', views.ExpenseDetailView.as_view(), name='expense_detail'),

    # Income
    path('income/', views.IncomeListCreateView.as_view(), name='income_list'),
    path('income/summary/', views.income_summary, name='income_summary'),
    path('income/<int:pk>/', views.IncomeDetailView.as_view(), name='income_detail'),
]
