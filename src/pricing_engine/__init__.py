from src.pricing_engine.models import PricedCompetitor, PricingRules, SalaryFactors
from src.pricing_engine.salary_calculator import SalaryCalculator
from src.pricing_engine.salary_service import SalaryService

__all__ = [
    "PricedCompetitor",
    "PricingRules",
    "SalaryCalculator",
    "SalaryFactors",
    "SalaryService",
]
