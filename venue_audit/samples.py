"""
Built-in demo snapshot for a mid-sized casual-dining venue.

``DEMO_RECORD`` is stored in the flat camelCase shape the dashboard sends,
so ``demo_audit_input()`` also exercises ``AuditInput.from_flat()``.
Used by ``venue-audit run-audit --demo`` and the end-to-end tests.
"""

from __future__ import annotations

from typing import Any

from venue_audit.models.audit_input import AuditInput

DEMO_RECORD: dict[str, Any] = {
    "venueType": "casual_dining",
    "source": "INTERNAL",
    # Food
    "actualFoodCostPct": 31.2,
    "theoreticalFoodCostPct": 28.5,
    "wastePct": 4.8,
    "menuStarsPct": 35,
    "menuPlowhorsePct": 30,
    "menuDogsCount": 4,
    "menuPuzzlesCount": 3,
    "supplierCount": 5,
    "supplierPriceCompare": True,
    "usePrepLists": True,
    "prepCompletionRate": 84,
    "monthlyFoodRevenue": 48_000,
    "monthlyFoodPurchases": 14_400,
    # Beverage
    "actualBevCostPct": 24,
    "deadStockPct": 7,
    "stocktakeVariancePct": 3.2,
    "listReviewDays": 95,
    "useCoravin": True,
    "coravinYieldPct": 88,
    "bevRevenueMixPct": 28,
    # Labour
    "labourCostPct": 29.5,
    "overtimeHoursWeekly": 4.5,
    "overtimeBudgetHours": 2,
    "awardCompliant": True,
    "casualLoadingApplied": True,
    "casualConversionOffered": False,
    "superRate": 11.5,
    "paysSuperOnTime": True,
    "staffCount": 14,
    "casualCount": 6,
    "coversPerDay": 120,
    "fatigueCompliant": True,
    "breakCompliant": True,
    "monthlyLabourCost": 23_600,
    # Overhead
    "totalOverheadPct": 24,
    "rentPct": 13,
    "primeCostPct": 66,
    "netProfitPct": 7.5,
    "breakEvenDayOfMonth": 19,
    "pnlDataCompletePct": 75,
    "monthlyRevenue": 80_000,
    "monthlyRent": 10_400,
    # Service
    "voidRatePct": 1.8,
    "avgServiceMinutes": 16,
    "paymentEfficiencyScore": 90,
    "discountPct": 3.2,
    "cashVariancePct": 2.8,
    # Marketing
    "campaignsPerMonth": 1,
    "emailOpenRate": 22,
    "roas": 3.5,
    "quietNightsTargeted": False,
    "repeatCustomerPct": 35,
    "databaseSize": 1_200,
    "monthlyMarketingSpend": 500,
    # Compliance
    "liquorLicenseCurrent": True,
    "foodSafetyCertCurrent": True,
    "rsaCurrent": True,
    "workersCompCurrent": True,
    "stpPhase2Compliant": True,
    "payslipCompliant": True,
    "rightToDisconnectPolicy": False,
    "inductionRecordsComplete": True,
    "recordRetentionYears": 7,
    "writtenContracts": True,
    "prevScores": {
        "food": 79,
        "beverage": 76,
        "labour": 73,
        "overhead": 74,
        "service": 86,
        "marketing": 62,
        "compliance": 91,
    },
}


def demo_audit_input() -> AuditInput:
    """Return the demo snapshot as a validated ``AuditInput``."""
    return AuditInput.from_flat(DEMO_RECORD)
