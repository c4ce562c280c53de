"""
Bootstrap data loaded once per session: supplements, goals, spending history,
budget and the pre-authored recommendations.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from catalog import SupplementCatalog, SupplementRecord
from config import MONTHLY_BUDGET, YEARLY_BUDGET


@dataclass(frozen=True)
class Goal:
    id: str
    name: str
    target: str
    progress: str
    active: bool


@dataclass(frozen=True)
class MonthlySpending:
    month: str
    amount: int
    supplements: int


@dataclass(frozen=True)
class Budget:
    monthly: int = MONTHLY_BUDGET
    yearly: int = YEARLY_BUDGET


@dataclass(frozen=True)
class Recommendation:
    supplement: str
    reason: str
    roi: str
    budget_impact: str
    priority: str


def seed_supplements() -> List[SupplementRecord]:
    return [
        SupplementRecord(
            id=1,
            name="Vitamin D3",
            category="Essential Lifelong",
            dosage="2000-4000 IU daily",
            mega_dosing="Can go up to 10,000 IU short-term with monitoring",
            timing="With fat-containing meal for better absorption",
            cost_per_month=300,
            cost_range="₹200-400",
            roi="Excellent - cheap, proven benefits for bone health, immune system",
            purpose="Bone health, immune support, hormone optimization",
            notes="One of the most cost-effective supplements. Get blood levels tested.",
            in_current_stack=True,
            current_dosage="3000 IU",
            start_date="2024-07-15",
            goals=["general_health", "hormone_optimization"],
            evidence_rating=5,
        ),
        SupplementRecord(
            id=2,
            name="Whey Protein Concentrate",
            category="Essential Lifelong",
            dosage="20-30g per serving",
            mega_dosing="Not applicable - use as needed for protein targets",
            timing="Post-workout or throughout day to meet protein goals",
            cost_per_month=1600,
            cost_range="₹1200-2000",
            roi="Good - helps meet protein targets cost-effectively",
            purpose="Muscle building, convenient protein source",
            notes="Compared Indian market options for best protein-to-cost ratio",
            in_current_stack=True,
            current_dosage="25g daily",
            start_date="2024-07-15",
            goals=["muscle_gain", "fat_loss"],
            evidence_rating=5,
        ),
        SupplementRecord(
            id=3,
            name="Ashwagandha",
            category="Goal-Specific",
            dosage="300-600mg daily",
            mega_dosing="Up to 1000mg for stress management",
            timing="Evening or before bed to avoid sedation",
            cost_per_month=600,
            cost_range="₹400-800",
            roi="Moderate - good for stress and potentially testosterone",
            purpose="Stress reduction, sleep quality, testosterone support",
            notes="Researched for natural testosterone boosting",
            goals=["hormone_optimization", "stress_management"],
            evidence_rating=4,
        ),
        SupplementRecord(
            id=4,
            name="L-Carnitine",
            category="Goal-Specific",
            dosage="2-3g daily",
            mega_dosing="Not recommended above 3g",
            timing="Pre-workout or with meals",
            cost_per_month=1000,
            cost_range="₹800-1200",
            roi="Situational - makes sense during fat loss phases",
            purpose="Fat oxidation, exercise performance",
            notes="Considering for weight loss challenge. ROI depends on goals.",
            goals=["fat_loss", "performance"],
            evidence_rating=3,
        ),
        SupplementRecord(
            id=5,
            name="Zinc",
            category="Essential Lifelong",
            dosage="10-15mg daily",
            mega_dosing="Max 30mg, can interfere with copper absorption",
            timing="Empty stomach or 2 hours after meals",
            cost_per_month=225,
            cost_range="₹150-300",
            roi="Good - cheap and important for immunity and hormones",
            purpose="Immune function, testosterone support, wound healing",
            notes="Compared options focusing on absorption and price",
            in_current_stack=True,
            current_dosage="12mg",
            start_date="2024-08-01",
            goals=["general_health", "hormone_optimization"],
            evidence_rating=5,
        ),
        SupplementRecord(
            id=6,
            name="Pre-workout Supplement",
            category="Wishlist",
            dosage="As per label instructions",
            mega_dosing="Not recommended - follow label",
            timing="30 minutes before training",
            cost_per_month=1250,
            cost_range="₹1000-1500",
            roi="Unknown - need to research specific ingredients",
            purpose="Enhanced training performance and focus",
            notes="Interested for cardio and weight training performance",
            goals=["performance", "fat_loss"],
            evidence_rating=3,
        ),
        SupplementRecord(
            id=7,
            name="5-HTP",
            category="Uncertain/Trial",
            dosage="100-300mg daily",
            mega_dosing="Not recommended above 300mg",
            timing="Evening, away from protein meals",
            cost_per_month=750,
            cost_range="₹600-900",
            roi="Uncertain - need more research on effectiveness",
            purpose="Sleep quality, mood support, appetite control",
            notes="Researched but unsure about adding to stack",
            goals=["sleep_quality", "fat_loss"],
            evidence_rating=3,
        ),
        SupplementRecord(
            id=8,
            name="Rauwolscine/Alpha-Yohimbine",
            category="Uncertain/Trial",
            dosage="0.2mg per kg bodyweight",
            mega_dosing="Not recommended - can cause side effects",
            timing="Fasted state, pre-cardio",
            cost_per_month=1000,
            cost_range="₹800-1200",
            roi="Uncertain - limited evidence for fat loss",
            purpose="Stubborn fat loss, pre-workout energy",
            notes="Researched with product links, but uncertain about effectiveness",
            goals=["fat_loss"],
            evidence_rating=2,
        ),
    ]


GOALS = [
    Goal("fat_loss", "Fat Loss", "Lose 18kg fat", "6kg lost", True),
    Goal("muscle_gain", "Muscle Gain", "Maintain/gain muscle during cut", "Maintaining", True),
    Goal("general_health", "General Health", "Optimize health markers", "On track", True),
    Goal("hormone_optimization", "Hormone Optimization", "Optimize testosterone naturally", "In progress", False),
    Goal("performance", "Performance", "Improve workout performance", "Gradual improvement", False),
]

MONTHLY_SPENDING = [
    MonthlySpending("Jul 2024", 1900, 3),
    MonthlySpending("Aug 2024", 2125, 3),
    MonthlySpending("Sep 2024", 2125, 3),
]

BUDGET = Budget()

RECOMMENDATIONS = [
    Recommendation(
        supplement="L-Carnitine",
        reason="Currently pursuing fat loss goal - 6kg lost out of 18kg target",
        roi="Good ROI during active fat loss phases",
        budget_impact="Would increase monthly spend to ₹3,125 (still under budget)",
        priority="High",
    ),
    Recommendation(
        supplement="Ashwagandha",
        reason="May support testosterone optimization and stress management",
        roi="Moderate - good for secondary goals",
        budget_impact="Would increase monthly spend to ₹2,725",
        priority="Medium",
    ),
]


def seed_catalog() -> SupplementCatalog:
    """Fresh catalog holding the bootstrap supplements."""
    return SupplementCatalog(seed_supplements())
