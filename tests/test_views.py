import plotly.graph_objects as go

from catalog import SupplementCatalog, SupplementRecord
from seed_data import BUDGET, GOALS, MONTHLY_SPENDING, RECOMMENDATIONS, Budget, seed_catalog
from views import (
    analytics_view,
    cost_display,
    library_view,
    make_category_chart,
    make_spending_chart,
    recommendations_view,
    stack_card,
    stack_view,
    stale_views,
    supplement_card,
)


def test_library_buckets_follow_category_order():
    buckets = library_view(seed_catalog())
    assert list(buckets) == ["Essential Lifelong", "Goal-Specific", "Uncertain/Trial", "Wishlist"]
    assert [r.id for r in buckets["Essential Lifelong"]] == [1, 2, 5]


def test_library_skips_empty_buckets():
    buckets = library_view(seed_catalog(), "testosterone")
    assert list(buckets) == ["Essential Lifelong", "Goal-Specific"]
    assert [r.name for r in buckets["Goal-Specific"]] == ["Ashwagandha"]


def test_library_no_match():
    assert library_view(seed_catalog(), "no such thing") == {}


def test_stack_view():
    assert [r.id for r in stack_view(seed_catalog())] == [1, 2, 5]


def test_analytics_for_seed():
    data = analytics_view(seed_catalog(), BUDGET, MONTHLY_SPENDING)
    assert data.current_spending == 2125
    assert data.remaining == 875
    assert data.percentage == 71
    assert data.bar_percentage == 71
    assert data.progress_text == "71% of budget used"
    assert data.by_category == {"Essential Lifelong": 2125}
    assert len(data.monthly_spending) == 3


def test_analytics_clamps_bar_over_budget():
    catalog = seed_catalog()
    for record in catalog:
        catalog.set_stack_membership(record.id, True)
    data = analytics_view(catalog, Budget(monthly=3000, yearly=36000))
    assert data.current_spending == 6725
    assert data.percentage == 224
    assert data.bar_percentage == 100
    assert data.remaining == -3725
    assert list(data.by_category) == ["Essential Lifelong", "Goal-Specific", "Wishlist", "Uncertain/Trial"]


def test_analytics_empty_stack():
    catalog = SupplementCatalog([SupplementRecord(id=1, name="Zinc", category="Wishlist", cost_per_month=200)])
    data = analytics_view(catalog, BUDGET)
    assert data.current_spending == 0
    assert data.percentage == 0
    assert data.by_category == {}


def test_recommendations_are_static():
    data = recommendations_view(RECOMMENDATIONS, GOALS)
    assert [r.priority for r in data["recommendations"]] == ["High", "Medium"]
    assert [g.id for g in data["active_goals"]] == ["fat_loss", "muscle_gain", "general_health"]


def test_stale_views_dependency_table():
    assert stale_views({"stack"}, {"analytics"}) == ["analytics"]
    assert stale_views({"catalog"}, {"library", "summary"}) == ["library", "summary"]
    assert stale_views({"catalog", "stack"}, {"recommendations"}) == []


def test_cost_display_fallbacks():
    priced = SupplementRecord(id=1, name="A", category="Wishlist", cost_per_month=300)
    ranged = SupplementRecord(id=2, name="B", category="Wishlist", cost_range="₹100-200")
    bare = SupplementRecord(id=3, name="C", category="Wishlist")
    assert cost_display(priced) == "₹300"
    assert cost_display(ranged) == "₹100-200"
    assert cost_display(ranged, stack_card=True) == "Cost TBD"
    assert cost_display(bare) == "Cost TBD"


def test_cards_skip_empty_fields():
    record = SupplementRecord(id=9, name="Creatine", category="Goal-Specific", dosage="5g")
    card = supplement_card(record)
    assert [label for label, _ in card["info"]] == ["Dosage", "Cost per Month"]
    assert card["toggle_label"] == "Add to Stack"

    details = dict(stack_card(record)["details"])
    assert details["Timing"] == "N/A"
    assert stack_card(record)["current_dose"] == "Not specified"


def test_charts_build():
    assert isinstance(make_spending_chart(MONTHLY_SPENDING), go.Figure)
    assert len(make_spending_chart(MONTHLY_SPENDING).data) == 1
    assert len(make_spending_chart([]).data) == 0
    fig = make_category_chart({"Essential Lifelong": 2125, "Goal-Specific": 600})
    assert list(fig.data[0].labels) == ["Essential Lifelong", "Goal-Specific"]
    assert len(make_category_chart({}).data) == 0
