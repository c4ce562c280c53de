from catalog import SupplementCatalog, SupplementRecord
from export import (
    export_analytics_csv,
    export_library_csv,
    export_stack_csv,
    to_csv,
)
from seed_data import BUDGET, MONTHLY_SPENDING, seed_catalog


def test_library_header_and_row_count():
    lines = export_library_csv(seed_catalog()).split("\n")
    assert lines[0] == "id,name,category,dosage,timing,costPerMonth,purpose,roi,notes,inCurrentStack,currentDosage"
    assert len(lines) == 9
    assert lines[1].startswith('"1","Vitamin D3","Essential Lifelong"')
    assert lines[1].endswith('"true","3000 IU"')


def test_falsy_values_export_empty():
    catalog = SupplementCatalog([SupplementRecord(id=1, name="Zinc", category="Wishlist")])
    row = export_library_csv(catalog).split("\n")[1]
    assert row == '"1","Zinc","Wishlist","","","","","","","",""'


def test_quotes_are_doubled():
    catalog = SupplementCatalog([
        SupplementRecord(id=1, name='The "good" stuff', category="Wishlist", notes="a, b"),
    ])
    row = export_library_csv(catalog).split("\n")[1]
    assert '"The ""good"" stuff"' in row
    assert '"a, b"' in row


def test_stack_export_only_members():
    text = export_stack_csv(seed_catalog())
    lines = text.split("\n")
    assert lines[0] == "name,currentDosage,costPerMonth,timing,purpose,startDate"
    assert [line.split(",")[0] for line in lines[1:]] == ['"Vitamin D3"', '"Whey Protein Concentrate"', '"Zinc"']
    assert lines[3].endswith('"2024-08-01"')


def test_empty_stack_exports_header_only():
    catalog = SupplementCatalog([SupplementRecord(id=1, name="Zinc", category="Wishlist")])
    assert export_stack_csv(catalog) == "name,currentDosage,costPerMonth,timing,purpose,startDate"


def test_analytics_export():
    lines = export_analytics_csv(MONTHLY_SPENDING, BUDGET).split("\n")
    assert lines == [
        "type,month,amount,supplements,monthly,yearly",
        '"Monthly Spending","Jul 2024","1900","3","",""',
        '"Monthly Spending","Aug 2024","2125","3","",""',
        '"Monthly Spending","Sep 2024","2125","3","",""',
        '"Budget","","","","3000","36000"',
    ]


def test_multiline_value_stays_quoted():
    text = to_csv([{"notes": "line one\nline two"}], ["notes"])
    assert text == 'notes\n"line one\nline two"'
