from __future__ import annotations

from artifacts.models.artifacts.source import SourceFile
from logic.transformations import (
    extract_data_transformations,
    infer_aggregate_purpose,
    infer_transform_purpose,
)


def _files(*texts: str) -> list[SourceFile]:
    return [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]


def test_map_to_object_lists_output_fields() -> None:
    text = (
        "var rows = employees.map(function(employee) {\n"
        "  return { name: employee.name, email: employee.email };\n"
        "});\n"
    )

    (transform,) = extract_data_transformations(_files(text))

    assert transform.id == "T1"
    assert transform.name == "Data Mapping Transformation"
    assert transform.description == "Transforms each Employee into a new format"
    assert transform.input_format == "Array of Employee objects"
    assert transform.output_format == "Objects with: Name, Email"
    assert transform.business_purpose == (
        "Extracts and formats employee/user information for display or notification"
    )


def test_arrow_map_returning_object_literal() -> None:
    text = "var out = rows.map(row => ({ status: row[4], days: row[3] }));"

    (transform,) = extract_data_transformations(_files(text))

    assert transform.output_format == "Objects with: Status, Days"
    assert transform.input_format == "Array of Row objects"


def test_trivial_map_is_skipped() -> None:
    assert extract_data_transformations(_files("const ids = rows.map(row => row[0]);")) == []


def test_reduce_aggregation() -> None:
    text = (
        "var total = items.reduce(function(sum, item) {\n"
        "  return sum + item.amount;\n"
        "}, 0);\n"
    )

    (transform,) = extract_data_transformations(_files(text))

    assert transform.name == "Data Aggregation"
    assert transform.description == "Aggregates Item items into Sum"
    assert transform.output_format == "Aggregated value"
    assert transform.business_purpose == "Calculates total sum of values"


def test_reduce_into_object() -> None:
    text = "var byTeam = rows.reduce((acc, row) => { acc[row[0]] = row; return acc; }, {});"

    (transform,) = extract_data_transformations(_files(text))

    assert transform.output_format == "Aggregated object"


def test_filter_with_business_condition() -> None:
    text = (
        "var pending = requests.filter(function(r) {\n"
        "  return r.status === 'pending';\n"
        "});\n"
    )

    (transform,) = extract_data_transformations(_files(text))

    assert transform.name == "Data Filtering"
    assert transform.description == "Filters R items based on business criteria"
    assert transform.business_purpose == "Selects only items where: r's status equals pending"


def test_arrow_filter_without_business_terms_is_skipped() -> None:
    assert extract_data_transformations(_files("xs.filter(x => x > 2);")) == []


def test_object_reshaping() -> None:
    text = "var result = { days: request.days };"

    (transform,) = extract_data_transformations(_files(text))

    assert transform.name == "Data Restructuring"
    assert transform.description == "Restructures Request data into Result format"


def test_ids_follow_family_order() -> None:
    files = _files(
        "var pending = requests.filter(r => r.status === 'pending');",
        "var rows = employees.map(e => ({ email: e.email }));",
    )

    transforms = extract_data_transformations(files)

    assert [(t.id, t.name) for t in transforms] == [
        ("T1", "Data Mapping Transformation"),
        ("T2", "Data Filtering"),
    ]


def test_purpose_helpers() -> None:
    assert infer_transform_purpose("x.toFixed(2)", "price") == (
        "Transforms Price data into required format"
    )
    assert infer_aggregate_purpose("acc.push(x)", "acc") == "Aggregates data into Acc"
    assert infer_aggregate_purpose("acc[key].push(x)", "acc") == (
        "Groups items by category or key"
    )
