from __future__ import annotations

import datetime as dt

import pytest

from scaffoldgen.rendering import functions
from scaffoldgen.rendering.engine import render_string


@pytest.mark.parametrize(
    ("function", "args", "expected"),
    [
        (functions.trim_suffix, ("-svc", "orders-svc"), "orders"),
        (functions.trim_prefix, ("api-", "api-orders"), "orders"),
        (functions.snakecase, ("HTTPServer",), "http_server"),
        (functions.snakecase, ("HelloWorld",), "hello_world"),
        (functions.kebabcase, ("hello_world",), "hello-world"),
        (functions.camelcase, ("http_server",), "HttpServer"),
        (functions.trunc, (3, "abcdef"), "abc"),
        (functions.trunc, (-2, "abcdef"), "ef"),
        (functions.abbrev, (5, "hello world"), "he..."),
        (functions.quote, ("a", 1), '"a" "1"'),
        (functions.indent, (2, "a\nb"), "  a\n  b"),
        (functions.nindent, (2, "a"), "\n  a"),
        (functions.div, (7, 2), 3),
        (functions.div, (-7, 2), -3),
        (functions.mod, (-7, 2), -1),
        (functions.default, ("x", ""), "x"),
        (functions.default, ("x", "y"), "y"),
        (functions.coalesce, (None, "", "z"), "z"),
        (functions.dict_, ("a", 1, "b", 2), {"a": 1, "b": 2}),
        (functions.uniq, ([1, 2, 1, 3],), [1, 2, 3]),
        (functions.join, ("-", [1, True, "x"]), "1-true-x"),
        (functions.to_yaml, ({"a": [1, 2]},), "a:\n- 1\n- 2"),
        (functions.to_yaml, ("x",), "x"),
        (functions.date, ("%Y-%m-%d", 0), "1970-01-01"),
        (functions.duration_seconds, ("1h30m",), 5400.0),
        (functions.duration_seconds, ("-1h30m",), -5400.0),
    ],
)
def test_helpers(function, args, expected) -> None:
    assert function(*args) == expected


def test_merge_prefers_earlier_mappings() -> None:
    merged = functions.merge({"a": 1, "n": {"x": 1}}, {"a": 2, "b": 3, "n": {"y": 2}})

    assert merged == {"a": 1, "b": 3, "n": {"x": 1, "y": 2}}


def test_date_modify_shifts_by_duration() -> None:
    assert functions.date_modify("24h", "2024-01-01T00:00:00") == dt.datetime(2024, 1, 2)


def test_invalid_duration_raises() -> None:
    with pytest.raises(ValueError, match="invalid duration"):
        functions.duration_seconds("soon")


def test_set_does_not_mutate_input() -> None:
    original = {"a": 1}

    assert functions.set_(original, "b", 2) == {"a": 1, "b": 2}
    assert original == {"a": 1}


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ('{{ name | trimSuffix("-svc") }}', "orders"),
        ('{{ trimSuffix("-svc", name) }}', "orders"),
        ('{{ name | replace("-", "_") }}', "orders_svc"),
        ("{{ name | upper }}", "ORDERS-SVC"),
        ('{{ list(1, 2, 3) | join(",") }}', "1,2,3"),
        ('{{ dict("a", 1).a }}', "1"),
        ("{{ hasPrefix('orders', name) }}", "true"),
        ("{{ add(1, 2, 3) }}", "6"),
    ],
)
def test_helpers_in_templates(template: str, expected: str) -> None:
    assert render_string(template, {"name": "orders-svc"}, "expr") == expected


def test_builtin_filters_keep_jinja_semantics() -> None:
    text = "a\nb"

    # the filter is Jinja2's own and leaves the first line alone
    assert render_string("{{ text | indent(2) }}", {"text": text}, "expr") == "a\n  b"
    assert render_string("{{ indent(2, text) }}", {"text": text}, "expr") == "  a\n  b"
    assert render_string('{{ join(",", ["x", "y"]) }}', {}, "expr") == "x,y"
    assert render_string('{{ ["x", "y"] | join(",") }}', {}, "expr") == "x,y"
