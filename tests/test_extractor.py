import pytest

from ducksearch.engine.extractor import extract_results, resolve_result_url
from ducksearch.engine.models import ResultRecord


def _page(*blocks: str) -> str:
    return "<html><body><div class=\"results\">" + "".join(blocks) + "</div></body></html>"


def _result(href: str | None, title: str = "Title", snippet: str | None = "Snippet") -> str:
    anchor = f'<a class="result__a" href="{href}">{title}</a>' if href is not None else ""
    body = f'<a class="result__snippet" href="#">{snippet}</a>' if snippet is not None else ""
    return f'<div class="result results_links"><h2 class="result__title">{anchor}</h2>{body}</div>'


def test_resolves_uddg_redirect_link() -> None:
    href = "/l/?kh=-1&uddg=https%3A%2F%2Fexample.com%2Fpath%3Fa%3D1%26b%3D2"
    assert resolve_result_url(href) == "https://example.com/path?a=1&b=2"


def test_falls_back_to_rut_parameter() -> None:
    assert resolve_result_url("/l/?rut=https%3A%2F%2Frut.example%2F") == "https://rut.example/"


def test_uddg_wins_over_rut() -> None:
    href = "/l/?rut=https%3A%2F%2Frut.example%2F&uddg=https%3A%2F%2Fuddg.example%2F"
    assert resolve_result_url(href) == "https://uddg.example/"


def test_protocol_relative_redirect_is_unwrapped() -> None:
    href = "//duckduckgo.com/l/?uddg=https%3A%2F%2Fexample.org%2F&rut=abc"
    assert resolve_result_url(href) == "https://example.org/"


@pytest.mark.parametrize(
    "href",
    [
        "/l/",
        "/l/?",
        "/l/?kh=1",
        "/l/?uddg=",
        "/l/?uddg=%ff%fe",
    ],
)
def test_unresolvable_relative_links_return_none(href: str) -> None:
    assert resolve_result_url(href) is None


def test_absolute_href_passes_through_unchanged() -> None:
    href = "https://example.com/a%20b?x=1"
    assert resolve_result_url(href) == href


def test_extracts_results_in_document_order() -> None:
    markup = _page(
        _result("https://one.example/", "One", "First"),
        _result("/l/?uddg=https%3A%2F%2Ftwo.example%2F", "Two", "Second"),
        _result("https://three.example/", "Three", "Third"),
    )

    assert extract_results(markup, 10) == [
        ResultRecord("One", "https://one.example/", "First"),
        ResultRecord("Two", "https://two.example/", "Second"),
        ResultRecord("Three", "https://three.example/", "Third"),
    ]


def test_stops_at_max_results() -> None:
    markup = _page(*(_result(f"https://example.com/{i}", f"R{i}") for i in range(6)))
    results = extract_results(markup, 4)
    assert [r.title for r in results] == ["R0", "R1", "R2", "R3"]


def test_skips_containers_without_link_or_title() -> None:
    markup = _page(
        _result(None),
        _result("https://blank.example/", title="   "),
        _result("/l/?kh=1", "No target"),
        _result("https://kept.example/", "Kept"),
    )

    results = extract_results(markup, 10)
    assert [r.url for r in results] == ["https://kept.example/"]


def test_missing_snippet_gives_empty_description() -> None:
    results = extract_results(_page(_result("https://example.com/", "Only title", None)), 10)
    assert results == [ResultRecord("Only title", "https://example.com/", "")]


def test_title_and_description_text_is_trimmed_and_flattened() -> None:
    block = (
        '<div class="result">'
        '<a class="result__a" href="https://example.com/">\n  Example <b>Domain</b>\n</a>'
        '<div class="result__snippet">  An <b>example</b> snippet. </div>'
        "</div>"
    )
    results = extract_results(_page(block), 10)
    assert results[0].title == "Example Domain"
    assert results[0].description == "An example snippet."


def test_uses_first_title_link_in_container() -> None:
    block = (
        '<div class="result">'
        '<a class="result__a" href="https://first.example/">First</a>'
        '<a class="result__a" href="https://second.example/">Second</a>'
        "</div>"
    )
    results = extract_results(_page(block), 10)
    assert results == [ResultRecord("First", "https://first.example/", "")]


def test_duplicate_urls_are_kept() -> None:
    markup = _page(_result("https://dup.example/", "A"), _result("https://dup.example/", "B"))
    assert len(extract_results(markup, 10)) == 2


def test_page_without_results_yields_empty_list() -> None:
    assert extract_results("<html><body><p>No results.</p></body></html>", 10) == []


def test_redirect_target_is_percent_decoded_exactly_once() -> None:
    href = "/l/?uddg=https%3A%2F%2Fexample.com%2Fa%2520b"
    assert resolve_result_url(href) == "https://example.com/a%20b"
