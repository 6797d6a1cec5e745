from bs4 import BeautifulSoup

from pagefetch.finalizer import build_document, failed_document, to_outcome
from pagefetch.html_cleaner import remove_unwanted_elements
from pagefetch.markdown import parse_markdown
from pagefetch.metadata import extract_metadata
from pagefetch.options import ExtractorOptions, PageOptions
from pagefetch.results import AttemptOutcome, BackendResult, PageStatus

PAGE = """
<html lang="en">
  <head>
    <title> Example Page </title>
    <meta name="description" content="An example">
    <meta property="og:title" content="OG Example">
    <meta property="og:locale:alternate" content="fr_FR">
    <meta property="og:locale:alternate" content="de_DE">
    <style>body { color: red }</style>
  </head>
  <body>
    <nav>Home | About</nav>
    <main><h1>Heading</h1><p>Main body text.</p></main>
    <div class="ads">Buy now</div>
    <script>alert(1)</script>
    <footer>Copyright</footer>
  </body>
</html>
"""


def test_cleaner_drops_scripts_and_chrome():
    cleaned = remove_unwanted_elements(PAGE, PageOptions())

    assert "Main body text." in cleaned
    for gone in ("alert(1)", "color: red", "Home | About", "Buy now", "Copyright", "<title>"):
        assert gone not in cleaned


def test_cleaner_keeps_chrome_when_not_only_main_content():
    cleaned = remove_unwanted_elements(PAGE, PageOptions(only_main_content=False))

    assert "Home | About" in cleaned
    assert "alert(1)" not in cleaned


def test_cleaner_remove_tags_and_bad_selector():
    cleaned = remove_unwanted_elements(PAGE, PageOptions(only_main_content=False, remove_tags=("h1", "[[bad")))

    assert "Heading" not in cleaned
    assert "Main body text." in cleaned


def test_cleaner_only_include_tags():
    cleaned = remove_unwanted_elements(PAGE, PageOptions(only_include_tags=("h1",)))

    assert cleaned == "<div><h1>Heading</h1></div>"


def test_cleaner_empty_input():
    assert remove_unwanted_elements("", PageOptions()) == ""


def test_markdown_conversion():
    text = parse_markdown("<h1>Title</h1><p>Hello world</p>")

    assert "# Title" in text
    assert "Hello world" in text
    assert parse_markdown("   ") == ""


def test_metadata_extraction():
    metadata = extract_metadata(BeautifulSoup(PAGE, "html.parser"), "https://example.com")

    assert metadata["title"] == "Example Page"
    assert metadata["description"] == "An example"
    assert metadata["language"] == "en"
    assert metadata["ogTitle"] == "OG Example"
    assert metadata["ogLocaleAlternate"] == ["fr_FR", "de_DE"]
    assert "robots" not in metadata


def test_to_outcome_keeps_raw_and_cleaned():
    result = BackendResult(raw_content=PAGE, screenshot="s.png", status_code=201, error_message="")

    outcome = to_outcome(result, PageOptions())

    assert outcome.raw_html == PAGE
    assert "alert(1)" not in outcome.html
    assert "Main body text." in outcome.text
    assert outcome.screenshot == "s.png"
    assert outcome.status_code == 201
    assert outcome.page_error is None


def test_document_html_gated_by_options():
    outcome = AttemptOutcome(text="t" * 120, html="<p>clean</p>", raw_html=PAGE)

    doc = build_document("https://example.com", outcome, PageStatus(200), PageOptions(), ExtractorOptions())

    assert doc.content == doc.markdown == "t" * 120
    assert doc.html is None
    assert doc.raw_html is None
    assert doc.metadata["title"] == "Example Page"
    assert doc.metadata["sourceURL"] == "https://example.com"
    assert doc.metadata["pageStatusCode"] == 200
    assert doc.metadata["pageError"] is None
    assert "screenshot" not in doc.metadata


def test_document_includes_html_and_screenshot_when_asked():
    outcome = AttemptOutcome(text="t", html="<p>clean</p>", raw_html="<p>raw</p>", screenshot="shot.png")
    options = PageOptions(include_html=True, include_raw_html=True)

    doc = build_document("https://example.com", outcome, PageStatus(200), options, ExtractorOptions())

    assert doc.html == "<p>clean</p>"
    assert doc.raw_html == "<p>raw</p>"
    assert doc.metadata["screenshot"] == "shot.png"


def test_raw_html_extraction_mode_forces_raw_html():
    outcome = AttemptOutcome(text="t", html="<p>clean</p>", raw_html="<p>raw</p>")

    doc = build_document(
        "https://example.com", outcome, PageStatus(), PageOptions(),
        ExtractorOptions(mode="llm-extraction-from-raw-html"),
    )

    assert doc.raw_html == "<p>raw</p>"


def test_failed_document():
    doc = failed_document("https://example.com", PageStatus(503, "Service Unavailable"))

    assert doc.content == doc.markdown == doc.html == ""
    assert doc.metadata == {
        "sourceURL": "https://example.com",
        "pageStatusCode": 503,
        "pageError": "Service Unavailable",
    }
