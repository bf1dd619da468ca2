"""Unit tests for generated pages and pending insertions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import allure
import pytest

from umldoclet.core.exceptions import PostprocessingError
from umldoclet.html import HtmlFile, PageState, create_diagrams
from umldoclet.links import ExternalLinks
from tests.factories import BOTTOM_NAVBAR, create_test_app_config, make_class, make_model, make_package, page_html, write_page

if TYPE_CHECKING:
    from pathlib import Path

    from umldoclet.core.models.config_models import AppConfig
    from tests.mocks.logger_mock import MockLogger

PACKAGE_REFERENCE = '<div class="uml-diagram"><a href="package.puml">Package diagram of com.acme</a></div>'


def _diagrams(config: AppConfig) -> list:
    model = make_model(make_package("com.acme", make_class("com.acme.Widget")))
    return create_diagrams(config, model, ExternalLinks())


def _staging_leftovers(directory: Path) -> list[Path]:
    return list(directory.rglob("*.tmp"))


@allure.epic("umldoclet")
@allure.feature("Postprocessing")
@pytest.mark.unit
class TestHtmlFileProcess:
    """Tests for HtmlFile.process."""

    @allure.story("Skip")
    @allure.title("Unclaimed page stays byte-identical")
    def test_unclaimed_page_untouched(self, app_config: AppConfig, destination: Path, console_logger: MockLogger) -> None:
        """A page claimed by no diagram is skipped without touching the file."""
        page_path = write_page(destination / "com" / "acme" / "Widget.html", page_html("Widget"))
        before = page_path.read_bytes()
        mtime = page_path.stat().st_mtime_ns

        state = HtmlFile(app_config, page_path, console_logger).process(_diagrams(app_config))

        assert state is PageState.SKIPPED
        assert page_path.read_bytes() == before
        assert page_path.stat().st_mtime_ns == mtime
        assert any("Skipping" in message for message in console_logger.debug_messages)

    @allure.story("Replace")
    @allure.title("Claimed page gets exactly one reference at the anchor")
    def test_claimed_page_replaced(self, app_config: AppConfig, destination: Path, console_logger: MockLogger) -> None:
        """The page equals the original plus one reference line before the navbar."""
        original = page_html("com.acme")
        page_path = write_page(destination / "com" / "acme" / "package-summary.html", original)

        with allure.step("Process the package summary"):
            state = HtmlFile(app_config, page_path, console_logger).process(_diagrams(app_config))

        with allure.step("Verify content and cleanup"):
            assert state is PageState.REPLACED
            expected = original.replace(BOTTOM_NAVBAR, f"{PACKAGE_REFERENCE}\n{BOTTOM_NAVBAR}")
            assert page_path.read_text(encoding="utf-8") == expected
            assert page_path.read_text(encoding="utf-8").count("uml-diagram") == 1
            assert _staging_leftovers(destination) == []
            assert any("Add UML to" in message for message in console_logger.info_messages)

    def test_crlf_page_keeps_line_endings(self, app_config: AppConfig, destination: Path, console_logger: MockLogger) -> None:
        """CRLF pages stay CRLF, including the inserted line."""
        original = page_html("com.acme", newline="\r\n")
        page_path = write_page(destination / "com" / "acme" / "package-summary.html", original)

        HtmlFile(app_config, page_path, console_logger).process(_diagrams(app_config))

        expected = original.replace(BOTTOM_NAVBAR, f"{PACKAGE_REFERENCE}\r\n{BOTTOM_NAVBAR}")
        assert page_path.read_bytes() == expected.encode("utf-8")

    def test_claimed_page_without_anchor_skipped(self, app_config: AppConfig, destination: Path, console_logger: MockLogger) -> None:
        """A claimed page without insertion point is left as it was."""
        page_path = write_page(destination / "com" / "acme" / "package-summary.html", "<html><p>fragment</p></html>\n")
        before = page_path.read_bytes()

        state = HtmlFile(app_config, page_path, console_logger).process(_diagrams(app_config))

        assert state is PageState.SKIPPED
        assert page_path.read_bytes() == before
        assert _staging_leftovers(destination) == []

    def test_image_reference(self, destination: Path, console_logger: MockLogger) -> None:
        """With an image format the page embeds the image instead of linking the source."""
        config = create_test_app_config(destination_directory=str(destination), image_format="svg")
        page_path = write_page(destination / "com" / "acme" / "package-summary.html", page_html("com.acme"))

        HtmlFile(config, page_path, console_logger).process(_diagrams(config))

        content = page_path.read_text(encoding="utf-8")
        assert '<div class="uml-diagram"><img src="package.svg" alt="Package diagram of com.acme" title="Package diagram of com.acme"></div>' in content

    def test_configured_staging_directory(self, destination: Path, tmp_path: Path, console_logger: MockLogger) -> None:
        """The staging copy goes to the configured directory and is gone afterwards."""
        staging = tmp_path / "staging"
        staging.mkdir()
        config = create_test_app_config(destination_directory=str(destination), staging_directory=str(staging))
        page_path = write_page(destination / "com" / "acme" / "package-summary.html", page_html("com.acme"))

        assert HtmlFile(config, page_path, console_logger).process(_diagrams(config)) is PageState.REPLACED
        assert list(staging.iterdir()) == []


@allure.epic("umldoclet")
@allure.feature("Postprocessing")
@pytest.mark.unit
class TestHtmlFileFailures:
    """Tests for fatal page failures."""

    @allure.story("Fatal failures")
    @allure.title("Unreadable page aborts the run")
    def test_undecodable_page(self, app_config: AppConfig, destination: Path, console_logger: MockLogger) -> None:
        """A page that cannot be decoded is a fatal postprocessing error."""
        page_path = destination / "com" / "acme" / "package-summary.html"
        page_path.parent.mkdir(parents=True)
        page_path.write_bytes(b"<html>\xff\xfe</body></html>\n")

        with pytest.raises(PostprocessingError, match="I/O exception postprocessing") as excinfo:
            HtmlFile(app_config, page_path, console_logger).process(_diagrams(app_config))
        assert excinfo.value.path == str(page_path.resolve())

    def test_missing_staging_directory(self, destination: Path, tmp_path: Path, console_logger: MockLogger) -> None:
        """A staging directory that does not exist is fatal and leaves the page alone."""
        config = create_test_app_config(destination_directory=str(destination), staging_directory=str(tmp_path / "absent"))
        page_path = write_page(destination / "com" / "acme" / "package-summary.html", page_html("com.acme"))
        before = page_path.read_bytes()

        with pytest.raises(PostprocessingError, match="Cannot create staging file"):
            HtmlFile(config, page_path, console_logger).process(_diagrams(config))
        assert page_path.read_bytes() == before

    def test_unencodable_reference_cleans_staging(self, destination: Path, console_logger: MockLogger) -> None:
        """A write failure removes the partial staging file."""
        config = create_test_app_config(destination_directory=str(destination), html_encoding="ascii")
        model = make_model(make_package("com.äcme", make_class("com.äcme.Widget")))
        page_path = write_page(destination / "com" / "äcme" / "package-summary.html", page_html("x"), encoding="ascii")
        before = page_path.read_bytes()

        with pytest.raises(PostprocessingError, match="Cannot write staging file"):
            HtmlFile(config, page_path, console_logger).process(create_diagrams(config, model, ExternalLinks()))
        assert page_path.read_bytes() == before
        assert _staging_leftovers(destination) == []

    def test_pending_insertion_single_use(self, app_config: AppConfig, destination: Path, console_logger: MockLogger) -> None:
        """A pending insertion cannot be applied twice."""
        page = HtmlFile(app_config, write_page(destination / "com" / "acme" / "package-summary.html", page_html()), console_logger)
        insertion = _diagrams(app_config)[1].claim(page)
        assert insertion is not None

        assert insertion.apply() is PageState.REPLACED
        with pytest.raises(RuntimeError, match="already applied"):
            insertion.apply()


@pytest.mark.unit
class TestHtmlFileBasics:
    """Tests for construction and helpers."""

    def test_path_normalized(self, app_config: AppConfig, destination: Path, console_logger: MockLogger) -> None:
        """Paths with dot segments compare equal after normalization."""
        (destination / "com").mkdir()
        page = HtmlFile(app_config, destination / "com" / ".." / "overview-summary.html", console_logger)
        assert page.path == (destination / "overview-summary.html").resolve()

    def test_none_rejected(self, app_config: AppConfig, console_logger: MockLogger) -> None:
        """Should reject missing configuration or path."""
        with pytest.raises(ValueError, match="HTML file"):
            HtmlFile(app_config, None, console_logger)  # type: ignore[arg-type]

    def test_is_html_file(self, destination: Path) -> None:
        """Only existing .html files qualify."""
        page = write_page(destination / "index.html", "<html></html>")
        other = write_page(destination / "package-list", "com.acme\n")
        assert HtmlFile.is_html_file(page)
        assert not HtmlFile.is_html_file(other)
        assert not HtmlFile.is_html_file(destination / "missing.html")
        assert not HtmlFile.is_html_file(None)
