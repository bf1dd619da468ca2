"""Generated pages, diagram claims and the postprocessing pipeline."""

from umldoclet.html.html_file import HtmlFile, PageState
from umldoclet.html.pipeline import PostprocessReport, find_html_files, postprocess_pages
from umldoclet.html.postprocessor import Inserter, PendingInsertion
from umldoclet.html.replace import ReplaceBranch, replace_file
from umldoclet.html.uml_diagram import OverviewDiagram, PackageDiagram, UmlDiagram, create_diagrams

__all__ = [
    "HtmlFile",
    "Inserter",
    "OverviewDiagram",
    "PackageDiagram",
    "PageState",
    "PendingInsertion",
    "PostprocessReport",
    "ReplaceBranch",
    "UmlDiagram",
    "create_diagrams",
    "find_html_files",
    "postprocess_pages",
    "replace_file",
]
