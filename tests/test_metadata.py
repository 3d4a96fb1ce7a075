from conftest import SAMPLE_MAIN

from latex_hub.metadata import extract_braced_argument, extract_document_metadata


def test_sample_document_metadata():
    metadata = extract_document_metadata(SAMPLE_MAIN)

    assert metadata.title == "Sample {Elsevier} Article"
    assert metadata.journal == "Medical Image Analysis"
    assert metadata.author_count == 1
    assert metadata.abstract == "A short abstract."
    assert metadata.keywords == "detection \\sep assets"
    assert metadata.packages == ["graphicx", "natbib"]
    assert metadata.has_abstract
    assert metadata.has_keywords
    assert metadata.has_bibliography


def test_ieee_keywords_and_journalname_fallback():
    text = (
        "\\journalname{Neural Computing}\n"
        "\\author{A}\\author{B}\n"
        "\\begin{IEEEkeywords}\nsegmentation, MRI\n\\end{IEEEkeywords}\n"
        "\\begin{thebibliography}{9}\\end{thebibliography}\n"
    )

    metadata = extract_document_metadata(text)

    assert metadata.journal == "Neural Computing"
    assert metadata.author_count == 2
    assert metadata.keywords == "segmentation, MRI"
    assert metadata.has_keywords is False
    assert metadata.has_bibliography is True
    assert metadata.title is None


def test_braced_argument_is_balanced_and_blank_is_none():
    assert extract_braced_argument("\\title{A {B {C}} D} rest}", "\\title{") == "A {B {C}} D"
    assert extract_braced_argument("\\title{   }", "\\title{") is None
    assert extract_braced_argument("nothing", "\\title{") is None
