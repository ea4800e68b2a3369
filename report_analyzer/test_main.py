import argparse
import json

import pytest

from report_analyzer.__main__ import main, parse_document_args


def test_parse_document_args_keeps_order():
    docs = parse_document_args(["2021=a.pdf", "2022 = https://x/b.pdf"])
    assert list(docs.items()) == [("2021", "a.pdf"), ("2022", "https://x/b.pdf")]


def test_parse_document_args_rejects_missing_reference():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_document_args(["2021="])


def test_end_to_end_with_local_pdfs(pdf_factory, tmp_path, capsys):
    first = pdf_factory([["We may improve the water network. We can do more."]], name="a.pdf")
    second = pdf_factory([["Customers could see lower bills.", "We will report in March."]], name="b.pdf")
    docs_file = tmp_path / "docs.json"
    docs_file.write_text(json.dumps({"2021": str(first), "2022": str(second)}))
    table_out = tmp_path / "table.csv"
    charts = tmp_path / "charts"

    code = main([
        "--documents-file", str(docs_file),
        "--output-dir", str(charts),
        "--table-out", str(table_out),
    ])

    assert code == 0
    assert table_out.read_text().splitlines()[0] == "document_id,word,n,p"
    for name in ("top_words", "keyword_aggregate", "word_trend"):
        assert (charts / f"{name}.png").exists()
    out = capsys.readouterr().out
    assert "Qualifier words" in out


def test_failure_exits_nonzero_with_document_and_stage(tmp_path, capsys):
    code = main(["--document", f"missing={tmp_path / 'missing.pdf'}", "--no-charts"])
    assert code == 1
    err = capsys.readouterr().err
    assert "missing" in err
    assert "extract" in err


def test_no_documents_configured(capsys):
    assert main(["--no-charts"]) == 2
