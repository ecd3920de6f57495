from score_annotator.report import aggregate
from score_annotator.summary import render_summary


def _manifest():
    return {
        "path": "requirements.txt",
        "ecosystem": "pip",
        "dependencies": 3,
        "annotations": [
            {"severity": "notice", "message": "ok", "line": 1, "package": "flask", "ecosystem": "pip"},
            {"severity": "error", "message": "Invalid package name: my@pkg", "line": 2, "package": "my@pkg", "ecosystem": "pip"},
            {"severity": "warning", "message": "a | b", "line": 3, "package": "six", "ecosystem": "pip"},
        ],
    }


def test_aggregate_totals():
    report = aggregate([_manifest()])

    assert report["version"] == "1"
    assert report["hasErrors"] is True
    assert report["totals"] == {
        "manifests": 1,
        "dependencies": 3,
        "notice": 1,
        "warning": 1,
        "error": 1,
    }


def test_aggregate_without_errors():
    report = aggregate([{"path": "environment.yml", "dependencies": 0, "annotations": []}])

    assert report["hasErrors"] is False
    assert report["totals"]["dependencies"] == 0


def test_render_summary_rows():
    text = render_summary(aggregate([_manifest()]))

    assert text.startswith("# Package Score Summary\n")
    assert "Dependencies: 3 | Notices: 1 | Warnings: 1 | Errors: 1" in text
    assert "| requirements.txt | 2 | my@pkg | pip | error | Invalid package name: my@pkg |" in text
    assert "a \\| b" in text


def test_render_summary_empty():
    text = render_summary(aggregate([]))

    assert "(no manifests scanned)" in text
    empty_manifest = render_summary(
        aggregate([{"path": "environment.yml", "dependencies": 0, "annotations": []}])
    )
    assert "| environment.yml | n/a | No dependencies annotated |" in empty_manifest
