import io
import logging

from score_annotator import core
from score_annotator.annotations import AnnotationSink
from score_annotator.config import ActionInputs
from score_annotator.diff import DiffError
from score_annotator.models import Assessment


def _sink():
    return AnnotationSink(io.StringIO())


def test_annotate_requirements(tmp_path, fake_client, lookup_error):
    manifest = tmp_path / "requirements.txt"
    manifest.write_text(
        "flask==2.0.1\nmy@pkg\n# comment\nghost\nbroken\nsix\n", encoding="utf-8"
    )
    client = fake_client(
        {
            "ghost": None,
            "broken": lookup_error("Request failed with status code 500"),
            "six": Assessment("Legacy", "Moderate Risk"),
        }
    )
    sink = _sink()

    result = core.annotate_manifest(
        manifest, "pip", client=client, sink=sink, display_path="requirements.txt"
    )

    assert [call[0] for call in client.calls] == ["flask", "ghost", "broken", "six"]
    assert [(a["line"], a["severity"], a["message"]) for a in result["annotations"]] == [
        (
            1,
            "notice",
            "Package flask (pip): (Maturity: Mature, Health: Healthy). This package is "
            "likely to enhance stability and maintainability with minimal risks.",
        ),
        (2, "error", "Invalid package name: my@pkg"),
        (4, "notice", "Package ghost (pip) not found."),
        (
            5,
            "error",
            "Error looking up package broken (pip): Request failed with status code 500",
        ),
        (
            6,
            "warning",
            "Package six (pip): (Maturity: Legacy, Health: Moderate Risk). This package "
            "is legacy and may not be stable, consider alternatives.",
        ),
    ]
    assert result["dependencies"] == 5
    assert sink.stream.getvalue().splitlines()[1] == (
        "::error file=requirements.txt,line=2,endLine=2::Invalid package name: my@pkg"
    )


def test_conda_channels_reach_the_scorer(tmp_path, fake_client):
    manifest = tmp_path / "environment.yml"
    manifest.write_text(
        "channels:\n  - conda-forge\n  - bioconda\ndependencies:\n  - samtools\n"
        "  - pip:\n    - flask\n",
        encoding="utf-8",
    )
    client = fake_client()

    core.annotate_manifest(manifest, "conda", client=client, sink=_sink())

    assert client.calls == [("samtools", "conda", "bioconda"), ("flask", "pip", None)]


def test_modified_lines_filter(tmp_path, fake_client):
    manifest = tmp_path / "requirements.txt"
    manifest.write_text("flask\nrequests\nnumpy\n", encoding="utf-8")
    client = fake_client()

    result = core.annotate_manifest(
        manifest, "pip", client=client, sink=_sink(), modified_lines={2}
    )

    assert client.calls == [("requests", "pip", None)]
    assert result["dependencies"] == 1


def test_empty_manifest(tmp_path, fake_client):
    manifest = tmp_path / "requirements.txt"
    manifest.write_text("", encoding="utf-8")

    result = core.annotate_manifest(manifest, "pip", client=fake_client(), sink=_sink())

    assert result["dependencies"] == 0
    assert result["annotations"] == []


def test_invalid_yaml_is_parsed_best_effort(tmp_path, fake_client, caplog):
    manifest = tmp_path / "environment.yml"
    manifest.write_text("dependencies: [numpy, pandas\n", encoding="utf-8")
    caplog.set_level(logging.WARNING)

    result = core.annotate_manifest(manifest, "conda", client=fake_client(), sink=_sink())

    assert result["dependencies"] == 0
    assert "not valid YAML" in caplog.text


def test_run_writes_step_summary(tmp_path, fake_client):
    (tmp_path / "requirements.txt").write_text("flask\n", encoding="utf-8")
    summary = tmp_path / "summary.md"

    report = core.run(
        ActionInputs(ecosystem="pip"),
        sink=_sink(),
        root=tmp_path,
        client=fake_client(),
        env={"GITHUB_STEP_SUMMARY": str(summary)},
    )

    assert report["totals"]["dependencies"] == 1
    assert report["manifests"][0]["path"] == "requirements.txt"
    assert "# Package Score Summary" in summary.read_text(encoding="utf-8")


def test_run_modified_only(tmp_path, fake_client, monkeypatch):
    (tmp_path / "requirements.txt").write_text("flask\nrequests\n", encoding="utf-8")
    seen = []

    def fake_modified_lines(path, base_ref, cwd=None):
        seen.append((path, base_ref, cwd))
        return {2}

    monkeypatch.setattr(core.diff_mod, "modified_lines", fake_modified_lines)
    client = fake_client()
    sink = _sink()

    core.run(
        ActionInputs(ecosystem="pip", annotate_modified_only=True),
        sink=sink,
        root=tmp_path,
        client=client,
        env={"GITHUB_BASE_REF": "main"},
    )

    assert seen == [("requirements.txt", "main", tmp_path)]
    assert client.calls == [("requests", "pip", None)]
    assert not sink.failed


def test_run_modified_only_without_base_ref(tmp_path, fake_client):
    (tmp_path / "requirements.txt").write_text("flask\nrequests\n", encoding="utf-8")
    client = fake_client()
    sink = _sink()

    core.run(
        ActionInputs(ecosystem="pip", annotate_modified_only=True),
        sink=sink,
        root=tmp_path,
        client=client,
        env={},
    )

    assert sink.failed
    assert "Base branch (baseRef) is missing" in sink.stream.getvalue()
    assert len(client.calls) == 2


def test_run_diff_failure_annotates_everything(tmp_path, fake_client, monkeypatch):
    (tmp_path / "requirements.txt").write_text("flask\nrequests\n", encoding="utf-8")

    def failing(path, base_ref, cwd=None):
        raise DiffError("fatal: couldn't find remote ref main")

    monkeypatch.setattr(core.diff_mod, "modified_lines", failing)
    client = fake_client()
    sink = _sink()

    core.run(
        ActionInputs(ecosystem="pip", annotate_modified_only=True, base_ref="main"),
        sink=sink,
        root=tmp_path,
        client=client,
        env={},
    )

    assert sink.failed
    assert "Error getting modified lines from commit diff" in sink.stream.getvalue()
    assert len(client.calls) == 2


def test_run_with_no_changed_lines_annotates_nothing(tmp_path, fake_client, monkeypatch):
    (tmp_path / "requirements.txt").write_text("flask\n", encoding="utf-8")
    monkeypatch.setattr(core.diff_mod, "modified_lines", lambda path, base_ref, cwd=None: set())
    client = fake_client()

    report = core.run(
        ActionInputs(ecosystem="pip", annotate_modified_only=True, base_ref="main"),
        sink=_sink(),
        root=tmp_path,
        client=client,
        env={},
    )

    assert client.calls == []
    assert report["totals"]["dependencies"] == 0


def test_byte_order_mark_does_not_invalidate_first_package(tmp_path, fake_client):
    manifest = tmp_path / "requirements.txt"
    manifest.write_bytes(b"\xef\xbb\xbfflask==2.0\n")

    result = core.annotate_manifest(manifest, "pip", client=fake_client(), sink=_sink())

    assert [(a["line"], a["severity"], a["package"]) for a in result["annotations"]] == [
        (1, "notice", "flask")
    ]
