"""Tests for the ``faq-index`` command line interface."""

from __future__ import annotations

import typing as typ

import pytest

from faq_index import cli

if typ.TYPE_CHECKING:
    from conftest import FaqTree


@pytest.fixture
def in_tree(faq_tree: FaqTree, monkeypatch: pytest.MonkeyPatch) -> FaqTree:
    """Run the CLI from inside the FAQ tree so paths print relative."""
    monkeypatch.chdir(faq_tree.root)
    return faq_tree


def test_generate_writes_then_reports_up_to_date(
    in_tree: FaqTree, capsys: pytest.CaptureFixture[str]
) -> None:
    """The first run writes the index; the second finds nothing to do."""
    cli.generate(root=in_tree.root)
    assert capsys.readouterr().out == "wrote README.md\n"
    cli.generate(root=in_tree.root)
    assert capsys.readouterr().out == "README.md is up to date\n"


def test_check_exits_non_zero_with_diff_on_drift(
    in_tree: FaqTree, capsys: pytest.CaptureFixture[str]
) -> None:
    """Check mode prints a diff, exits 1, and leaves the file alone."""
    before = in_tree.read_readme()
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(check=True, root=in_tree.root)
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out.startswith("--- a/README.md\n+++ b/README.md\n")
    assert "+| 1 | [What is Angular" in captured.out
    assert captured.err == (
        "error: README.md is out of date; run `faq-index generate`\n"
    )
    assert in_tree.read_readme() == before


def test_check_passes_on_clean_index(
    in_tree: FaqTree, capsys: pytest.CaptureFixture[str]
) -> None:
    """Check mode succeeds silently apart from the status line."""
    cli.generate(root=in_tree.root)
    capsys.readouterr()
    cli.generate(check=True, root=in_tree.root)
    assert capsys.readouterr().out == "README.md is up to date\n"


def test_pipeline_errors_exit_with_message(
    in_tree: FaqTree, capsys: pytest.CaptureFixture[str]
) -> None:
    """Structural failures are reported on stderr with exit status 1."""
    in_tree.write_readme(["missing-question"])
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(root=in_tree.root)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "missing-question" in err
    assert "fragment file not found" in err


def test_config_option_selects_file(
    in_tree: FaqTree, capsys: pytest.CaptureFixture[str]
) -> None:
    """``--config`` points at a configuration outside the default name."""
    config = in_tree.root / "ci.yaml"
    config.write_text("index:\n  readme: docs/FAQ.md\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        cli.generate(root=in_tree.root, config=config)
    assert "docs/FAQ.md: index document not found" in capsys.readouterr().err


def test_undecodable_fragment_is_reported_not_raised(
    in_tree: FaqTree, capsys: pytest.CaptureFixture[str]
) -> None:
    """A fragment that is not UTF-8 exits 1 with a message naming the file."""
    fragment = in_tree.root / "questions" / "components" / "en-US.mdx"
    fragment.write_bytes(b"---\ntitle: Components\n---\n\xff\xfe bad\n")
    before = in_tree.read_readme()
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(root=in_tree.root)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "questions/components/en-US.mdx: not valid UTF-8" in err
    assert in_tree.read_readme() == before


def test_undecodable_index_is_reported_not_raised(
    in_tree: FaqTree, capsys: pytest.CaptureFixture[str]
) -> None:
    """An index document that is not UTF-8 exits 1 with a message naming it."""
    in_tree.readme.write_bytes(in_tree.read_readme().encode("utf-8") + b"\xff\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(check=True, root=in_tree.root)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "README.md: index document is not valid UTF-8" in err
