from __future__ import annotations

from pathlib import Path

from sheet2site.cli import main as cli_main


def _snapshot(root: Path) -> dict[str, bytes]:
    files = {}
    for sub in ("content", "static"):
        for p in sorted((root / sub).rglob("*")):
            if p.is_file():
                files[str(p.relative_to(root))] = p.read_bytes()
    files["hugo.toml"] = (root / "hugo.toml").read_bytes()
    return files


def test_run_success_end_to_end(temp_workdir: Path, sample_env, capsys):
    code = cli_main([])
    captured = capsys.readouterr()
    assert code == 0
    assert "SUMMARY posts=2 skipped_rows=2 services=2 projects=2 contact_fields=2 images=2 image_failures=1" in captured.out
    assert "INFO Content generation complete!" in captured.out
    # 行単位の警告は stderr
    assert "WARN Skipping row 3 with missing title or content" in captured.err
    assert "WARN Invalid Google Drive file URL" in captured.err
    assert (temp_workdir / "content" / "hello-world.md").exists()
    assert not (temp_workdir / "temp").exists()


def test_rerun_is_byte_identical(temp_workdir: Path, sample_env, capsys):
    # every post row carries a date, so nothing depends on the clock
    assert cli_main([]) == 0
    first = _snapshot(temp_workdir)
    assert cli_main([]) == 0
    second = _snapshot(temp_workdir)
    assert first == second


def test_existing_hugo_config_is_preserved(temp_workdir: Path, sample_env, capsys):
    original_head = "baseURL = 'https://mine.example/'\ntitle = 'Mine'\n# keep this comment\n"
    (temp_workdir / "hugo.toml").write_text(
        original_head + "\n[params]\n  old = true\n\n[markup]\n  [markup.highlight]\n    style = 'dracula'\n",
        encoding="utf-8",
    )
    assert cli_main([]) == 0
    text = (temp_workdir / "hugo.toml").read_text(encoding="utf-8")
    assert text.startswith(original_head + "\n[params]\n")
    assert "old = true" not in text
    assert text.endswith("[markup]\n  [markup.highlight]\n    style = 'dracula'\n")
