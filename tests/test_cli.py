from __future__ import annotations

import importlib.util
import json
import os
import textwrap
from pathlib import Path
from types import ModuleType

import pytest

from storyhub.settings import load_environment

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "storyhub.py"

STORIES = textwrap.dedent(
    """
    def register(api, module):
        (
            api.stories_of("Button", module)
            .add("primary", lambda context: "<button>primary</button>", {"variant": "primary"})
            .add("ghost", lambda context: "<button>ghost</button>")
        )
    """
)


@pytest.fixture
def cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    """Load the CLI script against a temporary stories directory."""

    stories_dir = tmp_path / "stories"
    stories_dir.mkdir()
    (stories_dir / "button_stories.py").write_text(STORIES, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ENV_FILE", raising=False)
    monkeypatch.delenv("LOGGING_CONFIG", raising=False)
    monkeypatch.setenv("STORYHUB_STORIES_DIR", str(stories_dir))
    monkeypatch.setenv("STORYHUB_PARAMETERS", str(tmp_path / "parameters.yaml"))

    spec = importlib.util.spec_from_file_location("storyhub_cli", SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_kinds_lists_stories(cli: ModuleType, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["kinds"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Button (")
    assert lines[0].endswith("button_stories.py)")
    assert lines[1:] == ["  - primary", "  - ghost"]


def test_render_prints_story(cli: ModuleType, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["render", "Button", "primary"]) == 0

    assert capsys.readouterr().out.strip() == "<button>primary</button>"


def test_render_unknown_story_exits_with_2(
    cli: ModuleType, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["render", "Button", "missing"])

    assert excinfo.value.code == 2
    assert "is not registered" in capsys.readouterr().out


def test_extract_prints_json_index(
    cli: ModuleType, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "parameters.yaml").write_text("layout: centered\n", encoding="utf-8")

    assert cli.main(["extract"]) == 0

    index = json.loads(capsys.readouterr().out)
    assert list(index) == ["button--primary", "button--ghost"]
    assert index["button--primary"]["parameters"]["variant"] == "primary"
    assert index["button--primary"]["parameters"]["layout"] == "centered"


def test_load_environment_keeps_existing_values(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text(
        '# comment\nSTORYHUB_ONE="one"\nSTORYHUB_TWO=two\nnot a pair\n', encoding="utf-8"
    )
    environ = {"STORYHUB_TWO": "kept"}
    monkeypatch.setattr(os, "environ", environ)

    applied = load_environment([env_file])

    assert applied == {"STORYHUB_ONE": "one"}
    assert environ == {"STORYHUB_ONE": "one", "STORYHUB_TWO": "kept"}
