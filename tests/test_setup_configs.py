"""
End-to-end tests for the setup-configs command line (setup_configs.py).
Runs the whole flow in a temporary working directory against an in-process fake of the raw-content host.
"""
import pytest
import os
import sys
from unittest.mock import patch, MagicMock

from rich.panel import Panel

import setup_configs
from fake_remote import BASE_URL, REPO_ROOT, FakeRemote
from shared_hooks import config_utils, network_utils
from shared_hooks.app_state import AppState
from shared_hooks.file_mappings import ANSIBLE_CONFIG_FILES


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test inside an empty working directory with no configuration from the host."""
    monkeypatch.chdir(tmp_path)
    config_utils._CONFIG_FROM_TOML.clear()
    for p_config in config_utils.SUPPORTED_SET_PARAMS.values():
        monkeypatch.delenv(p_config["env_var"], raising=False)
    monkeypatch.setenv("SHARED_HOOKS_BASE_URL", BASE_URL)
    monkeypatch.setattr(config_utils, "load_dotenv", MagicMock())
    yield
    config_utils._CONFIG_FROM_TOML.clear()


@pytest.fixture
def remote(monkeypatch):
    fake = FakeRemote()
    monkeypatch.setattr(network_utils, "create_http_client", lambda transport=None: fake.client())
    return fake


@pytest.fixture
def app_state():
    state = AppState(console=MagicMock(), err_console=MagicMock())
    state.prompt_session = MagicMock()
    return state


def written_files(root):
    return sorted(str(p.relative_to(root)) for p in root.rglob("*") if p.is_file())


def test_ansible_writes_four_config_files_pre_commit_config_and_ansible_cfg(remote, app_state, tmp_path):
    assert setup_configs.run(["ansible"], app_state) == 0

    assert written_files(tmp_path) == [
        ".config/ansible-lint.yml",
        ".config/flake8.conf",
        ".config/pyproject.toml",
        ".config/yamllint.yml",
        ".pre-commit-config.yaml",
        "ansible.cfg",
    ]
    assert (tmp_path / ".pre-commit-config.yaml").read_bytes() == \
        (REPO_ROOT / "templates" / "ansible" / ".pre-commit-config.yaml").read_bytes()


@pytest.mark.parametrize("project_type", ["terraform", "opentofu", "OpenTofu"])
def test_terraform_like_types_write_only_pre_commit_config(remote, app_state, tmp_path, project_type):
    assert setup_configs.run([project_type], app_state) == 0

    assert written_files(tmp_path) == [".pre-commit-config.yaml"]
    assert not (tmp_path / ".config").exists()
    assert remote.requested == [f"templates/{project_type.lower()}/.pre-commit-config.yaml"]


def test_missing_project_type_exits_1_and_writes_nothing(remote, app_state, tmp_path, capsys):
    assert setup_configs.run([], app_state) == 1

    assert written_files(tmp_path) == []
    assert remote.requested == []
    assert "usage: setup-configs" in capsys.readouterr().err
    assert "PROJECT_TYPE is required" in app_state.err_console.print.call_args.args[0]


def test_invalid_project_type_exits_1(remote, app_state, tmp_path):
    assert setup_configs.run(["pulumi"], app_state) == 1

    assert written_files(tmp_path) == []
    assert "Invalid PROJECT_TYPE 'pulumi'" in app_state.err_console.print.call_args.args[0]


def test_configs_only_without_type_fetches_ansible_config_set(remote, app_state, tmp_path):
    assert setup_configs.run(["--configs-only"], app_state) == 0

    assert written_files(tmp_path) == sorted(m.local_path for m in ANSIBLE_CONFIG_FILES)


def test_configs_only_for_terraform_has_nothing_to_do(remote, app_state, tmp_path):
    assert setup_configs.run(["terraform", "--configs-only"], app_state) == 0

    assert written_files(tmp_path) == []
    assert remote.requested == []


def test_gitignore_entry_added_once_across_runs(remote, app_state, tmp_path):
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text("*.retry\n")

    assert setup_configs.run(["ansible"], app_state) == 0
    assert setup_configs.run(["ansible"], app_state) == 0

    lines = gitignore.read_text().splitlines()
    assert lines.count(".config/") == 1
    assert lines[0] == "*.retry"


def test_gitignore_untouched_for_terraform(remote, app_state, tmp_path):
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text("*.tfstate\n")

    setup_configs.run(["terraform"], app_state)

    assert gitignore.read_text() == "*.tfstate\n"


def test_download_failure_on_second_file_aborts_run(app_state, tmp_path, monkeypatch):
    failing = FakeRemote(fail_on=[ANSIBLE_CONFIG_FILES[1].remote_name])
    monkeypatch.setattr(network_utils, "create_http_client", lambda transport=None: failing.client())
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text("*.retry\n")

    assert setup_configs.run(["ansible"], app_state) == 1

    assert failing.requested == [ANSIBLE_CONFIG_FILES[0].remote_name, ANSIBLE_CONFIG_FILES[1].remote_name]
    assert written_files(tmp_path) == [".config/ansible-lint.yml", ".gitignore"]
    assert gitignore.read_text() == "*.retry\n"
    error_line = str(app_state.err_console.print.call_args.args[0])
    assert "✗ Failed to download" in error_line and "HTTP 404" in error_line


def test_existing_ansible_cfg_is_never_modified(remote, app_state, tmp_path):
    cfg = tmp_path / "ansible.cfg"
    cfg.write_bytes(b"[defaults]\nforks = 50\n")

    assert setup_configs.run(["ansible", "--overwrite", "always"], app_state) == 0

    assert cfg.read_bytes() == b"[defaults]\nforks = 50\n"


def test_overwrite_skip_flag_keeps_existing_files(remote, app_state, tmp_path):
    existing = tmp_path / ".pre-commit-config.yaml"
    existing.write_text("repos: []\n")

    assert setup_configs.run(["terraform", "--overwrite", "skip"], app_state) == 0

    assert existing.read_text() == "repos: []\n"
    assert remote.requested == []


def test_overwrite_policy_from_environment(remote, app_state, tmp_path, monkeypatch):
    monkeypatch.setenv("SHARED_HOOKS_OVERWRITE", "prompt")
    (tmp_path / ".pre-commit-config.yaml").write_text("repos: []\n")
    app_state.prompt_session.prompt.return_value = "yes"

    assert setup_configs.run(["opentofu"], app_state) == 0

    app_state.prompt_session.prompt.assert_called_once()
    assert "tofu_fmt" in (tmp_path / ".pre-commit-config.yaml").read_text()


def test_overwrite_policy_from_toml_file(remote, app_state, tmp_path):
    (tmp_path / config_utils.CONFIG_FILE_NAME).write_text('[setup]\noverwrite = "skip"\n')
    (tmp_path / ".pre-commit-config.yaml").write_text("repos: []\n")

    assert setup_configs.run(["terraform"], app_state) == 0

    assert (tmp_path / ".pre-commit-config.yaml").read_text() == "repos: []\n"


def test_invalid_base_url_exits_1(remote, app_state, tmp_path):
    assert setup_configs.run(["ansible", "--base-url", "not-a-url"], app_state) == 1
    assert remote.requested == []


def test_base_url_flag_overrides_environment(app_state, tmp_path, monkeypatch):
    seen_urls = []
    fake = FakeRemote()

    def recording_client(transport=None):
        client = fake.client()
        client.event_hooks["request"].append(lambda request: seen_urls.append(str(request.url)))
        return client

    monkeypatch.setattr(network_utils, "create_http_client", recording_client)

    assert setup_configs.run(["terraform", "--base-url", BASE_URL + "/"], app_state) == 0
    assert seen_urls == [f"{BASE_URL}/templates/terraform/.pre-commit-config.yaml"]


def test_main_exits_with_run_result(remote, tmp_path):
    with patch.object(sys, "argv", ["setup-configs"]):
        with pytest.raises(SystemExit) as exc_info:
            setup_configs.main()
    assert exc_info.value.code == 1
    assert os.listdir(tmp_path) == []


def test_non_utf8_gitignore_does_not_abort_the_run(remote, app_state, tmp_path):
    gitignore = tmp_path / ".gitignore"
    gitignore.write_bytes(b"# caf\xe9\n*.retry\n")

    assert setup_configs.run(["ansible"], app_state) == 0

    content = gitignore.read_bytes()
    assert content.startswith(b"# caf\xe9\n*.retry\n")
    assert content.split(b"\n").count(b".config/") == 1
    assert (tmp_path / "ansible.cfg").is_file()


def test_banner_shows_the_directory_being_written(remote, app_state, tmp_path):
    setup_configs.run(["terraform"], app_state)

    panels = [c.args[0] for c in app_state.console.print.call_args_list
              if c.args and isinstance(c.args[0], Panel)]
    assert len(panels) == 1
    assert str(tmp_path.resolve()) in str(panels[0].renderable)


def test_debug_flag_prints_request_urls(remote, app_state, tmp_path):
    assert setup_configs.run(["terraform", "--debug"], app_state) == 0

    assert app_state.DEBUG is True
    lines = [str(c.args[0]) for c in app_state.console.print.call_args_list if c.args]
    assert f"DEBUG: GET {BASE_URL}/templates/terraform/.pre-commit-config.yaml" in lines


def test_main_maps_keyboard_interrupt_to_exit_130():
    with patch.object(setup_configs, "run", side_effect=KeyboardInterrupt):
        with pytest.raises(SystemExit) as exc_info:
            setup_configs.main()
    assert exc_info.value.code == 130
